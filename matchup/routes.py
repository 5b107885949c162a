"""
Matchup API Routes

Exposes the matchup session via REST API.
Every selection command returns the recomputed recommendations.
"""

from typing import Optional, List, Dict, Any
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from store import get_session
from .logic.session import MatchupSession
from .logic.contracts import RecommendationOutput
from .logic.errors import CatalogUnavailableError, SelectionBoundsError, UnknownSchoolError
from .logic.constants import ENGINE_VERSION


router = APIRouter(prefix="/matchup", tags=["matchup"])


# =============================================================================
# REQUEST/RESPONSE SCHEMAS
# =============================================================================

class SetAllRequest(BaseModel):
    """Request body for switching every school on or off."""
    active: bool = Field(..., description="True switches every school on, False switches all off")


class RandomSelectionRequest(BaseModel):
    """Request body for random selection; omitted bounds use the configured ones."""
    min: Optional[int] = Field(default=None, ge=0, description="Smallest subset size")
    max: Optional[int] = Field(default=None, ge=0, description="Largest subset size")


# =============================================================================
# HELPERS
# =============================================================================

def _unavailable(session: MatchupSession) -> JSONResponse:
    return JSONResponse(
        status_code=503,
        content={"error": session.load_error, "controls_enabled": False},
    )


def _serialize_output(output: RecommendationOutput) -> Dict[str, Any]:
    """Convert RecommendationOutput to a JSON-serializable dict."""
    return {
        "summary": {
            "selected_count": output.selected_count,
            "total_count": output.total_count,
            "best_school": output.best_school,
            "best_score": output.best_score,
            "best_score_tone": output.best_score_tone,
            "empty_selection": output.empty_selection,
            "updated_at": output.updated_at.isoformat() if output.updated_at else None,
            "processing_time_ms": output.processing_time_ms,
        },
        "recommendations": [r.model_dump(mode="json") for r in output.recommendations],
        "variant": output.variant,
        "warnings": output.warnings,
        "engine_version": output.engine_version,
    }


def _run_command(session: MatchupSession, command, *args):
    try:
        command(*args)
    except CatalogUnavailableError:
        return _unavailable(session)
    except UnknownSchoolError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SelectionBoundsError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _serialize_output(session.recommendations())


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get("/catalog", summary="List schools with their active state")
def get_catalog(session: MatchupSession = Depends(get_session)):
    """
    List every school in catalog order with its current active flag.

    **Response:**
    - `schools`: id, color, icon and `active` per school
    - `selected_count` / `total_count`: selection summary
    - `all_active`: drives the toggle-all control label
    """
    if not session.is_ready:
        return _unavailable(session)

    selection = session.selection
    schools: List[Dict[str, Any]] = [
        {
            "id": school.id,
            "color": school.color,
            "icon": school.icon,
            "active": selection.is_active(school.id),
        }
        for school in session.catalog.schools
    ]
    return {
        "schools": schools,
        "selected_count": selection.size,
        "total_count": session.catalog.size,
        "all_active": selection.all_active,
        "controls_enabled": session.controls_enabled,
        "variant": session.catalog.variant,
    }


@router.get("/recommendations", summary="Get ranked recommendations")
def get_recommendations(session: MatchupSession = Depends(get_session)):
    """Ranked recommendations for the current selection."""
    if not session.is_ready:
        return _unavailable(session)
    return _serialize_output(session.recommendations())


@router.post("/selection/toggle/{school_id}", summary="Toggle one school")
def toggle_school(school_id: str, session: MatchupSession = Depends(get_session)):
    return _run_command(session, session.toggle_one, school_id)


@router.post("/selection/all", summary="Switch every school on or off")
def set_all(request: SetAllRequest, session: MatchupSession = Depends(get_session)):
    return _run_command(session, session.set_all, request.active)


@router.post("/selection/toggle-all", summary="Toggle all schools")
def toggle_all(session: MatchupSession = Depends(get_session)):
    return _run_command(session, session.toggle_all)


@router.post("/selection/random", summary="Select a random subset")
def select_random(
    request: Optional[RandomSelectionRequest] = None,
    session: MatchupSession = Depends(get_session)
):
    """
    Activate a random subset of schools.

    **Request Body (optional):**
    - `min` / `max`: subset size bounds, clamped to the catalog size
    """
    request = request or RandomSelectionRequest()
    return _run_command(session, session.select_random_subset, request.min, request.max)


@router.post("/selection/reset", summary="Reset selection to default")
def reset_selection(session: MatchupSession = Depends(get_session)):
    return _run_command(session, session.reset_to_default)


# =============================================================================
# HEALTH CHECK
# =============================================================================

@router.get("/health", summary="Matchup engine health check")
def health_check(session: MatchupSession = Depends(get_session)):
    """Check if the matchup engine is operational."""
    return {
        "status": "ok" if session.is_ready else "degraded",
        "engine": "matchup",
        "version": ENGINE_VERSION,
        "catalog_loaded": session.is_ready,
    }
