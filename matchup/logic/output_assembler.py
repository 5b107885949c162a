"""
Output Assembler

Transforms internal scoring data into the final RecommendationOutput contract
and computes the summary panel values (counts, best school, score tone).
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from .contracts import (
    Catalog,
    ScoredSchool,
    RecommendationRecord,
    RecommendationOutput,
)
from .selection import Selection
from .constants import ScoreTone, EMPTY_SELECTION_MESSAGE

logger = logging.getLogger(__name__)


def score_tone(score: int) -> ScoreTone:
    if score > 0:
        return ScoreTone.POSITIVE
    if score < 0:
        return ScoreTone.NEGATIVE
    return ScoreTone.NEUTRAL


def assemble_record(
    scored: ScoredSchool,
    rank: int
) -> RecommendationRecord:
    """
    Convert a ScoredSchool into a RecommendationRecord.

    Args:
        scored: The scored school
        rank: 1-based ranking position

    Returns:
        RecommendationRecord object
    """
    school = scored.school
    return RecommendationRecord(
        id=school.id,
        color=school.color,
        icon=school.icon,
        score=scored.score,
        score_tone=score_tone(scored.score),
        advantage_matches=list(scored.advantage_matches),
        disadvantage_matches=list(scored.disadvantage_matches),
        combinations=list(scored.combinations),
        weakness=list(scored.weakness),
        rank=rank,
    )


def assemble_output(
    catalog: Catalog,
    selection: Selection,
    ranked: List[ScoredSchool],
    processing_time_ms: Optional[float] = None
) -> RecommendationOutput:
    """
    Assemble the final RecommendationOutput.

    Args:
        catalog: Catalog the ranking was computed from
        selection: Selection snapshot used for scoring
        ranked: Ranked scored schools
        processing_time_ms: Processing time in milliseconds

    Returns:
        Complete RecommendationOutput
    """
    records = [assemble_record(scored, rank) for rank, scored in enumerate(ranked, start=1)]

    warnings: List[str] = []
    if selection.is_empty:
        warnings.append(EMPTY_SELECTION_MESSAGE)

    best = records[0] if records else None
    best_score = best.score if best else 0

    output = RecommendationOutput(
        recommendations=records,
        selected_count=selection.size,
        total_count=catalog.size,
        best_school=best.id if best else None,
        best_score=best_score,
        best_score_tone=score_tone(best_score),
        empty_selection=selection.is_empty,
        variant=catalog.variant,
        processing_time_ms=processing_time_ms,
        updated_at=datetime.now(timezone.utc),
        warnings=warnings,
    )

    logger.debug(
        f"Assembled {len(records)} recommendations "
        f"({selection.size}/{catalog.size} selected, best={output.best_school})"
    )
    return output


def empty_output(catalog: Catalog, selection: Selection) -> RecommendationOutput:
    """Placeholder output for an empty selection when nothing can be ranked."""
    return assemble_output(catalog, selection, ranked=[], processing_time_ms=0.0)
