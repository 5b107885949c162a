import os
import logging
from typing import Optional
from dotenv import load_dotenv

from matchup.logic import MatchupSession, ScoringVariant, SelectionDefault
from matchup.logic.engine import RecommendationEngine

load_dotenv()


def _int_setting(name: str, default: int) -> int:
    value = os.getenv(name, str(default))
    try:
        return int(value)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {value!r}")


def _float_setting(name: str, default: float) -> float:
    value = os.getenv(name, str(default))
    try:
        return float(value)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {value!r}")


SCHOOLS_SOURCE = os.getenv("SCHOOLS_SOURCE", "data/schools.json")
COMBINATIONS_SOURCE = os.getenv("COMBINATIONS_SOURCE") or None
SCORING_VARIANT = os.getenv("SCORING_VARIANT", "auto").lower()
DEFAULT_SELECTION = os.getenv("DEFAULT_SELECTION", "all").lower()
INCLUDE_SELF_MATCHUP = os.getenv("INCLUDE_SELF_MATCHUP", "true").lower() in ("1", "true", "yes", "on")
RANDOM_SELECTION_MIN = _int_setting("RANDOM_SELECTION_MIN", 3)
RANDOM_SELECTION_MAX = _int_setting("RANDOM_SELECTION_MAX", 8)
WEAKNESS_LIMIT = _int_setting("WEAKNESS_LIMIT", 2)
SOURCE_TIMEOUT_SECONDS = _float_setting("SOURCE_TIMEOUT_SECONDS", 10)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

if SCORING_VARIANT not in ("auto", "matchup", "score_table"):
    raise RuntimeError(f"SCORING_VARIANT must be auto, matchup or score_table, got {SCORING_VARIANT!r}")
if DEFAULT_SELECTION not in ("all", "none"):
    raise RuntimeError(f"DEFAULT_SELECTION must be all or none, got {DEFAULT_SELECTION!r}")
if RANDOM_SELECTION_MIN < 0 or RANDOM_SELECTION_MAX < RANDOM_SELECTION_MIN:
    raise RuntimeError(
        f"RANDOM_SELECTION_MIN/MAX must satisfy 0 <= min <= max, got {RANDOM_SELECTION_MIN}..{RANDOM_SELECTION_MAX}"
    )
if WEAKNESS_LIMIT < 0:
    raise RuntimeError(f"WEAKNESS_LIMIT must not be negative, got {WEAKNESS_LIMIT}")
if SOURCE_TIMEOUT_SECONDS <= 0:
    raise RuntimeError(f"SOURCE_TIMEOUT_SECONDS must be positive, got {SOURCE_TIMEOUT_SECONDS}")

_session: Optional[MatchupSession] = None


def open_session() -> MatchupSession:
    """Load the catalog from the configured sources and start a fresh session."""
    return MatchupSession.open(
        SCHOOLS_SOURCE,
        combinations_source=COMBINATIONS_SOURCE,
        variant=None if SCORING_VARIANT == "auto" else ScoringVariant(SCORING_VARIANT),
        timeout=SOURCE_TIMEOUT_SECONDS,
        engine=RecommendationEngine(
            include_self=INCLUDE_SELF_MATCHUP,
            weakness_limit=WEAKNESS_LIMIT,
        ),
        default=SelectionDefault(DEFAULT_SELECTION),
        random_min=RANDOM_SELECTION_MIN,
        random_max=RANDOM_SELECTION_MAX,
    )


def init_session() -> MatchupSession:
    global _session
    _session = open_session()
    if _session.is_ready:
        logging.info(f"Matchup session ready with {_session.catalog.size} schools")
    return _session


def get_session() -> MatchupSession:
    """FastAPI dependency returning the process-wide session, created on first use."""
    if _session is None:
        return init_session()
    return _session
