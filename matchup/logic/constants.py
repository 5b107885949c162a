"""
Matchup Engine Constants

Defines default display values, selection bounds, and enums used by the scoring engine.
All values are deterministic; nothing here is learned or tuned at runtime.
"""

from enum import Enum

# =============================================================================
# DISPLAY DEFAULTS
# =============================================================================

# Substituted when a school record omits its display metadata
DEFAULT_COLOR = "#5d4a2e"
DEFAULT_ICON = "?"

# =============================================================================
# RAW RECORD FIELD NAMES
# =============================================================================

FIELD_ID = "id"
FIELD_COLOR = "color"
FIELD_ICON = "icon"
FIELD_ADVANTAGEOUS = "AdvantageousMatchingGenres"
FIELD_DISADVANTAGEOUS = "DisadvantageousEncounteredGenres"
FIELD_SCORE = "score"
FIELD_MAIN_GENRE = "mainGenre"
FIELD_SUB_GENRE = "subGenre"

# =============================================================================
# ENUMS
# =============================================================================

class ScoringVariant(str, Enum):
    """Relation encoding used to score a catalog."""
    MATCHUP = "matchup"          # advantage / disadvantage id lists
    SCORE_TABLE = "score_table"  # signed per-target integer table


class SelectionDefault(str, Enum):
    """State a selection returns to on startup and on reset."""
    ALL = "all"
    NONE = "none"


class ScoreTone(str, Enum):
    """Sign of a score, used by clients to color it."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"

# =============================================================================
# SELECTION & RANKING CONFIGURATION
# =============================================================================

RANDOM_SELECTION_MIN = 3
RANDOM_SELECTION_MAX = 8

# Maximum number of weakness entries listed per recommendation
WEAKNESS_LIMIT = 2

EMPTY_SELECTION_MESSAGE = "Select at least one school to start the analysis."
LOAD_ERROR_MESSAGE = (
    "Unable to read school data. Check that the schools file exists and is valid JSON."
)

ENGINE_VERSION = "1.0.0"
