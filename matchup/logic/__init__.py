"""
Matchup Logic Module

Provides the deterministic scoring engine for school matchup recommendations.
"""

from .contracts import (
    School,
    Combination,
    Catalog,
    RecommendationRecord,
    RecommendationOutput,
    WeaknessEntry,
    PairScore,
    ScoredSchool,
)
from .catalog_loader import load_catalog
from .selection import Selection
from .engine import RecommendationEngine, rank
from .session import MatchupSession
from .errors import (
    MatchupError,
    LoadError,
    UnknownSchoolError,
    CatalogUnavailableError,
    SelectionBoundsError,
)
from .constants import ScoringVariant, SelectionDefault, ScoreTone

__all__ = [
    # Main engine
    "RecommendationEngine",
    "rank",
    "MatchupSession",
    "load_catalog",
    "Selection",

    # Contracts
    "School",
    "Combination",
    "Catalog",
    "RecommendationRecord",
    "RecommendationOutput",
    "WeaknessEntry",
    "PairScore",
    "ScoredSchool",

    # Errors
    "MatchupError",
    "LoadError",
    "UnknownSchoolError",
    "CatalogUnavailableError",
    "SelectionBoundsError",

    # Enums
    "ScoringVariant",
    "SelectionDefault",
    "ScoreTone",
]
