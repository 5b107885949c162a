"""
Data Contracts for the Matchup Scoring Engine

Defines Pydantic models for the Catalog (input) and RecommendationOutput (output).
These contracts are the API boundary for the scoring engine.
"""

from datetime import datetime
from typing import List, Optional, Dict
from pydantic import BaseModel, Field

from .constants import (
    DEFAULT_COLOR,
    DEFAULT_ICON,
    ENGINE_VERSION,
    ScoringVariant,
    ScoreTone,
)


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

class School(BaseModel):
    """
    A catalog entry.
    The id doubles as the display name; color and icon are opaque to scoring.
    """
    id: str
    color: str = DEFAULT_COLOR
    icon: str = DEFAULT_ICON

    # Matchup-list encoding
    advantageous_matches: List[str] = Field(default_factory=list)
    disadvantageous_matches: List[str] = Field(default_factory=list)

    # Score-table encoding (signed, may be asymmetric)
    score: Optional[Dict[str, int]] = None

    class Config:
        frozen = True


class Combination(BaseModel):
    """Directional pairing: sub_genre is a recommended companion of main_genre."""
    main_genre: str
    sub_genre: str

    class Config:
        frozen = True


class Catalog(BaseModel):
    """
    Immutable set of schools and declared combinations, loaded once.
    """
    schools: List[School] = Field(default_factory=list)
    combinations: List[Combination] = Field(default_factory=list)
    variant: ScoringVariant = ScoringVariant.MATCHUP
    source: Optional[str] = None

    class Config:
        frozen = True

    @property
    def ids(self) -> List[str]:
        return [school.id for school in self.schools]

    @property
    def size(self) -> int:
        return len(self.schools)

    def get(self, school_id: str) -> Optional[School]:
        for school in self.schools:
            if school.id == school_id:
                return school
        return None

    def __contains__(self, school_id: object) -> bool:
        return any(school.id == school_id for school in self.schools)

    def combinations_for(self, main_genre: str) -> List[Combination]:
        """Combinations declared for main_genre, in declaration order."""
        return [c for c in self.combinations if c.main_genre == main_genre]


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class WeaknessEntry(BaseModel):
    """A selected school that counters the recommended one."""
    id: str
    score: int


class RecommendationRecord(BaseModel):
    """
    Single ranked recommendation with its contributing ids.
    """
    # Identity / display
    id: str
    color: str
    icon: str

    # Scoring
    score: int
    score_tone: ScoreTone = ScoreTone.NEUTRAL

    # Explainability
    advantage_matches: List[str] = Field(default_factory=list)
    disadvantage_matches: List[str] = Field(default_factory=list)
    combinations: List[str] = Field(default_factory=list)
    weakness: List[WeaknessEntry] = Field(default_factory=list)

    # Ranking metadata
    rank: int = 0

    class Config:
        use_enum_values = True


class RecommendationOutput(BaseModel):
    """
    Output contract for the scoring engine.
    Contains ranked recommendations with summary statistics.
    """
    recommendations: List[RecommendationRecord] = Field(default_factory=list)

    # Summary Statistics
    selected_count: int = 0
    total_count: int = 0
    best_school: Optional[str] = None
    best_score: int = 0
    best_score_tone: ScoreTone = ScoreTone.NEUTRAL
    empty_selection: bool = False

    # Processing metadata
    variant: ScoringVariant = ScoringVariant.MATCHUP
    processing_time_ms: Optional[float] = None
    updated_at: Optional[datetime] = None
    engine_version: str = ENGINE_VERSION

    # Warnings/Notes
    warnings: List[str] = Field(default_factory=list)

    class Config:
        use_enum_values = True


# =============================================================================
# INTERMEDIATE DATA STRUCTURES
# =============================================================================

class PairScore(BaseModel):
    """
    Contribution of one selected target toward a school.
    gain is never negative, loss is never positive.
    """
    gain: int = 0
    loss: int = 0

    @property
    def net(self) -> int:
        return self.gain + self.loss


class ScoredSchool(BaseModel):
    """
    A school with its summed score and contributing ids.
    Used between scoring and output assembly.
    """
    school: School
    score: int = 0
    advantage_matches: List[str] = Field(default_factory=list)
    disadvantage_matches: List[str] = Field(default_factory=list)
    combinations: List[str] = Field(default_factory=list)
    weakness: List[WeaknessEntry] = Field(default_factory=list)
