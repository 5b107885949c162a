"""
Pair Scorers

One scorer per relation encoding. Each answers a single question: what does
a selected target contribute to a given school? The engine only ever talks
to this interface, so both encodings share one ranking path.

Every scorer returns a PairScore where:
- gain >= 0 is the favourable part of the contribution
- loss <= 0 is the unfavourable part
"""

from abc import ABC, abstractmethod
from typing import Dict

from .contracts import Catalog, PairScore, School
from .constants import ScoringVariant


class PairScorer(ABC):
    """Base scorer. Subclasses define score_pair and which schools get evaluated."""

    variant: ScoringVariant
    # True when every catalog school is ranked, False when only selected ones are
    evaluates_full_catalog: bool = True

    @abstractmethod
    def score_pair(self, school: School, target_id: str) -> PairScore:
        """Contribution of target_id to school."""


class MatchupListScorer(PairScorer):
    """
    Symmetric matchup lists.

    +1 when the target is in the school's advantageous list,
    -1 when it is in the disadvantageous list. Both may apply.
    """

    variant = ScoringVariant.MATCHUP
    evaluates_full_catalog = True

    def score_pair(self, school: School, target_id: str) -> PairScore:
        gain = 1 if target_id in school.advantageous_matches else 0
        loss = -1 if target_id in school.disadvantageous_matches else 0
        return PairScore(gain=gain, loss=loss)


class ScoreTableScorer(PairScorer):
    """
    Directional score table.

    Reads school.score[target]; a missing entry contributes 0.
    Only selected schools are evaluated.
    """

    variant = ScoringVariant.SCORE_TABLE
    evaluates_full_catalog = False

    def score_pair(self, school: School, target_id: str) -> PairScore:
        value = (school.score or {}).get(target_id, 0)
        return PairScore(gain=max(value, 0), loss=min(value, 0))


SCORERS: Dict[ScoringVariant, PairScorer] = {
    ScoringVariant.MATCHUP: MatchupListScorer(),
    ScoringVariant.SCORE_TABLE: ScoreTableScorer(),
}


def scorer_for(catalog: Catalog) -> PairScorer:
    """Pick the scorer matching the encoding detected when the catalog was loaded."""
    return SCORERS[ScoringVariant(catalog.variant)]
