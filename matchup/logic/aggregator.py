"""
Score Aggregator

Sums pair contributions of every selected target into one score per school
and records which targets pushed the score up or down.
"""

from typing import List

from .contracts import Catalog, School, ScoredSchool, WeaknessEntry
from .pair_scorers import PairScorer
from .selection import Selection
from .constants import WEAKNESS_LIMIT


def aggregate_scores(
    catalog: Catalog,
    selection: Selection,
    school: School,
    scorer: PairScorer,
    include_self: bool = True,
    weakness_limit: int = WEAKNESS_LIMIT,
) -> ScoredSchool:
    """
    Score one school against the current selection.

    Args:
        catalog: Loaded catalog (source of combinations)
        selection: Current selection snapshot
        school: School being scored
        scorer: Pair scorer for the catalog's encoding
        include_self: Count the school's relation to itself when it is selected
        weakness_limit: Maximum weakness entries to keep

    Returns:
        ScoredSchool with score, contributing ids, combinations and weakness
    """
    score = 0
    advantage_matches: List[str] = []
    disadvantage_matches: List[str] = []
    weakness: List[WeaknessEntry] = []

    for target_id in selection.ordered():
        if target_id == school.id and not include_self:
            continue

        pair = scorer.score_pair(school, target_id)
        score += pair.net

        if pair.gain > 0:
            advantage_matches.append(target_id)
        if pair.loss < 0:
            disadvantage_matches.append(target_id)
            if target_id != school.id:
                weakness.append(WeaknessEntry(id=target_id, score=pair.loss))

    # Most negative first; sorted() is stable so equal values keep selection order
    weakness = sorted(weakness, key=lambda w: w.score)[:max(weakness_limit, 0)]

    combinations = [
        c.sub_genre
        for c in catalog.combinations_for(school.id)
        if c.sub_genre in selection
    ]

    return ScoredSchool(
        school=school,
        score=score,
        advantage_matches=advantage_matches,
        disadvantage_matches=disadvantage_matches,
        combinations=combinations,
        weakness=weakness,
    )


def batch_aggregate(
    catalog: Catalog,
    selection: Selection,
    scorer: PairScorer,
    include_self: bool = True,
    weakness_limit: int = WEAKNESS_LIMIT,
) -> List[ScoredSchool]:
    """
    Score every school the scorer evaluates, in catalog order.

    Matchup lists rank the full catalog so unselected schools can be previewed;
    score tables rank only the selected schools.
    """
    if scorer.evaluates_full_catalog:
        schools = list(catalog.schools)
    else:
        schools = [s for s in catalog.schools if s.id in selection]

    return [
        aggregate_scores(catalog, selection, school, scorer, include_self, weakness_limit)
        for school in schools
    ]
