"""
Ranker

Orders scored schools by score, highest first.
"""

from typing import List
from .contracts import ScoredSchool


def rank_schools(
    scored_schools: List[ScoredSchool]
) -> List[ScoredSchool]:
    """
    Rank schools by score (descending).

    sorted() is stable, so schools with equal scores keep the order in which
    they were scored (catalog order).

    Args:
        scored_schools: List of scored schools

    Returns:
        Sorted list by score
    """
    return sorted(
        scored_schools,
        key=lambda x: x.score,
        reverse=True
    )
