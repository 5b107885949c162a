"""
Recommendation Engine

Main orchestrator that combines all scoring components into a single pipeline.
This is the primary entry point for ranking a catalog against a selection.
"""

import time
from typing import List

from .contracts import Catalog, RecommendationOutput, RecommendationRecord
from .selection import Selection
from .pair_scorers import scorer_for
from .aggregator import batch_aggregate
from .ranker import rank_schools
from .output_assembler import assemble_output, empty_output
from .constants import WEAKNESS_LIMIT, ENGINE_VERSION


class RecommendationEngine:
    """
    Stateless recommendation engine.

    Pipeline flow:
    1. Scorer selection - Pick the pair scorer for the catalog encoding
    2. Aggregation - Sum pair contributions per evaluated school
    3. Ranking - Stable sort by score, highest first
    4. Output Assembly - Build final RecommendationOutput
    """

    def __init__(self, include_self: bool = True, weakness_limit: int = WEAKNESS_LIMIT):
        """
        Initialize the recommendation engine.

        Args:
            include_self: Count a selected school's relation to itself
            weakness_limit: Maximum weakness entries per recommendation
        """
        self.include_self = include_self
        self.weakness_limit = weakness_limit
        self.version = ENGINE_VERSION

    def recommend(
        self,
        catalog: Catalog,
        selection: Selection
    ) -> RecommendationOutput:
        """
        Rank the catalog against a selection.

        Args:
            catalog: Loaded catalog
            selection: Selection snapshot

        Returns:
            RecommendationOutput with ranked records and summary values
        """
        start_time = time.perf_counter()
        scorer = scorer_for(catalog)

        # Score tables rank only selected schools; nothing to rank without a selection
        if selection.is_empty and not scorer.evaluates_full_catalog:
            return empty_output(catalog, selection)

        scored = batch_aggregate(
            catalog,
            selection,
            scorer,
            include_self=self.include_self,
            weakness_limit=self.weakness_limit,
        )
        ranked = rank_schools(scored)

        processing_time = (time.perf_counter() - start_time) * 1000
        return assemble_output(
            catalog,
            selection,
            ranked,
            processing_time_ms=round(processing_time, 2)
        )

    def rank(
        self,
        catalog: Catalog,
        selection: Selection
    ) -> List[RecommendationRecord]:
        """Ranked records only, without summary values."""
        return self.recommend(catalog, selection).recommendations


# Convenience function for simple usage
def rank(
    catalog: Catalog,
    selection: Selection,
    include_self: bool = True
) -> List[RecommendationRecord]:
    """
    Convenience function to rank a catalog.

    Args:
        catalog: Loaded catalog
        selection: Selection snapshot
        include_self: Count self-relations

    Returns:
        Ranked RecommendationRecord list
    """
    engine = RecommendationEngine(include_self=include_self)
    return engine.rank(catalog, selection)
