"""
Matchup Session

Owns the loaded catalog and the current selection, applies user commands,
and recomputes the ranking after every change.

This is a pure orchestration layer - NO scoring, NO file reads of its own.
Each command swaps in a new immutable Selection and fires on_selection_changed,
which reruns the engine from scratch and notifies listeners.
"""

import logging
import random
import threading
from typing import Callable, List, Optional

from .catalog_loader import load_catalog, DEFAULT_TIMEOUT_SECONDS
from .contracts import Catalog, RecommendationOutput
from .engine import RecommendationEngine
from .errors import CatalogUnavailableError, LoadError
from .selection import Selection
from .constants import (
    LOAD_ERROR_MESSAGE,
    RANDOM_SELECTION_MAX,
    RANDOM_SELECTION_MIN,
    ScoringVariant,
    SelectionDefault,
)

logger = logging.getLogger(__name__)

SelectionListener = Callable[[Selection, RecommendationOutput], None]


class MatchupSession:
    """
    Single controller for one catalog and its selection.

    A session whose catalog failed to load stays in an error state: it keeps
    the user-facing message, reports controls as disabled, and rejects
    commands with CatalogUnavailableError.
    """

    def __init__(
        self,
        catalog: Optional[Catalog],
        engine: Optional[RecommendationEngine] = None,
        default: SelectionDefault = SelectionDefault.ALL,
        random_min: int = RANDOM_SELECTION_MIN,
        random_max: int = RANDOM_SELECTION_MAX,
        rng: Optional[random.Random] = None,
        load_error: Optional[str] = None,
    ):
        self.catalog = catalog
        self.engine = engine or RecommendationEngine()
        self.random_min = random_min
        self.random_max = random_max
        self.rng = rng or random.Random()
        self.load_error = load_error
        self._listeners: List[SelectionListener] = []
        self._selection: Optional[Selection] = None
        self._output: Optional[RecommendationOutput] = None
        # Reentrant so listeners may read the session while it notifies them
        self._lock = threading.RLock()

        if catalog is not None:
            self._apply(Selection.for_catalog(catalog, default))

    @classmethod
    def open(
        cls,
        source: str,
        combinations_source: Optional[str] = None,
        variant: Optional[ScoringVariant] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        **kwargs
    ) -> "MatchupSession":
        """
        Load the catalog and start a session.

        A LoadError does not propagate: the session comes up in its error state.
        """
        try:
            catalog = load_catalog(
                source,
                combinations_source=combinations_source,
                variant=variant,
                timeout=timeout,
            )
        except LoadError as e:
            logger.error(f"Failed to load school catalog from {e.source or source}: {e}")
            return cls(catalog=None, load_error=LOAD_ERROR_MESSAGE, **kwargs)
        return cls(catalog=catalog, **kwargs)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def is_ready(self) -> bool:
        return self.catalog is not None

    @property
    def controls_enabled(self) -> bool:
        return self.is_ready

    @property
    def selection(self) -> Selection:
        with self._lock:
            self._require_ready()
            return self._selection

    def recommendations(self) -> RecommendationOutput:
        """Output computed after the most recent selection change."""
        with self._lock:
            self._require_ready()
            return self._output

    def subscribe(self, listener: SelectionListener) -> None:
        """Register a callback fired after every selection change."""
        with self._lock:
            self._listeners.append(listener)

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def toggle_one(self, school_id: str) -> Selection:
        return self._command(lambda current: current.toggle_one(school_id))

    def set_all(self, active: bool) -> Selection:
        return self._command(lambda current: current.set_all(active))

    def toggle_all(self) -> Selection:
        return self._command(lambda current: current.toggle_all())

    def clear(self) -> Selection:
        return self._command(lambda current: current.clear())

    def select_random_subset(
        self,
        minimum: Optional[int] = None,
        maximum: Optional[int] = None
    ) -> Selection:
        minimum = self.random_min if minimum is None else minimum
        maximum = self.random_max if maximum is None else maximum
        return self._command(
            lambda current: current.select_random_subset(minimum, maximum, rng=self.rng)
        )

    def reset_to_default(self) -> Selection:
        return self._command(lambda current: current.reset_to_default())

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _require_ready(self) -> None:
        if not self.is_ready:
            raise CatalogUnavailableError(self.load_error or LOAD_ERROR_MESSAGE)

    def _command(self, change: Callable[[Selection], Selection]) -> Selection:
        # Held across the read-modify-write and the recompute
        with self._lock:
            self._require_ready()
            return self._apply(change(self._selection))

    def _apply(self, selection: Selection) -> Selection:
        with self._lock:
            self._selection = selection
            self.on_selection_changed(selection)
            return selection

    def on_selection_changed(self, selection: Selection) -> None:
        """Recompute the full ranking and notify listeners. Runs under the session lock."""
        self._output = self.engine.recommend(self.catalog, selection)
        logger.debug(
            f"Selection changed: {selection.size}/{len(selection.universe)} active, "
            f"best={self._output.best_school}"
        )
        for listener in self._listeners:
            listener(selection, self._output)
