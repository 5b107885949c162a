"""
Selection State

Immutable set of active school ids. Every command returns a new Selection,
so snapshots handed to the scorer can never change underneath it.
"""

import random
from typing import FrozenSet, List, Optional, Tuple
from pydantic import BaseModel, Field

from .constants import SelectionDefault, RANDOM_SELECTION_MIN, RANDOM_SELECTION_MAX
from .contracts import Catalog
from .errors import SelectionBoundsError, UnknownSchoolError


class Selection(BaseModel):
    """
    Active subset of a catalog.

    universe holds every catalog id in catalog order; active is the subset
    currently switched on. Iteration via ordered() always follows catalog order.
    """
    universe: Tuple[str, ...] = ()
    active: FrozenSet[str] = Field(default_factory=frozenset)
    default: SelectionDefault = SelectionDefault.ALL

    class Config:
        frozen = True

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def for_catalog(
        cls,
        catalog: Catalog,
        default: SelectionDefault = SelectionDefault.ALL,
    ) -> "Selection":
        """Create the startup selection for a catalog."""
        universe = tuple(catalog.ids)
        active = frozenset(universe) if default == SelectionDefault.ALL else frozenset()
        return cls(universe=universe, active=active, default=default)

    def _with(self, active) -> "Selection":
        return Selection(universe=self.universe, active=frozenset(active), default=self.default)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def ordered(self) -> List[str]:
        """Active ids in catalog order."""
        return [school_id for school_id in self.universe if school_id in self.active]

    def is_active(self, school_id: str) -> bool:
        return school_id in self.active

    @property
    def size(self) -> int:
        return len(self.active)

    @property
    def is_empty(self) -> bool:
        return not self.active

    @property
    def all_active(self) -> bool:
        return bool(self.universe) and len(self.active) == len(self.universe)

    def __contains__(self, school_id: object) -> bool:
        return school_id in self.active

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def toggle_one(self, school_id: str) -> "Selection":
        """Flip membership of a single school."""
        if school_id not in self.universe:
            raise UnknownSchoolError(school_id)
        return self._with(self.active ^ {school_id})

    def set_all(self, active: bool) -> "Selection":
        """Switch every school on or off."""
        return self._with(self.universe if active else ())

    def clear(self) -> "Selection":
        return self.set_all(False)

    def toggle_all(self) -> "Selection":
        """Clear everything when all schools are on, otherwise switch all on."""
        return self.set_all(not self.all_active)

    def select_random_subset(
        self,
        minimum: int = RANDOM_SELECTION_MIN,
        maximum: int = RANDOM_SELECTION_MAX,
        rng: Optional[random.Random] = None,
    ) -> "Selection":
        """
        Activate a random subset of between minimum and maximum schools.

        Both bounds are clamped to the catalog size. Ids are sampled without
        replacement, so the result holds exactly k distinct schools.

        Args:
            minimum: Smallest subset size
            maximum: Largest subset size
            rng: Random source; module-level random when omitted

        Returns:
            New Selection with exactly the sampled schools active
        """
        if minimum < 0 or maximum < minimum:
            raise SelectionBoundsError(minimum, maximum)

        rng = rng or random.Random()
        total = len(self.universe)
        low = min(minimum, total)
        high = min(maximum, total)

        k = rng.randint(low, high)
        picked = rng.sample(list(self.universe), k)
        return self._with(picked)

    def reset_to_default(self) -> "Selection":
        return self.set_all(self.default == SelectionDefault.ALL)
