"""
Matchup Engine Errors

Only load failures and unknown ids are exceptional. Missing display fields,
dangling relation targets and empty selections are handled in place.
"""

from typing import Optional


class MatchupError(Exception):
    """Base class for matchup engine errors."""


class LoadError(MatchupError):
    """The catalog source could not be read or did not hold a school list."""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source


class UnknownSchoolError(MatchupError, KeyError):
    """A selection command referenced an id that is not in the catalog."""

    def __init__(self, school_id: str):
        super().__init__(school_id)
        self.school_id = school_id

    def __str__(self) -> str:
        return f"Unknown school: {self.school_id}"


class CatalogUnavailableError(MatchupError):
    """A command arrived while the catalog is not loaded; controls are disabled."""


class SelectionBoundsError(MatchupError, ValueError):
    """Random selection bounds are negative or inverted."""

    def __init__(self, minimum: int, maximum: int):
        super().__init__(f"Invalid random selection bounds: {minimum}..{maximum}")
        self.minimum = minimum
        self.maximum = maximum
