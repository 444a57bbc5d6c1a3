"""Exceptions raised by the curveroom engine.

Every error is local and recoverable: when one is raised, no session state
has changed and the caller may retry with corrected input.
"""

from __future__ import annotations


class CurveRoomError(Exception):
    """Base class for all curveroom errors."""


class InvalidInput(CurveRoomError, ValueError):
    """Malformed curve/target, unknown path name, or wrong game mode."""


class InvalidYear(CurveRoomError, ValueError):
    """Year outside 1-5 passed to a year-indexed operation."""

    def __init__(self, year: object) -> None:
        super().__init__(f"year must be in 1-5, got {year!r}")
        self.year = year


class UnknownOption(CurveRoomError, LookupError):
    """Option id not present in the catalog for the given year."""

    def __init__(self, year: int, option_id: str) -> None:
        super().__init__(f"no option {option_id!r} for year {year}")
        self.year = year
        self.option_id = option_id


class CatalogError(CurveRoomError):
    """Malformed scenario record or decision catalog at load time."""

    def __init__(self, scenario: str, message: str) -> None:
        super().__init__(f"{scenario}: {message}")
        self.scenario = scenario
