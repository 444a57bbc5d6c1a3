"""Decision-mode state: which options are chosen, locked, and where they lead.

A DecisionGraph owns the selection state of one playthrough:
    selections  : chosen option id per year (None until chosen)
    active tags : every lock/unlock tag produced by a chosen option
    path scores : running weight per StrategyPath

Only lock tags gate availability. Unlock tags are collected for display.
Each instance is independent; create one per session.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Optional

from curveroom.errors import InvalidYear, UnknownOption
from curveroom.models import HORIZON, YEARS, DecisionOption, Scenario, StrategyPath, StrategyTag

logger = logging.getLogger(__name__)

# Payroll assumed for a year with no decision yet.
NEUTRAL_PAYROLL = 50


def check_year(year) -> int:
    """Return `year` if it is an int in 1-5, else raise InvalidYear."""
    if isinstance(year, bool) or not isinstance(year, int) or year not in YEARS:
        raise InvalidYear(year)
    return year


@dataclass
class YearPlan:
    """One year of curve_with_strategy()."""

    year: int
    payroll: int
    strategy: Optional[StrategyTag] = None
    flavor: Optional[str] = None
    baseline: Optional[int] = None


class DecisionGraph:
    """Selection state for a decision-mode playthrough.

    Re-choosing a year keeps the tags and path weights contributed by the
    earlier choice. Pass retract_on_overwrite=True to remove them before
    the new choice applies.
    """

    def __init__(
        self,
        catalog: Mapping[int, Sequence[DecisionOption]],
        retract_on_overwrite: bool = False,
    ) -> None:
        self._catalog: dict[int, tuple[DecisionOption, ...]] = {
            year: tuple(catalog.get(year, ())) for year in YEARS
        }
        self.retract_on_overwrite = retract_on_overwrite
        self.reset()

    @classmethod
    def from_scenario(cls, scenario: Scenario, retract_on_overwrite: bool = False) -> DecisionGraph:
        return cls(scenario.decisions, retract_on_overwrite=retract_on_overwrite)

    def reset(self) -> None:
        """Clear all choices, tags and path scores."""
        self._selections: list[Optional[str]] = [None] * HORIZON
        self._active_tags: set[str] = set()
        self._path_scores: dict[StrategyPath, int] = {p: 0 for p in StrategyPath}

    # -- read-only views ---------------------------------------------------

    @property
    def selections(self) -> list[Optional[str]]:
        return list(self._selections)

    @property
    def active_tags(self) -> frozenset[str]:
        return frozenset(self._active_tags)

    @property
    def path_scores(self) -> dict[StrategyPath, int]:
        return dict(self._path_scores)

    @property
    def is_complete(self) -> bool:
        return all(s is not None for s in self._selections)

    # -- queries -----------------------------------------------------------

    def all_options(self, year: int) -> list[DecisionOption]:
        """Every option for a year, including locked ones, in catalog order."""
        return list(self._catalog[check_year(year)])

    def available_options(self, year: int) -> list[DecisionOption]:
        """Options for a year not locked by any active tag, in catalog order."""
        return [
            option for option in self._catalog[check_year(year)]
            if not option.locks & self._active_tags
        ]

    def find_option(self, year: int, option_id: str) -> DecisionOption:
        for option in self._catalog[check_year(year)]:
            if option.id == option_id:
                return option
        raise UnknownOption(year, option_id)

    def current_option(self, year: int) -> Optional[DecisionOption]:
        """The option chosen for a year, or None if unset."""
        option_id = self._selections[check_year(year) - 1]
        if option_id is None:
            return None
        return self.find_option(year, option_id)

    def locked_by(self, year: int, option_id: str) -> list[str]:
        """Active tags that currently lock an option (sorted)."""
        option = self.find_option(year, option_id)
        return sorted(option.locks & self._active_tags)

    # -- transitions -------------------------------------------------------

    def apply_decision(self, year: int, option_id: str) -> DecisionOption:
        """Choose an option for a year and fold in its tags and weights.

        Availability is not checked; a locked option can be applied. Raises
        InvalidYear or UnknownOption without touching state.
        """
        option = self.find_option(year, option_id)
        previous = self.current_option(year)

        if previous is not None and self.retract_on_overwrite:
            self._retract(year, previous)

        self._selections[year - 1] = option.id
        self._active_tags |= option.locks
        self._active_tags |= option.unlocks
        for path, weight in option.path_weights.items():
            self._path_scores[path] += weight

        logger.debug(
            "year %d -> %s (payroll %d, scores %s)",
            year, option.id, option.payroll,
            {p.value: s for p, s in self._path_scores.items()},
        )
        return option

    def _retract(self, year: int, previous: DecisionOption) -> None:
        for path, weight in previous.path_weights.items():
            self._path_scores[path] -= weight
        # Another year's choice may have produced the same tag.
        tags: set[str] = set()
        for other in YEARS:
            if other == year:
                continue
            chosen = self.current_option(other)
            if chosen is not None:
                tags |= chosen.locks | chosen.unlocks
        self._active_tags = tags
        logger.debug("year %d: retracted %s", year, previous.id)

    def determine_path(self) -> StrategyPath:
        """Classify accumulated choices; ties lean hybrid, then winNow."""
        win_now = self._path_scores[StrategyPath.WIN_NOW]
        rebuild = self._path_scores[StrategyPath.REBUILD]
        hybrid = self._path_scores[StrategyPath.HYBRID]
        best = max(win_now, rebuild, hybrid)

        # A three-way tie has no clear winner.
        if win_now == rebuild == hybrid:
            return StrategyPath.HYBRID
        if hybrid == best and hybrid > min(win_now, rebuild):
            return StrategyPath.HYBRID
        if win_now == best and win_now > rebuild:
            return StrategyPath.WIN_NOW
        if rebuild == best:
            return StrategyPath.REBUILD
        return StrategyPath.HYBRID

    def curve_from_selections(self) -> list[int]:
        """Payroll per year from chosen options; NEUTRAL_PAYROLL when unset."""
        curve = []
        for year in YEARS:
            option = self.current_option(year)
            curve.append(option.payroll if option else NEUTRAL_PAYROLL)
        return curve

    def curve_with_strategy(self) -> list[YearPlan]:
        plans = []
        for year in YEARS:
            option = self.current_option(year)
            if option is not None and option.strategy is not None:
                plans.append(YearPlan(
                    year=year,
                    payroll=option.payroll,
                    strategy=option.strategy.tag,
                    flavor=option.strategy.flavor,
                    baseline=option.strategy.baseline,
                ))
            else:
                plans.append(YearPlan(
                    year=year,
                    payroll=option.payroll if option else NEUTRAL_PAYROLL,
                ))
        return plans
