"""GameSession: one playthrough of a scenario.

Holds the scenario, the current year cursor and either a slider curve or a
DecisionGraph, and scores on demand. Sessions share nothing; build a new
one to start over or to play another team.
"""

from __future__ import annotations

import logging
import math
from numbers import Real
from typing import Optional

from curveroom import scorer
from curveroom.decisions import DecisionGraph, YearPlan, check_year
from curveroom.errors import InvalidInput
from curveroom.models import (
    HORIZON,
    YEARS,
    CurveStats,
    DecisionOption,
    GameMode,
    Scenario,
    ScoreResult,
    StrategyPath,
    StrategyTag,
    Tier,
    ValidationIssue,
)

logger = logging.getLogger(__name__)

VALID_PAYROLL_RANGE = (40, 140)

PHASES = {
    1: ("Build Phase", "Start conservative. Build cap flexibility for the future."),
    2: ("Build Phase", "Continue developing. Add strategic pieces."),
    3: ("Peak Phase", "Your window is open! Spend aggressively to compete."),
    4: ("Transition Phase", "Begin planning ahead. Balance competing and rebuilding."),
    5: ("Reset Phase", "Prepare for the next cycle. Reduce payroll for flexibility."),
}

REFERENCE_CURVES = {
    StrategyPath.WIN_NOW: [85, 95, 100, 70, 60],
    StrategyPath.HYBRID: [75, 75, 75, 75, 75],
    StrategyPath.REBUILD: [50, 60, 80, 95, 85],
}


def _round_half_up(value: float) -> int:
    # builtin round() goes to even on .5; displayed figures round up
    return math.floor(value + 0.5)


class GameSession:
    """A single play session for one scenario."""

    def __init__(
        self,
        scenario: Scenario,
        retract_on_overwrite: bool = False,
        mode: Optional[GameMode] = None,
    ) -> None:
        """
        Args:
            scenario: The team to play.
            retract_on_overwrite: Passed to the DecisionGraph.
            mode: Force a mode. Defaults to the scenario's own; slider mode
                works for every team, decision mode needs a catalog.
        """
        self.scenario = scenario
        self.mode = GameMode(mode) if mode is not None else scenario.mode
        if self.mode is GameMode.DECISIONS and scenario.mode is not GameMode.DECISIONS:
            raise InvalidInput(f"{scenario.id} has no decision catalog")
        self.current_year = 1
        self.is_complete = False
        self._slider: list[Real] = [scenario.starting_payroll] * HORIZON
        self.graph: Optional[DecisionGraph] = None
        if self.mode is GameMode.DECISIONS:
            self.graph = DecisionGraph.from_scenario(scenario, retract_on_overwrite)
        logger.debug("session started: %s (%s mode)", scenario.id, self.mode.value)

    # -- mode guards -------------------------------------------------------

    def _require_graph(self) -> DecisionGraph:
        if self.graph is None:
            raise InvalidInput(f"{self.scenario.id} has no decision catalog (slider mode)")
        return self.graph

    # -- slider mode -------------------------------------------------------

    def set_payroll(self, year: int, value: Real) -> None:
        if self.mode is not GameMode.SLIDER:
            raise InvalidInput("payroll is set through decisions in decision mode")
        year = check_year(year)
        if isinstance(value, bool) or not isinstance(value, Real):
            raise InvalidInput(f"payroll must be a number, got {value!r}")
        self._slider[year - 1] = value
        logger.debug("year %d payroll -> %s", year, value)

    # -- decision mode -----------------------------------------------------

    def apply_decision(self, year: int, option_id: str) -> DecisionOption:
        return self._require_graph().apply_decision(year, option_id)

    def available_options(self, year: int) -> list[DecisionOption]:
        return self._require_graph().available_options(year)

    def all_options(self, year: int) -> list[DecisionOption]:
        return self._require_graph().all_options(year)

    def current_option(self, year: int) -> Optional[DecisionOption]:
        return self._require_graph().current_option(year)

    # -- accessors ---------------------------------------------------------

    @property
    def curve(self) -> list[Real]:
        if self.graph is not None:
            return self.graph.curve_from_selections()
        return list(self._slider)

    @property
    def target(self) -> list[int]:
        return list(self.scenario.target)

    @property
    def path(self) -> Optional[StrategyPath]:
        """Strategic path in decision mode, None in slider mode."""
        if self.graph is None:
            return None
        return self.graph.determine_path()

    @property
    def score(self) -> int:
        if self.graph is not None:
            return scorer.score_by_path(self.graph.determine_path(), self.curve)
        return scorer.score_against_target(self.curve, self.target)

    @property
    def tier(self) -> Tier:
        return scorer.tier_for(self.score).tier

    def payroll(self, year: int) -> Real:
        return self.curve[check_year(year) - 1]

    # -- navigation --------------------------------------------------------

    def next_year(self) -> int:
        if self.current_year < HORIZON:
            self.current_year += 1
        return self.current_year

    def previous_year(self) -> int:
        if self.current_year > 1:
            self.current_year -= 1
        return self.current_year

    def go_to_year(self, year: int) -> int:
        self.current_year = check_year(year)
        return self.current_year

    def phase(self, year: int) -> tuple[str, str]:
        """(name, description) of the phase for a year."""
        return PHASES[check_year(year)]

    def hint(self, year: int) -> str:
        """Scenario-authored hint for a year, falling back to the phase text."""
        year = check_year(year)
        return self.scenario.phase_hints.get(year) or PHASES[year][1]

    # -- results -----------------------------------------------------------

    def finish(self) -> ScoreResult:
        """Mark the session complete and build its ScoreResult."""
        self.is_complete = True
        result = scorer.build_result(
            self.score,
            self.curve,
            self.target,
            path=self.path,
            scenario_name=self.scenario.name,
        )
        logger.debug("finished %s: score=%d tier=%s", self.scenario.id, result.score, result.tier.value)
        return result

    # -- reporting helpers -------------------------------------------------

    def percent_to_millions(self, percent: Real) -> int:
        """Dollar payroll in millions: 0% is 40% of the cap, 100% is 140%."""
        cap = self.scenario.salary_cap
        low = cap * 0.4
        high = cap * 1.4
        return _round_half_up(low + (percent / 100) * (high - low))

    def curve_stats(self) -> CurveStats:
        curve = self.curve
        return CurveStats(avg=_round_half_up(sum(curve) / len(curve)), max=max(curve), min=min(curve))

    def recommended_paths(self) -> dict[StrategyPath, list[int]]:
        """Reference curves per path; hybrid uses this scenario's target."""
        paths = {path: list(curve) for path, curve in REFERENCE_CURVES.items()}
        paths[StrategyPath.HYBRID] = self.target
        return paths

    def curve_with_strategy(self) -> list[YearPlan]:
        return self._require_graph().curve_with_strategy()

    def validate(self) -> list[ValidationIssue]:
        """Report payroll-range, baseline and path-coherence problems.

        Nothing is corrected; an empty list means the curve is clean.
        """
        issues: list[ValidationIssue] = []
        low, high = VALID_PAYROLL_RANGE

        if self.graph is not None:
            plans = self.graph.curve_with_strategy()
            for plan in plans:
                if plan.strategy is not None and plan.payroll != plan.baseline:
                    issues.append(ValidationIssue(
                        plan.year,
                        f"Year {plan.year}: Payroll {plan.payroll}% doesn't match baseline {plan.baseline}%",
                        severity="warning",
                    ))
            issues.extend(self._path_coherence(plans))

        for year, value in zip(YEARS, self.curve):
            if not low <= value <= high:
                issues.append(ValidationIssue(
                    year, f"Year {year}: Payroll {value}% is outside valid range ({low}-{high}%)"
                ))
        return issues

    def _path_coherence(self, plans: list[YearPlan]) -> list[ValidationIssue]:
        path = self.graph.determine_path()
        early = [p.strategy for p in plans[:3]]
        every = [p.strategy for p in plans]

        if path is StrategyPath.WIN_NOW and early.count(StrategyTag.SPEND_HEAVY) < 2:
            return [ValidationIssue(
                None, "Win-Now path should have at least 2 SPEND_HEAVY decisions in Years 1-3"
            )]
        if path is StrategyPath.REBUILD:
            if sum(t in (StrategyTag.REBUILD, StrategyTag.MODERATE) for t in early) < 2:
                return [ValidationIssue(
                    None, "Rebuild path should have at least 2 REBUILD/MODERATE decisions in Years 1-3"
                )]
        if path is StrategyPath.HYBRID:
            if sum(t in (StrategyTag.COMPETITIVE, StrategyTag.MODERATE) for t in every) < 3:
                return [ValidationIssue(
                    None, "Hybrid path should have at least 3 COMPETITIVE/MODERATE decisions"
                )]
        return []
