"""Curveroom scorer: turns a 5-year payroll curve into a health score.

Two scoring modes:
- slider mode compares the curve year-by-year against the scenario target
- decision mode scores the curve against the heuristics of the strategic
  path the player's choices add up to

Scores map onto fixed reward tiers and codes. Other systems redeem these
codes, so the tables below are a contract and must not drift.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from numbers import Real
from typing import Optional, Union

from rich.console import Console
from rich.table import Table

from curveroom.errors import InvalidInput
from curveroom.models import HORIZON, ScoreResult, StrategyPath, Tier, TierBand

FLATLINE_VARIANCE = 50
FLATLINE_PENALTY = 15
PEAK_TIMING_BONUS = 5

# (max abs difference, points), checked in order; first match wins.
_DIFF_BREAKPOINTS = ((5, 20), (10, 17), (15, 14), (20, 10), (30, 6))

_TIER_BANDS = (
    TierBand(Tier.GOLD, 85),
    TierBand(Tier.SILVER, 70),
    TierBand(Tier.BRONZE, 55),
)

_SLIDER_CODES = {
    Tier.GOLD: "CURVE-301-GOLD",
    Tier.SILVER: "CURVE-301-SILVER",
    Tier.BRONZE: "CURVE-301-BRONZE",
}

_PATH_CODES = {
    Tier.GOLD: {
        StrategyPath.WIN_NOW: "CURVE-301-CHAMPION",
        StrategyPath.REBUILD: "CURVE-301-ARCHITECT",
        StrategyPath.HYBRID: "CURVE-301-STRATEGIST",
    },
    Tier.SILVER: {
        StrategyPath.WIN_NOW: "CURVE-301-CONTENDER",
        StrategyPath.REBUILD: "CURVE-301-BUILDER",
        StrategyPath.HYBRID: "CURVE-301-NEGOTIATOR",
    },
    Tier.BRONZE: {
        StrategyPath.WIN_NOW: "CURVE-301-SPENDER",
        StrategyPath.REBUILD: "CURVE-301-DEVELOPER",
        StrategyPath.HYBRID: "CURVE-301-BALANCED",
    },
}

_TIER_XP = {Tier.GOLD: 250, Tier.SILVER: 175, Tier.BRONZE: 125, Tier.NONE: 0}

_TIER_OPENERS = {
    Tier.GOLD: "Outstanding!",
    Tier.SILVER: "Great job!",
    Tier.BRONZE: "Good effort!",
}

_SLIDER_FEEDBACK = {
    Tier.GOLD: "You mastered the payroll curve rhythm perfectly.",
    Tier.SILVER: "You understood the Build-Peak-Reset cycle well.",
    Tier.BRONZE: "You grasped the basics of payroll management.",
}

_PATH_FEEDBACK = {
    Tier.GOLD: {
        StrategyPath.WIN_NOW: "Champion-caliber execution! You maximized your window perfectly.",
        StrategyPath.REBUILD: "Architect-level planning! You built for sustainable success.",
        StrategyPath.HYBRID: "Strategist excellence! You balanced competing and building brilliantly.",
    },
    Tier.SILVER: {
        StrategyPath.WIN_NOW: "Good win-now execution. Fine-tune your timing for gold!",
        StrategyPath.REBUILD: "Solid rebuild strategy. A bit more patience could be elite!",
        StrategyPath.HYBRID: "Nice balance! Small adjustments for perfection.",
    },
    Tier.BRONZE: {
        StrategyPath.WIN_NOW: "Good start on win-now strategy. Refine your peak timing!",
        StrategyPath.REBUILD: "Decent rebuild foundation. Build more consistently!",
        StrategyPath.HYBRID: "Fair attempt at balance. Try again for better results!",
    },
}


def _check_curve(values: Sequence[Real], name: str) -> list:
    """Reject anything that is not exactly HORIZON numbers."""
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
        raise InvalidInput(f"{name} must be a sequence of {HORIZON} numbers")
    if len(values) != HORIZON:
        raise InvalidInput(f"{name} must have {HORIZON} values, got {len(values)}")
    for v in values:
        if isinstance(v, bool) or not isinstance(v, Real):
            raise InvalidInput(f"{name} contains non-numeric value {v!r}")
    return list(values)


def _coerce_path(path: Union[StrategyPath, str]) -> StrategyPath:
    try:
        return StrategyPath(path)
    except ValueError:
        raise InvalidInput(f"unknown path {path!r}") from None


def _clamp(score: float) -> int:
    return int(min(100, max(0, score)))


def variance(values: Sequence[Real]) -> float:
    """Population variance (mean of squared deviations from the mean)."""
    mean = sum(values) / len(values)
    return sum((v - mean) ** 2 for v in values) / len(values)


def year_points(diff: Real) -> int:
    """Points for one year given its absolute distance from the target."""
    for limit, points in _DIFF_BREAKPOINTS:
        if diff <= limit:
            return points
    return max(0, 4 - math.floor((diff - 30) / 10))


def score_against_target(curve: Sequence[Real], target: Sequence[Real]) -> int:
    """Slider-mode score: closeness to target, shape penalty, peak bonus.

    Raises InvalidInput if either sequence is not exactly five numbers.
    """
    curve = _check_curve(curve, "curve")
    target = _check_curve(target, "target")

    total = sum(year_points(abs(c - t)) for c, t in zip(curve, target))

    # Near-constant spending is penalised regardless of closeness.
    if variance(curve) < FLATLINE_VARIANCE:
        total = max(0, total - FLATLINE_PENALTY)

    # list.index returns the first maximum, so ties go to the earliest year
    if curve.index(max(curve)) == target.index(max(target)):
        total += PEAK_TIMING_BONUS

    return _clamp(total)


def _early_late(curve: list, early_rules, late_rules) -> int:
    """Sum first-matching rule points over years 1-3 and years 4-5."""
    score = 0
    for rules, years in ((early_rules, curve[:3]), (late_rules, curve[3:])):
        for p in years:
            for matches, points in rules:
                if matches(p):
                    score += points
                    break
    return score


def score_by_path(path: Union[StrategyPath, str], curve: Sequence[Real]) -> int:
    """Decision-mode score using the heuristics of a strategic path.

    - winNow: spend 85%+ in years 1-3, taper in years 4-5
    - rebuild: stay under 65% in years 1-3, build up in years 4-5
    - hybrid: steady 70-80% throughout
    """
    path = _coerce_path(path)
    curve = _check_curve(curve, "curve")
    score = 0

    if path is StrategyPath.WIN_NOW:
        score += _early_late(
            curve,
            ((lambda p: p >= 85, 15), (lambda p: p >= 80, 12), (lambda p: p >= 75, 8)),
            ((lambda p: p <= 70, 10), (lambda p: p <= 75, 7), (lambda p: p <= 80, 4)),
        )
        if len(set(curve)) >= 4:
            score += 8
    elif path is StrategyPath.REBUILD:
        score += _early_late(
            curve,
            ((lambda p: p <= 65, 15), (lambda p: p <= 70, 12), (lambda p: p <= 75, 8)),
            ((lambda p: p >= 80, 10), (lambda p: p >= 75, 7), (lambda p: p >= 70, 4)),
        )
        if len(set(curve)) >= 4:
            score += 8
    else:
        steady = 0
        for p in curve:
            if 70 <= p <= 80:
                score += 15
                steady += 1
            elif 65 <= p <= 85:
                score += 10
        if steady >= 3:
            score += 10

    return _clamp(score)


def tier_for(score: Real) -> TierBand:
    """Fixed score thresholds: 85 gold, 70 silver, 55 bronze."""
    for band in _TIER_BANDS:
        if score >= band.min_score:
            return band
    return TierBand(Tier.NONE, 0)


def reward_for(tier: Tier, path: Optional[StrategyPath] = None) -> tuple[Optional[str], int]:
    """Reward code and XP for a tier; path-specific codes in decision mode."""
    tier = Tier(tier)
    xp = _TIER_XP[tier]
    if tier is Tier.NONE:
        return None, xp
    if path is not None:
        return _PATH_CODES[tier][_coerce_path(path)], xp
    return _SLIDER_CODES[tier], xp


def feedback_for(tier: Tier, path: Optional[StrategyPath] = None) -> str:
    tier = Tier(tier)
    if tier is Tier.NONE:
        if path is not None:
            return f"Your {_coerce_path(path).value} strategy needs refinement. Try again to improve!"
        return "Your payroll curve was too flat or poorly timed. Try again!"
    if path is not None:
        return f"{_TIER_OPENERS[tier]} {_PATH_FEEDBACK[tier][_coerce_path(path)]}"
    return f"{_TIER_OPENERS[tier]} {_SLIDER_FEEDBACK[tier]}"


def build_result(
    score: int,
    curve: Sequence[Real],
    target: Sequence[Real],
    path: Optional[StrategyPath] = None,
    scenario_name: str = "",
) -> ScoreResult:
    """Assemble a ScoreResult from a computed score."""
    band = tier_for(score)
    code, xp = reward_for(band.tier, path)
    return ScoreResult(
        score=score,
        tier=band.tier,
        code=code,
        xp=xp,
        feedback=feedback_for(band.tier, path),
        curve=list(curve),
        target=list(target),
        path=path,
        scenario_name=scenario_name,
    )


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

_TIER_STYLES = {
    Tier.GOLD: "bold yellow",
    Tier.SILVER: "bold white",
    Tier.BRONZE: "bold dark_orange3",
    Tier.NONE: "red",
}


def render_result(result: ScoreResult, console: Console) -> None:
    """Render a Rich summary table for a finished session."""
    style = _TIER_STYLES[result.tier]

    summary = Table(
        title=f"The Curve Room: {result.scenario_name or 'results'}",
        show_header=False,
    )
    summary.add_column("Metric", style="dim", min_width=12)
    summary.add_column("Value", min_width=24)
    summary.add_row("Score", f"[{style}]{result.score}[/{style}]")
    summary.add_row("Tier", f"[{style}]{result.tier.value}[/{style}]")
    if result.path is not None:
        summary.add_row("Path", result.path.value)
    summary.add_row("Claim code", result.code or "[dim]--[/dim]")
    summary.add_row("XP", str(result.xp))
    summary.add_row("Feedback", result.feedback)

    years = Table(show_header=True, header_style="bold")
    years.add_column("Year", justify="right")
    years.add_column("Payroll", justify="right", style="cyan")
    if result.target:
        years.add_column("Target", justify="right", style="green")
        years.add_column("Diff", justify="right")
    for i, value in enumerate(result.curve):
        row = [str(i + 1), f"{value}%"]
        if result.target:
            diff = value - result.target[i]
            row += [f"{result.target[i]}%", f"{diff:+d}" if isinstance(diff, int) else f"{diff:+.1f}"]
        years.add_row(*row)

    console.print()
    console.print(summary)
    console.print(years)
    console.print()
