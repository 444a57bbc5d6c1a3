"""Tests for slider/path scoring, tiers and reward codes."""

import pytest
from rich.console import Console

from curveroom.errors import InvalidInput
from curveroom.models import StrategyPath, Tier
from curveroom.scorer import (
    build_result,
    feedback_for,
    render_result,
    reward_for,
    score_against_target,
    score_by_path,
    tier_for,
    variance,
    year_points,
)


# --- score_against_target ---

def test_exact_match_scores_100():
    """Peak at index 2 in both, variance well above 50."""
    assert score_against_target([60, 75, 100, 80, 60], [60, 75, 100, 80, 60]) == 100


def test_flat_exact_match_takes_flatline_penalty():
    """100 base - 15 flatline + 5 peak timing (both peaks resolve to year 1)."""
    assert score_against_target([75] * 5, [75] * 5) == 90


def test_flat_curve_against_shaped_target():
    # diffs 10, 25, 50, 30, 10 -> 17 + 6 + 2 + 6 + 17 = 48, minus 15 flatline
    assert score_against_target([50] * 5, [60, 75, 100, 80, 60]) == 33


def test_peak_tie_uses_first_maximum():
    # diffs 0, 40, 10, 10, 10 -> 20 + 3 + 17 + 17 + 17 = 74, +5 (both peaks at year 1)
    assert score_against_target([100, 100, 50, 50, 50], [100, 60, 60, 60, 60]) == 79


def test_score_is_clamped_to_zero():
    assert score_against_target([0, 0, 0, 0, 0], [90, 100, 90, 90, 90]) == 0


def test_accepts_tuples_and_floats():
    assert score_against_target((60.0, 75, 100, 80, 60), (60, 75, 100, 80, 60)) == 100


@pytest.mark.parametrize("curve, target", [
    ([60, 75, 100, 80], [60, 75, 100, 80, 60]),
    ([60, 75, 100, 80, 60], [60, 75, 100, 80, 60, 50]),
    ([], [60, 75, 100, 80, 60]),
    ("60758", [60, 75, 100, 80, 60]),
    ([60, 75, None, 80, 60], [60, 75, 100, 80, 60]),
])
def test_malformed_input_rejected(curve, target):
    with pytest.raises(InvalidInput):
        score_against_target(curve, target)


@pytest.mark.parametrize("diff, points", [
    (0, 20), (5, 20), (6, 17), (10, 17), (15, 14), (20, 10), (21, 6), (30, 6),
    (31, 4), (40, 3), (55, 2), (65, 1), (70, 0), (100, 0),
])
def test_year_points_breakpoints(diff, points):
    assert year_points(diff) == points


def test_variance_is_population_variance():
    assert variance([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(4.0)
    assert variance([75] * 5) == 0


# --- score_by_path ---

def test_win_now_full_marks():
    # early 3 x 15, late 2 x 10, 5 distinct values -> +8
    assert score_by_path(StrategyPath.WIN_NOW, [90, 95, 100, 70, 60]) == 73


def test_win_now_partial_thresholds():
    # early 12 + 12 + 8, late 7 + 4, only 2 distinct values
    assert score_by_path("winNow", [80, 80, 75, 75, 80]) == 43


def test_rebuild_thresholds():
    # early 15 + 15 + 0, late 10 + 10, 5 distinct -> +8
    assert score_by_path(StrategyPath.REBUILD, [50, 60, 80, 95, 85]) == 58


def test_rebuild_ignores_overspend_early():
    assert score_by_path(StrategyPath.REBUILD, [90, 90, 90, 60, 60]) == 0


def test_hybrid_steady_curve():
    assert score_by_path(StrategyPath.HYBRID, [75, 75, 75, 75, 75]) == 85


def test_hybrid_band_edges():
    # 70 and 80 are inside the steady band, 65 and 85 in the outer band, 90 nowhere
    assert score_by_path(StrategyPath.HYBRID, [70, 80, 65, 85, 90]) == 50


def test_hybrid_consistency_bonus():
    assert score_by_path(StrategyPath.HYBRID, [72, 78, 66, 80, 70]) == 80


def test_unknown_path_rejected():
    with pytest.raises(InvalidInput):
        score_by_path("yolo", [75] * 5)


def test_path_score_needs_five_years():
    with pytest.raises(InvalidInput):
        score_by_path(StrategyPath.HYBRID, [75] * 4)


# --- tiers and rewards ---

@pytest.mark.parametrize("score, tier, floor", [
    (100, Tier.GOLD, 85),
    (85, Tier.GOLD, 85),
    (84, Tier.SILVER, 70),
    (70, Tier.SILVER, 70),
    (69, Tier.BRONZE, 55),
    (55, Tier.BRONZE, 55),
    (54, Tier.NONE, 0),
    (0, Tier.NONE, 0),
])
def test_tier_boundaries(score, tier, floor):
    band = tier_for(score)
    assert band.tier is tier
    assert band.min_score == floor


def test_slider_reward_codes():
    assert reward_for(Tier.GOLD) == ("CURVE-301-GOLD", 250)
    assert reward_for(Tier.SILVER) == ("CURVE-301-SILVER", 175)
    assert reward_for(Tier.BRONZE) == ("CURVE-301-BRONZE", 125)
    assert reward_for(Tier.NONE) == (None, 0)


@pytest.mark.parametrize("tier, path, code", [
    (Tier.GOLD, StrategyPath.WIN_NOW, "CURVE-301-CHAMPION"),
    (Tier.GOLD, StrategyPath.REBUILD, "CURVE-301-ARCHITECT"),
    (Tier.GOLD, StrategyPath.HYBRID, "CURVE-301-STRATEGIST"),
    (Tier.SILVER, StrategyPath.WIN_NOW, "CURVE-301-CONTENDER"),
    (Tier.SILVER, StrategyPath.REBUILD, "CURVE-301-BUILDER"),
    (Tier.SILVER, StrategyPath.HYBRID, "CURVE-301-NEGOTIATOR"),
    (Tier.BRONZE, StrategyPath.WIN_NOW, "CURVE-301-SPENDER"),
    (Tier.BRONZE, StrategyPath.REBUILD, "CURVE-301-DEVELOPER"),
    (Tier.BRONZE, StrategyPath.HYBRID, "CURVE-301-BALANCED"),
])
def test_path_reward_codes(tier, path, code):
    assert reward_for(tier, path)[0] == code


def test_no_code_below_bronze_even_with_path():
    assert reward_for(Tier.NONE, StrategyPath.WIN_NOW) == (None, 0)


def test_feedback_text():
    assert feedback_for(Tier.GOLD).startswith("Outstanding!")
    assert "Architect-level" in feedback_for(Tier.GOLD, StrategyPath.REBUILD)
    assert feedback_for(Tier.NONE, StrategyPath.HYBRID) == (
        "Your hybrid strategy needs refinement. Try again to improve!"
    )
    assert "too flat" in feedback_for(Tier.NONE)


def test_build_result_serializes():
    result = build_result(88, [90, 95, 100, 70, 60], [90, 95, 100, 85, 70],
                          path=StrategyPath.WIN_NOW, scenario_name="Knicks")
    d = result.to_dict()
    assert d["tier"] == "gold"
    assert d["code"] == "CURVE-301-CHAMPION"
    assert d["xp"] == 250
    assert d["path"] == "winNow"
    assert d["curve"] == [90, 95, 100, 70, 60]


def test_render_result_prints_code_and_years():
    console = Console(record=True, width=120)
    result = build_result(72, [60, 75, 90, 80, 60], [60, 75, 100, 80, 60], scenario_name="Mets")
    render_result(result, console)
    text = console.export_text()
    assert "CURVE-301-SILVER" in text
    assert "Mets" in text
    assert "-10" in text
