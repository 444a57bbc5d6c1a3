"""Shared fixtures: small hand-built catalogs and scenarios."""

import pytest

from curveroom.models import DecisionOption, Scenario, Strategy, StrategyPath, StrategyTag

W, R, H = StrategyPath.WIN_NOW, StrategyPath.REBUILD, StrategyPath.HYBRID


def make_option(option_id, payroll, weights=(0, 0, 0), locks=(), unlocks=(), tag=None, baseline=None):
    """Build a DecisionOption; weights are (winNow, rebuild, hybrid)."""
    strategy = None
    if tag is not None:
        strategy = Strategy(tag=tag, baseline=payroll if baseline is None else baseline)
    return DecisionOption(
        id=option_id,
        title=option_id,
        payroll=payroll,
        unlocks=frozenset(unlocks),
        locks=frozenset(locks),
        path_weights={W: weights[0], R: weights[1], H: weights[2]},
        strategy=strategy,
    )


@pytest.fixture
def win_now_catalog():
    """Five years, one winNow-heavy option each: 90/95/100 then 70/60."""
    return {
        1: [make_option("A", 90, (25, -15, 5), tag=StrategyTag.SPEND_HEAVY)],
        2: [make_option("B", 95, (25, -15, 5), tag=StrategyTag.SPEND_HEAVY)],
        3: [make_option("C", 100, (25, -15, 5), tag=StrategyTag.SPEND_HEAVY)],
        4: [make_option("D", 70, (20, -10, 5), tag=StrategyTag.COMPETITIVE)],
        5: [make_option("E", 60, (20, -10, 5), tag=StrategyTag.REBUILD)],
    }


@pytest.fixture
def gated_catalog():
    """Year 1 choices gate year 2/3 options through shared lock tags."""
    return {
        1: [
            make_option("spend", 92, (20, -10, 5), unlocks=["star"], locks=["cap-used"]),
            make_option("save", 60, (-10, 20, 5), unlocks=["picks"]),
        ],
        2: [
            make_option("sign-fa", 90, (15, -5, 0), locks=["cap-used"]),
            make_option("develop", 65, (-5, 15, 5)),
            make_option("trade-picks", 85, (10, 0, 5), locks=["picks"]),
        ],
        3: [make_option("hold", 75, (0, 0, 15))],
        4: [make_option("hold4", 75, (0, 0, 15))],
        5: [make_option("hold5", 75, (0, 0, 15))],
    }


@pytest.fixture
def slider_scenario():
    return Scenario(
        id="mets",
        name="New York Mets",
        league="MLB",
        target=(70, 80, 95, 100, 80),
        starting_payroll=75,
        salary_cap=237,
        phase_hints={1: "Build carefully."},
    )


@pytest.fixture
def decision_scenario(win_now_catalog):
    return Scenario(
        id="contender",
        name="Contender",
        league="NBA",
        target=(90, 95, 100, 85, 70),
        starting_payroll=95,
        salary_cap=141,
        decisions={year: tuple(opts) for year, opts in win_now_catalog.items()},
    )
