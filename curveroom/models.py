"""Data models for the curveroom payroll simulation.

StrategyPath/Tier/GameMode enums, DecisionOption, Scenario, ScoreResult:
the typed structures that flow through scenarios → decisions → scorer → CLI.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Optional

from curveroom.errors import CatalogError

YEARS = (1, 2, 3, 4, 5)
HORIZON = len(YEARS)

# Payroll values are percentages of the cap; overspend past 100 is luxury tax.
MIN_PAYROLL = 0
MAX_PAYROLL = 140


class StrategyPath(str, Enum):
    """Strategic paths that decision-mode choices accumulate weight toward."""

    WIN_NOW = "winNow"
    REBUILD = "rebuild"
    HYBRID = "hybrid"


class Tier(str, Enum):
    """Reward brackets."""

    GOLD = "gold"
    SILVER = "silver"
    BRONZE = "bronze"
    NONE = "none"


class GameMode(str, Enum):
    SLIDER = "slider"
    DECISIONS = "decisions"


class StrategyTag(str, Enum):
    """Narrative classification of a single decision."""

    SPEND_HEAVY = "SPEND_HEAVY"
    COMPETITIVE = "COMPETITIVE"
    MODERATE = "MODERATE"
    REBUILD = "REBUILD"


@dataclass(frozen=True)
class TierBand:
    tier: Tier
    min_score: int


@dataclass(frozen=True)
class Strategy:
    """Strategy metadata attached to a decision option."""

    tag: StrategyTag
    baseline: int
    flavor: str = ""


def _require(record: dict, key: str, owner: str):
    if key not in record:
        raise CatalogError(owner, f"missing required field '{key}'")
    return record[key]


def _as_int(value, owner: str, what: str) -> int:
    # bool is an int subclass; a JSON true/false is never a payroll
    if isinstance(value, bool) or not isinstance(value, int):
        raise CatalogError(owner, f"{what} must be an integer, got {value!r}")
    return value


@dataclass(frozen=True)
class DecisionOption:
    """One authored choice for a (scenario, year) pair."""

    id: str
    title: str
    payroll: int
    description: str = ""
    unlocks: frozenset[str] = frozenset()
    locks: frozenset[str] = frozenset()
    path_weights: Mapping[StrategyPath, int] = field(default_factory=dict, hash=False)
    strategy: Optional[Strategy] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "path_weights", MappingProxyType(dict(self.path_weights)))

    @classmethod
    def from_dict(cls, d: dict, owner: str = "?") -> DecisionOption:
        """Build an option from a teams.json record, validating every field.

        Raises CatalogError naming `owner` (the scenario id) on any
        missing or malformed field.
        """
        if not isinstance(d, dict):
            raise CatalogError(owner, f"decision entry must be an object, got {d!r}")
        option_id = _require(d, "id", owner)
        if not isinstance(option_id, str) or not option_id:
            raise CatalogError(owner, f"decision id must be a non-empty string, got {option_id!r}")
        where = f"{owner}/{option_id}"

        payroll = _as_int(_require(d, "payrollPercentage", where), where, "payrollPercentage")
        if not MIN_PAYROLL <= payroll <= MAX_PAYROLL:
            raise CatalogError(
                where, f"payrollPercentage {payroll} outside {MIN_PAYROLL}-{MAX_PAYROLL}"
            )

        flags = d.get("flags", {})
        if not isinstance(flags, dict):
            raise CatalogError(where, "flags must be an object")
        unlocks = flags.get("unlock", [])
        locks = flags.get("lock", [])
        for name, tags in (("unlock", unlocks), ("lock", locks)):
            if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
                raise CatalogError(where, f"flags.{name} must be a list of strings")

        raw_weights = _require(d, "pathWeights", where)
        if not isinstance(raw_weights, dict):
            raise CatalogError(where, "pathWeights must be an object")
        weights: dict[StrategyPath, int] = {}
        for path_name, weight in raw_weights.items():
            try:
                path = StrategyPath(path_name)
            except ValueError:
                raise CatalogError(where, f"unknown path '{path_name}' in pathWeights") from None
            weights[path] = _as_int(weight, where, f"pathWeights.{path_name}")

        strategy = None
        raw_strategy = d.get("strategy")
        if raw_strategy is not None:
            if not isinstance(raw_strategy, dict):
                raise CatalogError(where, "strategy must be an object")
            try:
                tag = StrategyTag(_require(raw_strategy, "tag", where))
            except ValueError:
                raise CatalogError(where, f"unknown strategy tag {raw_strategy.get('tag')!r}") from None
            strategy = Strategy(
                tag=tag,
                baseline=_as_int(_require(raw_strategy, "baseline", where), where, "strategy.baseline"),
                flavor=raw_strategy.get("flavor", ""),
            )

        return cls(
            id=option_id,
            title=d.get("title", option_id),
            payroll=payroll,
            description=d.get("description", ""),
            unlocks=frozenset(unlocks),
            locks=frozenset(locks),
            path_weights=weights,
            strategy=strategy,
        )


@dataclass(frozen=True)
class Scenario:
    """A selectable team: target curve, hints and optional decision catalog."""

    id: str
    name: str
    target: tuple[int, ...]
    starting_payroll: int
    league: str = ""
    salary_cap: float = 0.0
    luxury_tax: float = 0.0
    situation: str = ""
    difficulty: str = ""
    challenge: str = ""
    phase_hints: Mapping[int, str] = field(default_factory=dict, hash=False)
    decisions: Mapping[int, tuple[DecisionOption, ...]] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # read-only: one loaded catalog is shared by every session
        object.__setattr__(self, "phase_hints", MappingProxyType(dict(self.phase_hints)))
        object.__setattr__(self, "decisions", MappingProxyType(dict(self.decisions)))

    @property
    def mode(self) -> GameMode:
        if any(self.decisions.values()):
            return GameMode.DECISIONS
        return GameMode.SLIDER

    @classmethod
    def from_dict(cls, scenario_id: str, d: dict) -> Scenario:
        """Deserialize and validate one teams.json record.

        Fails fast with CatalogError rather than letting a malformed
        catalog reach the engine.
        """
        if not isinstance(d, dict):
            raise CatalogError(scenario_id, "scenario record must be an object")

        target = _require(d, "idealCurve", scenario_id)
        if not isinstance(target, list) or len(target) != HORIZON:
            raise CatalogError(scenario_id, f"idealCurve must be a list of {HORIZON} integers")
        for value in target:
            if not 0 <= _as_int(value, scenario_id, "idealCurve value") <= 100:
                raise CatalogError(scenario_id, f"idealCurve value {value} outside 0-100")

        name = _require(d, "name", scenario_id)
        if not isinstance(name, str) or not name:
            raise CatalogError(scenario_id, f"name must be a non-empty string, got {name!r}")

        raw_hints = d.get("phaseHints") or {}
        if not isinstance(raw_hints, dict):
            raise CatalogError(scenario_id, "phaseHints must be an object keyed by year")
        hints: dict[int, str] = {}
        for key, text in raw_hints.items():
            year = _year_key(key, scenario_id)
            if not isinstance(text, str):
                raise CatalogError(scenario_id, f"phase hint for year {year} must be a string")
            hints[year] = text

        raw_decisions = d.get("decisions") or {}
        if not isinstance(raw_decisions, dict):
            raise CatalogError(scenario_id, "decisions must be an object keyed by year")

        decisions: dict[int, tuple[DecisionOption, ...]] = {}
        seen: set[str] = set()
        for key, entries in raw_decisions.items():
            year = _year_key(key, scenario_id)
            if not isinstance(entries, list):
                raise CatalogError(scenario_id, f"decisions for year {year} must be a list")
            options = tuple(DecisionOption.from_dict(e, scenario_id) for e in entries)
            for option in options:
                if option.id in seen:
                    raise CatalogError(scenario_id, f"duplicate decision id '{option.id}'")
                seen.add(option.id)
            decisions[year] = options

        return cls(
            id=d.get("id", scenario_id),
            name=name,
            target=tuple(target),
            starting_payroll=_as_int(
                _require(d, "startingPayroll", scenario_id), scenario_id, "startingPayroll"
            ),
            league=d.get("league", ""),
            salary_cap=d.get("salaryCap", 0.0),
            luxury_tax=d.get("luxuryTax", 0.0),
            situation=d.get("situation", ""),
            difficulty=d.get("difficulty", ""),
            challenge=d.get("challenge", ""),
            phase_hints=hints,
            decisions=decisions,
        )


def _year_key(key, owner: str) -> int:
    """JSON object keys are strings; years are '1'..'5'."""
    try:
        year = int(key)
    except (TypeError, ValueError):
        raise CatalogError(owner, f"year key {key!r} is not a number") from None
    if year not in YEARS:
        raise CatalogError(owner, f"year key {year} outside 1-{HORIZON}")
    return year


@dataclass
class ValidationIssue:
    """A problem found by GameSession.validate(); reported, never corrected."""

    year: Optional[int]
    message: str
    severity: str = "error"


@dataclass
class CurveStats:
    avg: int = 0
    max: int = 0
    min: int = 0


@dataclass
class ScoreResult:
    """Final outcome of a play session."""

    score: int
    tier: Tier
    code: Optional[str]
    xp: int
    feedback: str
    curve: list[int] = field(default_factory=list)
    target: list[int] = field(default_factory=list)
    path: Optional[StrategyPath] = None
    scenario_name: str = ""

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "score": self.score,
            "tier": self.tier.value,
            "code": self.code,
            "xp": self.xp,
            "feedback": self.feedback,
            "path": self.path.value if self.path else None,
            "curve": list(self.curve),
            "target": list(self.target),
            "scenario_name": self.scenario_name,
        }
