"""Scenario loading for curveroom.

Scenarios (teams) live in a single JSON object keyed by team id:
    teams.json             shipped next to this module
    $CURVEROOM_TEAMS_PATH  overrides the shipped file
    fallback.py            embedded copy used when the file can't be read

Every record is validated as it is parsed, so a malformed catalog fails
here rather than in the middle of a session.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from curveroom.errors import CatalogError
from curveroom.models import Scenario
from curveroom.scenarios.fallback import FALLBACK_TEAMS

logger = logging.getLogger(__name__)

TEAMS_PATH_ENV = "CURVEROOM_TEAMS_PATH"


def _scenarios_root() -> Path:
    """Absolute path to the scenarios/ directory."""
    return Path(__file__).parent


def data_path(path: Optional[Path] = None) -> Path:
    """Resolve the teams file: explicit path, then env var, then shipped file."""
    if path:
        return Path(path)
    override = os.environ.get(TEAMS_PATH_ENV)
    if override:
        return Path(override)
    return _scenarios_root() / "teams.json"


def parse_scenarios(raw: dict) -> dict[str, Scenario]:
    """Validate a raw teams mapping and build Scenario records.

    Raises CatalogError on the first malformed record.
    """
    if not isinstance(raw, dict):
        raise CatalogError("<root>", "teams data must be an object keyed by team id")
    return {team_id: Scenario.from_dict(team_id, record) for team_id, record in raw.items()}


def load_scenarios(path: Optional[Path] = None) -> dict[str, Scenario]:
    """Load all scenarios, substituting the embedded fallback on read failure.

    A file that can't be read or decoded is replaced by FALLBACK_TEAMS with
    a warning. A file that decodes but fails validation raises CatalogError.
    """
    p = data_path(path)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("could not load %s (%s); using embedded fallback data", p, e)
        raw = FALLBACK_TEAMS
    return parse_scenarios(raw)


def list_scenarios(path: Optional[Path] = None) -> list[Scenario]:
    """All scenarios in file order."""
    return list(load_scenarios(path).values())


def get_scenario(scenario_id: str, path: Optional[Path] = None) -> Optional[Scenario]:
    """Load a single scenario by id.

    Returns:
        The Scenario, or None if no team has that id.
    """
    return load_scenarios(path).get(scenario_id)


def scenarios_by_league(league: str, path: Optional[Path] = None) -> list[Scenario]:
    """Scenarios whose league matches (case-insensitive), e.g. 'NBA'."""
    wanted = league.lower()
    return [s for s in list_scenarios(path) if s.league.lower() == wanted]
