"""CLI for the curveroom payroll simulation.

Usage:
    python -m curveroom list                                # Show teams
    python -m curveroom show knicks                         # Target, hints, decisions
    python -m curveroom play mets 70 80 95 100 80           # Slider-mode score
    python -m curveroom decide knicks 1=knicks-y1-extend ...  # Decision-mode score
    python -m curveroom options knicks 3 2=knicks-y2-deadline # What's still open
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from curveroom.decisions import check_year
from curveroom.errors import CurveRoomError, InvalidInput
from curveroom.game import GameSession
from curveroom.models import YEARS, GameMode, Scenario
from curveroom.scenarios import get_scenario, list_scenarios, scenarios_by_league
from curveroom.scorer import render_result

LOG_LEVEL_ENV = "CURVEROOM_LOG_LEVEL"

app = typer.Typer(
    name="curveroom",
    help="The Curve Room: payroll curve simulation",
    no_args_is_help=True,
)
console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    data: Optional[Path] = typer.Option(None, "--data", help="Teams JSON file (overrides CURVEROOM_TEAMS_PATH)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine state transitions"),
) -> None:
    """Pick a team, shape its five-year payroll curve, and get scored."""
    _configure_logging(verbose)
    ctx.obj = {"data": data}


def _load(ctx: typer.Context, team: str) -> Scenario:
    try:
        scenario = get_scenario(team, ctx.obj["data"])
    except CurveRoomError as e:
        console.print(f"[red]Bad teams data: {e}[/red]")
        raise typer.Exit(1)
    if scenario is None:
        console.print(f"[red]Unknown team: {team}[/red]. Run 'list' to see teams.")
        raise typer.Exit(1)
    return scenario


def _parse_choice(raw: str) -> tuple[int, str]:
    """'3=knicks-y3-tax' → (3, 'knicks-y3-tax')"""
    year, sep, option_id = raw.partition("=")
    if not sep or not option_id or not year.strip().isdigit():
        raise InvalidInput(f"choice must look like YEAR=OPTION_ID, got {raw!r}")
    return check_year(int(year)), option_id


def _apply_choices(session: GameSession, choices: list[str], strict: bool) -> None:
    for raw in choices:
        year, option_id = _parse_choice(raw)
        if strict:
            open_ids = {o.id for o in session.available_options(year)}
            if option_id not in open_ids and session.graph is not None:
                tags = ", ".join(session.graph.locked_by(year, option_id)) or "?"
                raise InvalidInput(f"{option_id} is locked by: {tags}")
        session.apply_decision(year, option_id)


def _render_issues(session: GameSession) -> None:
    for issue in session.validate():
        color = "yellow" if issue.severity == "warning" else "red"
        console.print(f"  [{color}]{issue.severity}[/{color}] {issue.message}")


@app.command("list")
def cmd_list(
    ctx: typer.Context,
    league: Optional[str] = typer.Option(None, "--league", "-l", help="Filter by league: NBA, MLB, NFL"),
) -> None:
    """Show available teams."""
    data = ctx.obj["data"]
    try:
        scenarios = scenarios_by_league(league, data) if league else list_scenarios(data)
    except CurveRoomError as e:
        console.print(f"[red]Bad teams data: {e}[/red]")
        raise typer.Exit(1)
    if not scenarios:
        console.print("[yellow]No teams found.[/yellow]")
        raise typer.Exit(1)

    table = Table(title="Available Teams", show_header=True, header_style="bold")
    table.add_column("Id", style="green", min_width=8)
    table.add_column("Name", min_width=20)
    table.add_column("League")
    table.add_column("Mode")
    table.add_column("Difficulty")

    for s in scenarios:
        mode_style = "cyan" if s.mode is GameMode.DECISIONS else "white"
        table.add_row(s.id, s.name, s.league, f"[{mode_style}]{s.mode.value}[/{mode_style}]", s.difficulty)

    console.print()
    console.print(table)
    console.print()


@app.command("show")
def cmd_show(
    ctx: typer.Context,
    team: str = typer.Argument(help="Team id (e.g., 'knicks')"),
) -> None:
    """Show a team's target curve, yearly hints and decision catalog."""
    scenario = _load(ctx, team)
    session = GameSession(scenario)

    console.print(f"\n[bold]{scenario.name}[/bold] [dim]({scenario.league}, {scenario.situation})[/dim]")
    if scenario.challenge:
        console.print(scenario.challenge)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Year", justify="right")
    table.add_column("Phase")
    table.add_column("Target", justify="right", style="green")
    table.add_column("Hint")
    for year in YEARS:
        name, _ = session.phase(year)
        table.add_row(str(year), name, f"{scenario.target[year - 1]}%", session.hint(year))
    console.print(table)

    if scenario.mode is GameMode.DECISIONS:
        for year in YEARS:
            _render_options(session, year)


def _render_options(session: GameSession, year: int) -> None:
    open_ids = {o.id for o in session.available_options(year)}
    chosen = session.current_option(year)

    table = Table(title=f"Year {year} decisions", show_header=True, header_style="bold")
    table.add_column("Id", style="cyan")
    table.add_column("Title")
    table.add_column("Payroll", justify="right")
    table.add_column("Strategy")
    table.add_column("Unlocks")
    table.add_column("Locks")
    table.add_column("Status")

    for option in session.all_options(year):
        if chosen is not None and chosen.id == option.id:
            status = "[green]selected[/green]"
        elif option.id in open_ids:
            status = "open"
        else:
            status = "[red]locked[/red]"
        table.add_row(
            option.id,
            option.title,
            f"{option.payroll}%",
            option.strategy.tag.value if option.strategy else "--",
            ", ".join(sorted(option.unlocks)) or "--",
            ", ".join(sorted(option.locks)) or "--",
            status,
        )
    console.print(table)


@app.command("play")
def cmd_play(
    ctx: typer.Context,
    team: str = typer.Argument(help="Team id (e.g., 'mets')"),
    payroll: list[int] = typer.Argument(help="Five payroll percentages, one per year"),
) -> None:
    """Score a slider-mode curve against the team's target."""
    scenario = _load(ctx, team)
    if len(payroll) != len(YEARS):
        console.print(f"[red]Expected {len(YEARS)} payroll values, got {len(payroll)}[/red]")
        raise typer.Exit(1)

    # Slider scoring applies to any team, decision catalog or not.
    session = GameSession(scenario, mode=GameMode.SLIDER)
    try:
        for year, value in zip(YEARS, payroll):
            session.set_payroll(year, value)
    except CurveRoomError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    render_result(session.finish(), console)
    _render_issues(session)


@app.command("decide")
def cmd_decide(
    ctx: typer.Context,
    team: str = typer.Argument(help="Team id with a decision catalog (e.g., 'knicks')"),
    choices: list[str] = typer.Argument(help="Choices as YEAR=OPTION_ID, applied in order"),
    strict: bool = typer.Option(False, "--strict", help="Refuse options locked by earlier choices"),
    retract: bool = typer.Option(False, "--retract", help="Re-choosing a year removes the old choice's tags and weights"),
) -> None:
    """Apply decisions in order and score the resulting curve by strategic path."""
    scenario = _load(ctx, team)
    session = GameSession(scenario, retract_on_overwrite=retract)
    try:
        _apply_choices(session, choices, strict)
    except CurveRoomError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if session.graph is not None and not session.graph.is_complete:
        unset = [str(y) for y, s in zip(YEARS, session.graph.selections) if s is None]
        console.print(f"[yellow]No decision for year(s) {', '.join(unset)}; scored at 50%[/yellow]")

    render_result(session.finish(), console)
    _render_issues(session)


@app.command("options")
def cmd_options(
    ctx: typer.Context,
    team: str = typer.Argument(help="Team id with a decision catalog"),
    year: int = typer.Argument(help="Year to inspect (1-5)"),
    choices: Optional[list[str]] = typer.Argument(None, help="Earlier choices as YEAR=OPTION_ID"),
) -> None:
    """List open and locked options for a year after earlier choices."""
    scenario = _load(ctx, team)
    session = GameSession(scenario)
    try:
        _apply_choices(session, choices or [], strict=False)
        _render_options(session, check_year(year))
    except CurveRoomError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    if session.graph is not None and session.graph.active_tags:
        console.print(f"Active tags: {', '.join(sorted(session.graph.active_tags))}")


if __name__ == "__main__":
    app()
