#!/usr/bin/env python3
"""Command-line front end for players, teams, match recording and history."""

from __future__ import annotations

import csv
import random
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Annotated, Optional

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from db import create_db_engine, create_session_factory
from domain.common import Group, MatchType
from domain.config import AppConfig, load_app_config
from domain.errors import NotFoundError, PersistenceError, ValidationError
from domain.matchmaking import generate_random_matchup
from domain.ratings.mmr import MatchupPreview
from domain.recording import MatchRecorder
from domain.teams import create_team, list_active_teams
from logging_config import get_logger, setup_logging
from repositories import add_player, ensure_schema, fetch_players, list_matches

log = get_logger("tennis_tinder.cli")

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Tennis Tinder: players, matchups and MMR tracking.",
)


@dataclass(frozen=True)
class CliState:
    config: AppConfig
    engine: Engine
    session_factory: sessionmaker[Session]


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", help="Path to a TOML config file."),
    ] = None,
    db_url: Annotated[
        Optional[str],
        typer.Option("--db-url", help="Database URL. Overrides [database].url from the config."),
    ] = None,
) -> None:
    try:
        config = load_app_config(config_path)
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc
    if db_url:
        config = replace(config, db_url=db_url)

    setup_logging(config.log_level)
    engine = create_db_engine(config.db_url)
    ctx.obj = CliState(
        config=config,
        engine=engine,
        session_factory=create_session_factory(engine),
    )


@contextmanager
def _domain_errors() -> Iterator[None]:
    """Render domain failures as short messages with distinct exit codes."""
    try:
        yield
    except ValidationError as exc:
        typer.echo(f"error [{exc.kind}:{exc.rule.value}]: {exc.message}", err=True)
        raise typer.Exit(code=2) from exc
    except NotFoundError as exc:
        typer.echo(f"error [not_found]: {exc}", err=True)
        raise typer.Exit(code=3) from exc
    except PersistenceError as exc:
        typer.echo(f"error [persistence]: {exc} (safe to retry)", err=True)
        raise typer.Exit(code=4) from exc
    except SQLAlchemyError as exc:
        log.exception("database command failed")
        typer.echo("error [persistence]: database operation failed", err=True)
        raise typer.Exit(code=4) from exc


def _echo_preview(preview: MatchupPreview) -> None:
    typer.echo(
        f"side1_mmr={preview.side1_rating} side2_mmr={preview.side2_rating} "
        f"competitiveness={preview.competitiveness} ({preview.competitiveness_label})"
    )
    typer.echo(
        f"win_probability side1={preview.side1_win_probability:.1%} "
        f"side2={preview.side2_win_probability:.1%}"
    )
    typer.echo(
        f"if side1 wins: {preview.if_side1_wins.winner_delta:+d}/{preview.if_side1_wins.loser_delta:+d} "
        f"if side2 wins: {preview.if_side2_wins.winner_delta:+d}/{preview.if_side2_wins.loser_delta:+d}"
    )


@app.command("init-db")
def init_db(ctx: typer.Context) -> None:
    """Create the players/teams/matches tables if missing."""
    state: CliState = ctx.obj
    with _domain_errors():
        ensure_schema(state.engine)
    typer.echo("schema ready")


@app.command("add-player")
def add_player_command(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Display name.")],
    group: Annotated[Group, typer.Option("--group", help="Skill group.")],
) -> None:
    """Add one player with the configured initial MMR."""
    state: CliState = ctx.obj
    name = name.strip()
    if not name:
        raise typer.BadParameter("name must not be empty")
    with _domain_errors(), state.session_factory() as session, session.begin():
        player = add_player(session, name=name, group=group, mmr=state.config.mmr.initial_rating)
    typer.echo(f"added player_id={player.player_id} name={player.name} group={player.group.value}")


@app.command("import-players")
def import_players(
    ctx: typer.Context,
    csv_path: Annotated[Path, typer.Argument(help="CSV with a header row and columns A,B.")],
) -> None:
    """Import players from a two-column CSV; column A feeds group A, column B group B."""
    state: CliState = ctx.obj
    if not csv_path.is_file():
        raise typer.BadParameter(f"CSV file not found: {csv_path}", param_hint="CSV_PATH")

    rows: list[tuple[str, Group]] = []
    with csv_path.open(newline="", encoding="utf-8") as file:
        reader = csv.reader(file)
        next(reader, None)
        for line in reader:
            for group, cell in zip((Group.A, Group.B), line):
                if cell.strip():
                    rows.append((cell.strip(), group))

    with _domain_errors(), state.session_factory() as session, session.begin():
        for name, group in rows:
            add_player(session, name=name, group=group, mmr=state.config.mmr.initial_rating)

    imported_a = sum(1 for _, group in rows if group is Group.A)
    typer.echo(f"imported={len(rows)} group_a={imported_a} group_b={len(rows) - imported_a}")


@app.command("players")
def players(
    ctx: typer.Context,
    group: Annotated[Optional[Group], typer.Option("--group", help="Only show one group.")] = None,
) -> None:
    """Leaderboard ordered by MMR."""
    state: CliState = ctx.obj
    with _domain_errors(), state.session_factory() as session:
        rows = fetch_players(session, group=group)

    if not rows:
        typer.echo("No players found.")
        return
    for index, player in enumerate(rows, start=1):
        typer.echo(
            f"{index:2d}. [{player.player_id:3d}] {player.name:<20} group={player.group.value} "
            f"mmr={player.rating:5d} W-L={player.wins}-{player.losses} "
            f"win_rate={player.win_rate:.0%}"
        )


@app.command("create-team")
def create_team_command(
    ctx: typer.Context,
    player1_id: Annotated[int, typer.Argument()],
    player2_id: Annotated[Optional[int], typer.Argument()] = None,
) -> None:
    """Create (or reuse) the team for one or two players."""
    state: CliState = ctx.obj
    with _domain_errors():
        team = create_team(state.session_factory, player1_id, player2_id)
    typer.echo(
        f"team_id={team.team_id} members={team.display_name} "
        f"group={team.group.value} team_mmr={team.team_rating}"
    )


@app.command("teams")
def teams(
    ctx: typer.Context,
    group: Annotated[Optional[Group], typer.Option("--group", help="Only show one group.")] = None,
) -> None:
    """List active teams with member names."""
    state: CliState = ctx.obj
    with _domain_errors():
        rows = list_active_teams(state.session_factory, group=group)
    if not rows:
        typer.echo("No active teams.")
        return
    for team in rows:
        typer.echo(
            f"[{team.team_id:3d}] {team.display_name:<32} group={team.group.value} "
            f"team_mmr={team.team_rating}"
        )


@app.command("preview")
def preview(
    ctx: typer.Context,
    side1: Annotated[list[int], typer.Option("--side1", help="Player id; repeat for doubles.")],
    side2: Annotated[list[int], typer.Option("--side2", help="Player id; repeat for doubles.")],
) -> None:
    """Show competitiveness and projected MMR swings without recording anything."""
    state: CliState = ctx.obj
    recorder = MatchRecorder(state.session_factory, state.config.mmr)
    with _domain_errors():
        result = recorder.preview(side1, side2)
    _echo_preview(result)


@app.command("record")
def record(
    ctx: typer.Context,
    side1: Annotated[list[int], typer.Option("--side1", help="Player id; repeat for doubles.")],
    side2: Annotated[list[int], typer.Option("--side2", help="Player id; repeat for doubles.")],
    winner: Annotated[int, typer.Option("--winner", help="Winning side: 1 or 2.")],
) -> None:
    """Record a finished match and apply MMR changes."""
    state: CliState = ctx.obj
    recorder = MatchRecorder(state.session_factory, state.config.mmr)
    with _domain_errors():
        result = recorder.record_match(side1, side2, winner)
    typer.echo(
        f"match_id={result.match_id} type={result.match_type.value} "
        f"winner_delta={result.winner_delta:+d} loser_delta={result.loser_delta:+d}"
    )


@app.command("random-match")
def random_match(
    ctx: typer.Context,
    present: Annotated[
        list[int],
        typer.Option("--present", help="Id of a player present today; repeat for each."),
    ],
    match_type: Annotated[MatchType, typer.Option("--type")] = MatchType.DOUBLES,
    group: Annotated[Optional[Group], typer.Option("--group")] = None,
    seed: Annotated[Optional[int], typer.Option("--seed", help="Seed for reproducible draws.")] = None,
) -> None:
    """Draw a random matchup from the players marked present."""
    state: CliState = ctx.obj
    with _domain_errors():
        with state.session_factory() as session:
            roster = fetch_players(session)
        proposal = generate_random_matchup(
            roster,
            present,
            match_type,
            group=group,
            rng=random.Random(seed),
            params=state.config.mmr,
        )

    typer.echo(
        f"{proposal.match_type.value} group={proposal.group.value}: "
        f"{' & '.join(p.name for p in proposal.side1)} vs {' & '.join(p.name for p in proposal.side2)}"
    )
    typer.echo(
        f"side1_ids={','.join(map(str, proposal.side1_ids))} "
        f"side2_ids={','.join(map(str, proposal.side2_ids))}"
    )
    _echo_preview(proposal.preview)


@app.command("history")
def history(
    ctx: typer.Context,
    limit: Annotated[int, typer.Option("--limit", help="Number of matches to show.")] = 20,
) -> None:
    """Show recorded matches, newest first."""
    if limit <= 0:
        raise typer.BadParameter("--limit must be greater than 0")
    state: CliState = ctx.obj
    with _domain_errors(), state.session_factory() as session:
        entries = list_matches(session, limit=limit)

    if not entries:
        typer.echo("No matches recorded.")
        return
    for entry in entries:
        side1 = " & ".join(entry.side1_names)
        side2 = " & ".join(entry.side2_names)
        winner = " & ".join(entry.winner_names) or "-"
        typer.echo(
            f"[{entry.match_id:4d}] {entry.played_at:%Y-%m-%d %H:%M} {entry.match_type.value:<7} "
            f"{side1} vs {side2} winner={winner} mmr_change={entry.mmr_change}"
        )


if __name__ == "__main__":
    app()
