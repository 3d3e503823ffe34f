"""Persistence helpers for players using SQLAlchemy."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from domain.common import Group, PlayerSnapshot
from models import Player


def to_snapshot(player: Player) -> PlayerSnapshot:
    return PlayerSnapshot(
        player_id=player.id,
        name=player.name,
        group=Group(player.group_name),
        rating=player.mmr,
        wins=player.wins,
        losses=player.losses,
        matches_played=player.matches_played,
    )


def add_player(session: Session, *, name: str, group: Group, mmr: int = 1200) -> PlayerSnapshot:
    """Insert one player with zeroed statistics."""
    player = Player(
        name=name,
        group_name=Group(group).value,
        mmr=mmr,
        wins=0,
        losses=0,
        matches_played=0,
    )
    session.add(player)
    session.flush()
    return to_snapshot(player)


def fetch_player(session: Session, player_id: int) -> PlayerSnapshot | None:
    player = session.get(Player, player_id)
    return None if player is None else to_snapshot(player)


def fetch_players(session: Session, *, group: Group | None = None) -> list[PlayerSnapshot]:
    """All players, highest MMR first, optionally restricted to one group."""
    statement = select(Player).order_by(Player.mmr.desc(), Player.id)
    if group is not None:
        statement = statement.where(Player.group_name == Group(group).value)
    return [to_snapshot(player) for player in session.scalars(statement)]


def fetch_players_by_ids(session: Session, player_ids: Iterable[int]) -> list[PlayerSnapshot]:
    ids = sorted(set(player_ids))
    if not ids:
        return []
    statement = select(Player).where(Player.id.in_(ids)).order_by(Player.id)
    return [to_snapshot(player) for player in session.scalars(statement)]


def increment_player_stats(session: Session, player_id: int, mmr_delta: int, *, won: bool) -> int:
    """Apply one match outcome to a player's counters; returns the affected row count."""
    statement = (
        update(Player)
        .where(Player.id == player_id)
        .values(
            mmr=Player.mmr + mmr_delta,
            wins=Player.wins + (1 if won else 0),
            losses=Player.losses + (0 if won else 1),
            matches_played=Player.matches_played + 1,
        )
        .execution_options(synchronize_session=False)
    )
    result = session.execute(statement)
    return int(result.rowcount or 0)
