"""Persistence helpers for teams using SQLAlchemy."""

from __future__ import annotations

from sqlalchemy import Select, select, update
from sqlalchemy.orm import Session, aliased

from domain.common import Group, TeamWithPlayers
from models import Player, Team

_Member1 = aliased(Player, name="member1")
_Member2 = aliased(Player, name="member2")


def _team_with_players_statement() -> Select:
    return (
        select(
            Team.id,
            Team.player1_id,
            _Member1.name.label("player1_name"),
            _Member1.group_name.label("group_name"),
            Team.player2_id,
            _Member2.name.label("player2_name"),
            Team.team_mmr,
            Team.active_status,
        )
        .select_from(Team)
        .join(_Member1, Team.player1_id == _Member1.id)
        .outerjoin(_Member2, Team.player2_id == _Member2.id)
    )


def _row_to_team(row) -> TeamWithPlayers:
    return TeamWithPlayers(
        team_id=row.id,
        player1_id=row.player1_id,
        player1_name=row.player1_name,
        player2_id=row.player2_id,
        player2_name=row.player2_name,
        group=Group(row.group_name),
        team_rating=row.team_mmr,
        active=bool(row.active_status),
    )


def find_team(session: Session, player1_id: int, player2_id: int | None) -> Team | None:
    """Look up the team row for an exact (already normalized) pairing."""
    statement = select(Team).where(Team.player1_id == player1_id)
    if player2_id is None:
        statement = statement.where(Team.player2_id.is_(None))
    else:
        statement = statement.where(Team.player2_id == player2_id)
    return session.execute(statement).scalars().first()


def insert_team(session: Session, *, player1_id: int, player2_id: int | None, team_mmr: int) -> int:
    team = Team(
        player1_id=player1_id,
        player2_id=player2_id,
        team_mmr=team_mmr,
        active_status=True,
    )
    session.add(team)
    session.flush()
    return team.id


def fetch_team_with_players(session: Session, team_id: int) -> TeamWithPlayers | None:
    row = session.execute(_team_with_players_statement().where(Team.id == team_id)).first()
    return None if row is None else _row_to_team(row)


def fetch_active_teams_with_players(
    session: Session,
    group: Group | None = None,
) -> list[TeamWithPlayers]:
    statement = _team_with_players_statement().where(Team.active_status.is_(True))
    if group is not None:
        statement = statement.where(_Member1.group_name == Group(group).value)
    statement = statement.order_by(Team.team_mmr.desc(), Team.id)
    return [_row_to_team(row) for row in session.execute(statement)]


def fetch_active_team_for_pairing(
    session: Session,
    player1_id: int,
    player2_id: int | None,
) -> Team | None:
    team = find_team(session, player1_id, player2_id)
    if team is None or not team.active_status:
        return None
    return team


def set_team_active(session: Session, team_id: int, active: bool) -> None:
    session.execute(
        update(Team)
        .where(Team.id == team_id)
        .values(active_status=active)
        .execution_options(synchronize_session=False)
    )


def update_team_mmr(session: Session, team_id: int, team_mmr: int) -> None:
    session.execute(
        update(Team)
        .where(Team.id == team_id)
        .values(team_mmr=team_mmr)
        .execution_options(synchronize_session=False)
    )
