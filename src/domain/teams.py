"""Explicit team creation and lookup."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from domain.common import Group, TeamWithPlayers
from domain.errors import NotFoundError, PersistenceError, ValidationError, ValidationRule
from domain.ratings.mmr import side_rating
from domain.validation import ensure_players_found, normalize_side, validate_same_group
from logging_config import get_logger
from repositories.player_repository import fetch_players_by_ids
from repositories.team_repository import (
    fetch_active_teams_with_players,
    fetch_team_with_players,
    find_team,
    insert_team,
    set_team_active,
    update_team_mmr,
)

log = get_logger(__name__)


def create_team(
    session_factory: sessionmaker[Session],
    player1_id: int,
    player2_id: int | None = None,
) -> TeamWithPlayers:
    """Get or create the team for a pairing (or a single player).

    Members are stored in ascending id order so the same two players always map to
    one row; the team rating starts at the rounded mean of the members' ratings.
    Reusing an inactive team reactivates it.
    """
    members = normalize_side(
        (player1_id,) if player2_id is None else (player1_id, player2_id),
        label="team",
    )
    if len(members) == 2 and members[0] == members[1]:
        raise ValidationError(
            ValidationRule.DUPLICATE_PARTICIPANT,
            "A player cannot be paired with themselves",
        )
    members = tuple(sorted(members))
    first = members[0]
    second = members[1] if len(members) > 1 else None

    with session_factory() as session:
        try:
            by_id = ensure_players_found(members, fetch_players_by_ids(session, members))
            validate_same_group(by_id[pid] for pid in members)

            existing = find_team(session, first, second)
            if existing is not None and existing.active_status:
                team_id = existing.id
                log.debug("reusing team_id=%d for players=%s", team_id, list(members))
            elif existing is not None:
                # Inactive teams missed rating refreshes, so they restart from the member mean.
                team_id = existing.id
                set_team_active(session, team_id, True)
                update_team_mmr(session, team_id, side_rating([by_id[pid].rating for pid in members]))
                log.info("reactivated team_id=%d for players=%s", team_id, list(members))
            else:
                team_id = insert_team(
                    session,
                    player1_id=first,
                    player2_id=second,
                    team_mmr=side_rating([by_id[pid].rating for pid in members]),
                )
                log.info("created team_id=%d for players=%s", team_id, list(members))

            team = fetch_team_with_players(session, team_id)
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise PersistenceError("Failed to create team") from exc
        except Exception:
            session.rollback()
            raise

    if team is None:
        raise NotFoundError("team", [team_id])
    return team


def get_team(session_factory: sessionmaker[Session], team_id: int) -> TeamWithPlayers:
    with session_factory() as session:
        try:
            team = fetch_team_with_players(session, team_id)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to load team {team_id}") from exc
    if team is None:
        raise NotFoundError("team", [team_id])
    return team


def list_active_teams(
    session_factory: sessionmaker[Session],
    group: Group | None = None,
) -> list[TeamWithPlayers]:
    with session_factory() as session:
        try:
            return fetch_active_teams_with_players(session, group=group)
        except SQLAlchemyError as exc:
            raise PersistenceError("Failed to list teams") from exc


__all__ = ["create_team", "get_team", "list_active_teams"]
