"""Persistence helpers for match history using SQLAlchemy."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session, aliased

from domain.common import MatchHistoryEntry, MatchType
from models import Match, Player

_S1P1 = aliased(Player, name="s1p1")
_S1P2 = aliased(Player, name="s1p2")
_S2P1 = aliased(Player, name="s2p1")
_S2P2 = aliased(Player, name="s2p2")


def _pad(side: tuple[int, ...]) -> tuple[int, int | None]:
    return side[0], (side[1] if len(side) > 1 else None)


def insert_match(
    session: Session,
    *,
    match_type: MatchType,
    side1: tuple[int, ...],
    side2: tuple[int, ...],
    played_at: datetime | None = None,
) -> Match:
    """Insert a match row without a result; winner and delta are set by set_match_result."""
    side1_player1_id, side1_player2_id = _pad(side1)
    side2_player1_id, side2_player2_id = _pad(side2)
    match = Match(
        match_type=MatchType(match_type).value,
        side1_player1_id=side1_player1_id,
        side1_player2_id=side1_player2_id,
        side2_player1_id=side2_player1_id,
        side2_player2_id=side2_player2_id,
        winning_side=None,
        mmr_change=0,
        date=played_at or datetime.now(UTC).replace(tzinfo=None),
    )
    session.add(match)
    session.flush()
    return match


def set_match_result(session: Session, match_id: int, *, winning_side: int, mmr_change: int) -> None:
    session.execute(
        update(Match)
        .where(Match.id == match_id)
        .values(winning_side=winning_side, mmr_change=abs(mmr_change))
        .execution_options(synchronize_session=False)
    )


def count_matches(session: Session) -> int:
    result = session.scalar(select(func.count(Match.id)))
    return int(result or 0)


def list_matches(session: Session, *, limit: int | None = None) -> list[MatchHistoryEntry]:
    """Match history with participant names resolved, newest first."""
    statement = (
        select(
            Match.id,
            Match.match_type,
            Match.winning_side,
            Match.mmr_change,
            Match.date,
            _S1P1.name.label("side1_player1"),
            _S1P2.name.label("side1_player2"),
            _S2P1.name.label("side2_player1"),
            _S2P2.name.label("side2_player2"),
        )
        .select_from(Match)
        .join(_S1P1, Match.side1_player1_id == _S1P1.id)
        .outerjoin(_S1P2, Match.side1_player2_id == _S1P2.id)
        .join(_S2P1, Match.side2_player1_id == _S2P1.id)
        .outerjoin(_S2P2, Match.side2_player2_id == _S2P2.id)
        .order_by(Match.date.desc(), Match.id.desc())
    )
    if limit is not None:
        statement = statement.limit(limit)

    entries: list[MatchHistoryEntry] = []
    for row in session.execute(statement):
        entries.append(
            MatchHistoryEntry(
                match_id=row.id,
                match_type=MatchType(row.match_type),
                side1_names=tuple(name for name in (row.side1_player1, row.side1_player2) if name is not None),
                side2_names=tuple(name for name in (row.side2_player1, row.side2_player2) if name is not None),
                winning_side=row.winning_side,
                mmr_change=row.mmr_change,
                played_at=row.date,
            )
        )
    return entries
