"""Schema bootstrap for the players/teams/matches tables."""

from __future__ import annotations

from sqlalchemy.engine import Engine

from models import Base, Match, Player, Team


def ensure_schema(engine: Engine) -> None:
    """Create all tables and indexes if they do not exist."""
    Base.metadata.create_all(
        bind=engine,
        tables=[Player.__table__, Team.__table__, Match.__table__],
    )
