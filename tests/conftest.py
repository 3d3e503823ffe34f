"""Shared fixtures: an in-memory database seeded with a small club roster."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy.orm import Session, sessionmaker

from db import create_db_engine, create_session_factory
from domain.common import Group, PlayerSnapshot
from repositories import add_player, ensure_schema


@pytest.fixture()
def session_factory() -> Iterator[sessionmaker[Session]]:
    engine = create_db_engine("sqlite+pysqlite:///:memory:")
    ensure_schema(engine)
    factory = create_session_factory(engine)
    yield factory
    engine.dispose()


@pytest.fixture()
def roster(session_factory: sessionmaker[Session]) -> dict[str, PlayerSnapshot]:
    """Five group-A players at staggered ratings plus two group-B players."""
    seed = [
        ("alice", Group.A, 1200),
        ("bruno", Group.A, 1200),
        ("chen", Group.A, 1300),
        ("dara", Group.A, 1100),
        ("eli", Group.A, 1400),
        ("farah", Group.B, 1200),
        ("gus", Group.B, 1250),
    ]
    with session_factory() as session, session.begin():
        players = {
            name: add_player(session, name=name, group=group, mmr=mmr)
            for name, group, mmr in seed
        }
    return players
