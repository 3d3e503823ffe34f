"""players table model."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class Player(Base):
    """Club member with an MMR and cumulative match statistics."""

    __tablename__ = "players"
    __table_args__ = (
        CheckConstraint("group_name IN ('A', 'B')", name="ck_players_group_name"),
        CheckConstraint("matches_played = wins + losses", name="ck_players_matches_played"),
        Index("idx_players_group_mmr", "group_name", "mmr"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    group_name: Mapped[str] = mapped_column(String(1), nullable=False)
    mmr: Mapped[int] = mapped_column(Integer, nullable=False, default=1200, server_default="1200")
    wins: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    losses: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    matches_played: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
    )
