"""teams table model."""

from __future__ import annotations

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, Integer, UniqueConstraint, text, true
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class Team(Base):
    """Persisted pairing of players; player2_id is null for a singles team."""

    __tablename__ = "teams"
    __table_args__ = (
        UniqueConstraint("player1_id", "player2_id", name="uq_teams_pairing"),
        # NULLs are distinct under UNIQUE, so singles teams need their own index.
        Index(
            "uq_teams_singles",
            "player1_id",
            unique=True,
            postgresql_where=text("player2_id IS NULL"),
            sqlite_where=text("player2_id IS NULL"),
        ),
        CheckConstraint(
            "player2_id IS NULL OR player1_id <> player2_id",
            name="ck_teams_distinct_members",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    player1_id: Mapped[int] = mapped_column(ForeignKey("players.id"), nullable=False)
    player2_id: Mapped[int | None] = mapped_column(ForeignKey("players.id"), nullable=True)
    team_mmr: Mapped[int] = mapped_column(Integer, nullable=False)
    active_status: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )
