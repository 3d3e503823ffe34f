"""matches table model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class Match(Base):
    """One recorded singles/doubles result with direct player references per side."""

    __tablename__ = "matches"
    __table_args__ = (
        CheckConstraint("match_type IN ('singles', 'doubles')", name="ck_matches_match_type"),
        CheckConstraint(
            "winning_side IS NULL OR winning_side IN (1, 2)",
            name="ck_matches_winning_side",
        ),
        CheckConstraint("mmr_change >= 0", name="ck_matches_mmr_change"),
        Index("idx_matches_date", "date", "id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    match_type: Mapped[str] = mapped_column(String(16), nullable=False)
    side1_player1_id: Mapped[int] = mapped_column(ForeignKey("players.id"), nullable=False)
    side1_player2_id: Mapped[int | None] = mapped_column(ForeignKey("players.id"), nullable=True)
    side2_player1_id: Mapped[int] = mapped_column(ForeignKey("players.id"), nullable=False)
    side2_player2_id: Mapped[int | None] = mapped_column(ForeignKey("players.id"), nullable=True)
    winning_side: Mapped[int | None] = mapped_column(Integer, nullable=True)
    mmr_change: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
