"""Shared value types for players, teams and matches."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Group(str, Enum):
    """Fixed skill partition every match participant belongs to."""

    A = "A"
    B = "B"


class MatchType(str, Enum):
    """Side arity of a match."""

    SINGLES = "singles"
    DOUBLES = "doubles"

    @property
    def side_size(self) -> int:
        return 1 if self is MatchType.SINGLES else 2

    @classmethod
    def for_side_size(cls, size: int) -> MatchType:
        return cls.SINGLES if size == 1 else cls.DOUBLES


@dataclass(frozen=True)
class PlayerSnapshot:
    """Read-only view of one player row."""

    player_id: int
    name: str
    group: Group
    rating: int
    wins: int
    losses: int
    matches_played: int

    @property
    def win_rate(self) -> float:
        if self.matches_played == 0:
            return 0.0
        return self.wins / self.matches_played


@dataclass(frozen=True)
class TeamWithPlayers:
    """Team row with resolved member names and group."""

    team_id: int
    player1_id: int
    player1_name: str
    player2_id: int | None
    player2_name: str | None
    group: Group
    team_rating: int
    active: bool

    @property
    def is_singles(self) -> bool:
        return self.player2_id is None

    @property
    def display_name(self) -> str:
        if self.player2_name is None:
            return self.player1_name
        return f"{self.player1_name} & {self.player2_name}"


@dataclass(frozen=True)
class MatchRecord:
    """Outcome of one successful match recording."""

    match_id: int
    match_type: MatchType
    side1: tuple[int, ...]
    side2: tuple[int, ...]
    winning_side: int
    side1_rating: int
    side2_rating: int
    winner_delta: int
    loser_delta: int
    recorded_at: datetime

    @property
    def winners(self) -> tuple[int, ...]:
        return self.side1 if self.winning_side == 1 else self.side2

    @property
    def losers(self) -> tuple[int, ...]:
        return self.side2 if self.winning_side == 1 else self.side1


@dataclass(frozen=True)
class MatchHistoryEntry:
    """Stored match with participant names resolved for display."""

    match_id: int
    match_type: MatchType
    side1_names: tuple[str, ...]
    side2_names: tuple[str, ...]
    winning_side: int | None
    mmr_change: int
    played_at: datetime

    @property
    def winner_names(self) -> tuple[str, ...]:
        if self.winning_side == 1:
            return self.side1_names
        if self.winning_side == 2:
            return self.side2_names
        return ()


__all__ = [
    "Group",
    "MatchHistoryEntry",
    "MatchRecord",
    "MatchType",
    "PlayerSnapshot",
    "TeamWithPlayers",
]
