"""Match recording and rating domain modules."""

from domain.common import Group, MatchHistoryEntry, MatchRecord, MatchType, PlayerSnapshot, TeamWithPlayers
from domain.errors import NotFoundError, PersistenceError, TennisTinderError, ValidationError, ValidationRule

__all__ = [
    "Group",
    "MatchHistoryEntry",
    "MatchRecord",
    "MatchType",
    "NotFoundError",
    "PersistenceError",
    "PlayerSnapshot",
    "TeamWithPlayers",
    "TennisTinderError",
    "ValidationError",
    "ValidationRule",
]
