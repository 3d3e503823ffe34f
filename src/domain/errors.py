"""Error taxonomy for match recording and team management."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum


class ValidationRule(str, Enum):
    """Which input rule a ValidationError reports."""

    BAD_SHAPE = "bad_shape"
    DUPLICATE_PARTICIPANT = "duplicate_participant"
    GROUP_MISMATCH = "group_mismatch"
    INVALID_WINNER = "invalid_winner"
    INSUFFICIENT_PLAYERS = "insufficient_players"


class TennisTinderError(Exception):
    """Base class for all domain failures surfaced to callers."""


class ValidationError(TennisTinderError):
    """Malformed or business-rule-violating input. Never retried automatically."""

    def __init__(self, rule: ValidationRule, message: str) -> None:
        super().__init__(message)
        self.rule = rule
        self.message = message

    @property
    def kind(self) -> str:
        return "bad_input" if self.rule is ValidationRule.BAD_SHAPE else "business_rule"


class NotFoundError(TennisTinderError):
    """A referenced player or team does not exist."""

    def __init__(self, entity: str, missing_ids: Iterable[int]) -> None:
        self.entity = entity
        self.missing_ids = tuple(sorted(missing_ids))
        ids = ", ".join(str(value) for value in self.missing_ids)
        super().__init__(f"{entity} not found: {ids}")


class PersistenceError(TennisTinderError):
    """The storage layer failed; the transaction was rolled back before raising."""


__all__ = [
    "NotFoundError",
    "PersistenceError",
    "TennisTinderError",
    "ValidationError",
    "ValidationRule",
]
