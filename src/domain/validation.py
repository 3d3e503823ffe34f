"""Input checks shared by match recording, previews and team creation."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from domain.common import MatchType, PlayerSnapshot
from domain.errors import NotFoundError, ValidationError, ValidationRule

VALID_WINNING_SIDES = (1, 2)


def _is_player_id(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def normalize_side(side: Sequence[int] | int, *, label: str) -> tuple[int, ...]:
    """Turn one side into a tuple of 1 or 2 player ids."""
    if _is_player_id(side):
        members: tuple[object, ...] = (side,)
    elif isinstance(side, (str, bytes)) or not isinstance(side, Sequence):
        raise ValidationError(
            ValidationRule.BAD_SHAPE,
            f"{label} must be a player id or a sequence of player ids",
        )
    else:
        members = tuple(side)

    if len(members) not in (1, 2):
        raise ValidationError(
            ValidationRule.BAD_SHAPE,
            f"{label} must contain 1 (singles) or 2 (doubles) players, got {len(members)}",
        )
    bad_values = [value for value in members if not _is_player_id(value)]
    if bad_values:
        raise ValidationError(
            ValidationRule.BAD_SHAPE,
            f"{label} contains non-integer player ids: {bad_values!r}",
        )
    return tuple(int(value) for value in members)  # type: ignore[call-overload]


def validate_sides(
    side1: Sequence[int] | int,
    side2: Sequence[int] | int,
) -> tuple[tuple[int, ...], tuple[int, ...], MatchType]:
    """Check arity and participant uniqueness; return normalized sides and match type."""
    first = normalize_side(side1, label="side1")
    second = normalize_side(side2, label="side2")

    if len(first) != len(second):
        raise ValidationError(
            ValidationRule.BAD_SHAPE,
            f"Both sides must use the same arity (side1={len(first)}, side2={len(second)})",
        )

    for label, side in (("side1", first), ("side2", second)):
        if len(side) == 2 and side[0] == side[1]:
            raise ValidationError(
                ValidationRule.DUPLICATE_PARTICIPANT,
                f"A player cannot be paired with themselves ({label}={list(side)})",
            )

    participants = first + second
    if len(set(participants)) != len(participants):
        duplicates = sorted({pid for pid in participants if participants.count(pid) > 1})
        raise ValidationError(
            ValidationRule.DUPLICATE_PARTICIPANT,
            f"All players must be different; duplicated ids: {duplicates}",
        )

    return first, second, MatchType.for_side_size(len(first))


def validate_winning_side(winning_side: object) -> int:
    if not _is_player_id(winning_side) or winning_side not in VALID_WINNING_SIDES:
        raise ValidationError(
            ValidationRule.INVALID_WINNER,
            f"winning_side must be 1 or 2, got {winning_side!r}",
        )
    return int(winning_side)  # type: ignore[call-overload]


def ensure_players_found(
    requested_ids: Iterable[int],
    players: Sequence[PlayerSnapshot],
) -> dict[int, PlayerSnapshot]:
    """Index players by id, raising NotFoundError for any requested id that is missing."""
    by_id = {player.player_id: player for player in players}
    missing = [pid for pid in requested_ids if pid not in by_id]
    if missing:
        raise NotFoundError("player", missing)
    return by_id


def validate_same_group(players: Iterable[PlayerSnapshot]) -> None:
    players = list(players)
    groups = {player.group for player in players}
    if len(groups) > 1:
        detail = ", ".join(f"{player.player_id}={player.group.value}" for player in players)
        raise ValidationError(
            ValidationRule.GROUP_MISMATCH,
            f"All players must be from the same group ({detail})",
        )


__all__ = [
    "VALID_WINNING_SIDES",
    "ensure_players_found",
    "normalize_side",
    "validate_same_group",
    "validate_sides",
    "validate_winning_side",
]
