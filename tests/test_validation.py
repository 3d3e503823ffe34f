"""Unit tests for side/winner validation rules."""

from __future__ import annotations

import pytest

from domain.common import Group, MatchType, PlayerSnapshot
from domain.errors import NotFoundError, ValidationError, ValidationRule
from domain.validation import (
    ensure_players_found,
    normalize_side,
    validate_same_group,
    validate_sides,
    validate_winning_side,
)


def _player(player_id: int, group: Group = Group.A, rating: int = 1200) -> PlayerSnapshot:
    return PlayerSnapshot(
        player_id=player_id,
        name=f"p{player_id}",
        group=group,
        rating=rating,
        wins=0,
        losses=0,
        matches_played=0,
    )


def test_singles_and_doubles_sides_are_normalized() -> None:
    assert validate_sides([1], [2]) == ((1,), (2,), MatchType.SINGLES)
    assert validate_sides(1, 2) == ((1,), (2,), MatchType.SINGLES)
    assert validate_sides((1, 2), [3, 4]) == ((1, 2), (3, 4), MatchType.DOUBLES)


@pytest.mark.parametrize(
    ("side1", "side2"),
    [
        ([], [1]),
        ([1, 2, 3], [4, 5, 6]),
        ([1], [2, 3]),
        ("12", [3]),
        ([1, "2"], [3, 4]),
        ([True], [2]),
        (None, [2]),
    ],
)
def test_bad_shapes_are_rejected(side1: object, side2: object) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_sides(side1, side2)  # type: ignore[arg-type]
    assert excinfo.value.rule is ValidationRule.BAD_SHAPE
    assert excinfo.value.kind == "bad_input"


def test_player_on_both_sides_is_rejected() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_sides([1, 2], [1, 3])
    assert excinfo.value.rule is ValidationRule.DUPLICATE_PARTICIPANT
    assert excinfo.value.kind == "business_rule"
    assert "[1]" in str(excinfo.value)


def test_player_paired_with_themselves_is_rejected() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_sides([1, 1], [2, 3])
    assert excinfo.value.rule is ValidationRule.DUPLICATE_PARTICIPANT
    assert "themselves" in str(excinfo.value)


def test_singles_against_self_is_rejected() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_sides([7], [7])
    assert excinfo.value.rule is ValidationRule.DUPLICATE_PARTICIPANT


@pytest.mark.parametrize("winner", [0, 3, -1, "1", None, True, 1.0])
def test_invalid_winning_side(winner: object) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_winning_side(winner)
    assert excinfo.value.rule is ValidationRule.INVALID_WINNER


def test_valid_winning_side() -> None:
    assert validate_winning_side(1) == 1
    assert validate_winning_side(2) == 2


def test_missing_players_are_reported_together() -> None:
    with pytest.raises(NotFoundError) as excinfo:
        ensure_players_found([1, 9, 2, 8], [_player(1), _player(2)])
    assert excinfo.value.entity == "player"
    assert excinfo.value.missing_ids == (8, 9)


def test_found_players_are_indexed_by_id() -> None:
    by_id = ensure_players_found([2, 1], [_player(1), _player(2)])
    assert sorted(by_id) == [1, 2]


def test_mixed_groups_are_rejected() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_same_group([_player(1, Group.A), _player(2, Group.B)])
    assert excinfo.value.rule is ValidationRule.GROUP_MISMATCH


def test_single_group_passes() -> None:
    validate_same_group([_player(1, Group.B), _player(2, Group.B)])
    validate_same_group([])


def test_normalize_side_labels_errors() -> None:
    with pytest.raises(ValidationError, match="team must contain"):
        normalize_side([1, 2, 3], label="team")
