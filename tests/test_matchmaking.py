"""Unit tests for random matchup generation from an attendance selection."""

from __future__ import annotations

import random

import pytest

from domain.common import Group, MatchType, PlayerSnapshot
from domain.errors import NotFoundError, ValidationError, ValidationRule
from domain.matchmaking import eligible_pool, generate_random_matchup


def _players() -> list[PlayerSnapshot]:
    specs = [
        (1, Group.A, 1200),
        (2, Group.A, 1250),
        (3, Group.A, 1300),
        (4, Group.A, 1150),
        (5, Group.A, 1220),
        (6, Group.B, 1200),
        (7, Group.B, 1180),
    ]
    return [
        PlayerSnapshot(
            player_id=player_id,
            name=f"player{player_id}",
            group=group,
            rating=rating,
            wins=0,
            losses=0,
            matches_played=0,
        )
        for player_id, group, rating in specs
    ]


def test_doubles_draw_picks_four_distinct_present_players() -> None:
    proposal = generate_random_matchup(
        _players(),
        {1, 2, 3, 4, 5},
        MatchType.DOUBLES,
        rng=random.Random(7),
    )

    picked = proposal.side1_ids + proposal.side2_ids
    assert len(proposal.side1) == 2
    assert len(proposal.side2) == 2
    assert len(set(picked)) == 4
    assert set(picked) <= {1, 2, 3, 4, 5}
    assert proposal.group is Group.A


def test_singles_draw_picks_two_players() -> None:
    proposal = generate_random_matchup(_players(), [6, 7], MatchType.SINGLES, rng=random.Random(1))

    assert sorted(proposal.side1_ids + proposal.side2_ids) == [6, 7]
    assert proposal.group is Group.B
    assert 0.0 < proposal.preview.side1_win_probability < 1.0


def test_same_seed_gives_same_draw() -> None:
    first = generate_random_matchup(_players(), range(1, 6), MatchType.DOUBLES, rng=random.Random(42))
    second = generate_random_matchup(_players(), range(1, 6), MatchType.DOUBLES, rng=random.Random(42))
    assert first.side1_ids == second.side1_ids
    assert first.side2_ids == second.side2_ids


def test_every_present_player_can_be_drawn() -> None:
    rng = random.Random(3)
    seen: set[int] = set()
    for _ in range(200):
        proposal = generate_random_matchup(_players(), {1, 2, 3, 4, 5}, MatchType.SINGLES, rng=rng)
        seen.update(proposal.side1_ids + proposal.side2_ids)
    assert seen == {1, 2, 3, 4, 5}


def test_preview_matches_drawn_sides() -> None:
    proposal = generate_random_matchup(_players(), {1, 2, 3, 4}, MatchType.DOUBLES, rng=random.Random(5))
    side1 = sum(player.rating for player in proposal.side1) // 2
    side2 = sum(player.rating for player in proposal.side2) // 2
    assert proposal.preview.side1_rating == side1
    assert proposal.preview.side2_rating == side2


def test_group_filter_restricts_pool() -> None:
    proposal = generate_random_matchup(
        _players(),
        {1, 2, 6, 7},
        MatchType.SINGLES,
        group=Group.B,
        rng=random.Random(0),
    )
    assert sorted(proposal.side1_ids + proposal.side2_ids) == [6, 7]


def test_mixed_groups_without_filter_are_rejected() -> None:
    with pytest.raises(ValidationError) as excinfo:
        generate_random_matchup(_players(), {1, 2, 6, 7}, MatchType.SINGLES)
    assert excinfo.value.rule is ValidationRule.GROUP_MISMATCH


def test_not_enough_present_players() -> None:
    with pytest.raises(ValidationError) as excinfo:
        generate_random_matchup(_players(), {1, 2, 3}, MatchType.DOUBLES)
    assert excinfo.value.rule is ValidationRule.INSUFFICIENT_PLAYERS


def test_unknown_present_player() -> None:
    with pytest.raises(NotFoundError):
        eligible_pool(_players(), {1, 99})


def test_pool_is_empty_without_attendance() -> None:
    assert eligible_pool(_players(), set()) == []
