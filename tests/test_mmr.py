"""Unit tests for MMR rating math."""

from __future__ import annotations

import pytest

from domain.ratings.mmr import (
    MmrParameters,
    calculate_expected_score,
    competitiveness_label,
    compute_competitiveness,
    compute_rating_change,
    compute_win_probability,
    preview_matchup,
    round_half_up,
    side_rating,
)


def test_mmr_parameters_defaults_are_expected_constants() -> None:
    params = MmrParameters()
    assert params.initial_rating == 1200
    assert params.k_factor == 32
    assert params.scale_factor == pytest.approx(400.0)
    assert params.competitive_threshold == 200


def test_equal_ratings_swing_half_the_k_factor() -> None:
    change = compute_rating_change(1200, 1200)
    assert change.winner_delta == 16
    assert change.loser_delta == -16


def test_favourite_win_gains_less() -> None:
    change = compute_rating_change(1400, 1200)
    assert calculate_expected_score(1400, 1200) == pytest.approx(0.7597, abs=1e-4)
    assert change.winner_delta == 8
    assert change.loser_delta == -8


def test_upset_win_gains_more() -> None:
    change = compute_rating_change(1200, 1400)
    assert change.winner_delta == 24
    assert change.loser_delta == -24


def test_k_factor_scales_the_swing() -> None:
    assert compute_rating_change(1200, 1200, k_factor=16).winner_delta == 8
    assert compute_rating_change(1200, 1200, k_factor=64).winner_delta == 32


@pytest.mark.parametrize(
    ("winner", "loser"),
    [
        (1200, 1200),
        (1500, 900),
        (900, 1500),
        (0, 0),
        (-400, 2400),
        (10_000, -10_000),
        (-10_000_000, 10_000_000),
        (10**400, 0),
        (0, 10**400),
    ],
)
def test_delta_signs_hold_for_any_pairing(winner: int, loser: int) -> None:
    change = compute_rating_change(winner, loser)
    assert change.winner_delta >= 0
    assert change.loser_delta <= 0
    assert change.winner_delta == -change.loser_delta


def test_lopsided_gap_saturates() -> None:
    strong_wins = compute_rating_change(3000, 1000)
    weak_wins = compute_rating_change(1000, 3000)
    assert strong_wins.winner_delta == 0
    assert strong_wins.loser_delta == 0
    assert weak_wins.winner_delta == 32
    assert weak_wins.loser_delta == -32


def test_round_half_up_rounds_halves_away_from_zero() -> None:
    assert round_half_up(7.5) == 8
    assert round_half_up(-7.5) == -8
    assert round_half_up(2.5) == 3
    assert round_half_up(7.49) == 7
    assert round_half_up(-7.69) == -8
    assert round_half_up(0.0) == 0


def test_competitiveness_scale() -> None:
    assert compute_competitiveness(1200, 1200) == 100
    assert compute_competitiveness(1200, 1300) == 50
    assert compute_competitiveness(1300, 1200) == 50
    assert compute_competitiveness(1200, 1400) == 0
    assert compute_competitiveness(1200, 1900) == 0
    assert compute_competitiveness(1200, 1210) == 95
    assert compute_competitiveness(1200, 1350) == 25


def test_competitiveness_decreases_with_gap() -> None:
    scores = [compute_competitiveness(1200, 1200 + gap) for gap in range(0, 260, 10)]
    assert scores == sorted(scores, reverse=True)


def test_competitiveness_custom_threshold() -> None:
    assert compute_competitiveness(1200, 1300, threshold=400) == 75


@pytest.mark.parametrize(
    ("score", "label"),
    [
        (100, "Highly Competitive"),
        (80, "Highly Competitive"),
        (79, "Competitive"),
        (60, "Competitive"),
        (59, "Somewhat Competitive"),
        (40, "Somewhat Competitive"),
        (39, "Less Competitive"),
        (20, "Less Competitive"),
        (19, "Not Competitive"),
        (0, "Not Competitive"),
    ],
)
def test_competitiveness_label_bands(score: int, label: str) -> None:
    assert competitiveness_label(score) == label


def test_win_probabilities_are_complementary() -> None:
    for rating_a, rating_b in ((1200, 1200), (1450, 1100), (800, 2000)):
        forward = compute_win_probability(rating_a, rating_b)
        backward = compute_win_probability(rating_b, rating_a)
        assert 0.0 < forward < 1.0
        assert forward + backward == pytest.approx(1.0)


def test_win_probability_equal_ratings_is_half() -> None:
    assert compute_win_probability(1200, 1200) == pytest.approx(0.5)


def test_win_probability_saturates_for_huge_gaps() -> None:
    assert compute_win_probability(10**400, 0) == pytest.approx(1.0)
    assert compute_win_probability(0, 10**400) == pytest.approx(0.0)
    assert compute_win_probability(-(10**400), 10**400) == pytest.approx(0.0)


def test_side_rating_singles_and_doubles() -> None:
    assert side_rating([1234]) == 1234
    assert side_rating([1200, 1300]) == 1250
    assert side_rating([1200, 1201]) == 1201
    assert side_rating([1100, 1400]) == 1250


def test_preview_matchup_bundles_both_outcomes() -> None:
    preview = preview_matchup(1400, 1200)
    assert preview.competitiveness == 0
    assert preview.competitiveness_label == "Not Competitive"
    assert preview.side1_win_probability == pytest.approx(0.7597, abs=1e-4)
    assert preview.side2_win_probability == pytest.approx(0.2403, abs=1e-4)
    assert preview.if_side1_wins.winner_delta == 8
    assert preview.if_side2_wins.winner_delta == 24
    assert preview.if_side2_wins.loser_delta == -24


def test_preview_matchup_uses_parameters() -> None:
    preview = preview_matchup(1200, 1250, MmrParameters(k_factor=16, competitive_threshold=100))
    assert preview.competitiveness == 50
    assert preview.if_side1_wins.winner_delta == 9
    assert preview.if_side2_wins.winner_delta == 7
