"""MMR (ELO-style) rating math for singles and doubles sides.

Every function here is pure: no state, no I/O, no exceptions for finite input.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

COMPETITIVENESS_BANDS: tuple[tuple[int, str], ...] = (
    (80, "Highly Competitive"),
    (60, "Competitive"),
    (40, "Somewhat Competitive"),
    (20, "Less Competitive"),
)
NOT_COMPETITIVE_LABEL = "Not Competitive"
# 10 ** 300 still fits in a float; larger rating gaps saturate the expected score.
# The gap is clamped before division so huge integers never reach float conversion.
MAX_EXPONENT = 300.0


@dataclass(frozen=True)
class MmrParameters:
    initial_rating: int = 1200
    k_factor: int = 32
    scale_factor: float = 400.0
    competitive_threshold: int = 200


@dataclass(frozen=True)
class RatingChange:
    winner_delta: int
    loser_delta: int

    @property
    def magnitude(self) -> int:
        return abs(self.winner_delta)


@dataclass(frozen=True)
class MatchupPreview:
    """Side-effect free estimate shown before a result is committed."""

    side1_rating: int
    side2_rating: int
    competitiveness: int
    competitiveness_label: str
    side1_win_probability: float
    if_side1_wins: RatingChange
    if_side2_wins: RatingChange

    @property
    def side2_win_probability(self) -> float:
        return 1.0 - self.side1_win_probability


def round_half_up(value: float) -> int:
    """Round to the nearest integer, exact halves away from zero (7.5 -> 8, -7.5 -> -8)."""
    return int(Decimal(repr(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def calculate_expected_score(rating: float, opponent_rating: float, scale_factor: float = 400.0) -> float:
    """Compute the ELO expected score for one side."""
    limit = MAX_EXPONENT * scale_factor
    gap = max(-limit, min(opponent_rating - rating, limit))
    exponent = gap / scale_factor
    return 1.0 / (1.0 + 10.0 ** exponent)


def compute_rating_change(
    winner_rating: int,
    loser_rating: int,
    k_factor: int = 32,
    *,
    scale_factor: float = 400.0,
) -> RatingChange:
    """Rating deltas for the winning and losing side of one match.

    The winner delta is never negative and the loser delta never positive. As the
    gap widens in the winner's favour the winner gains less and an upset costs
    the favourite close to the full K-factor.
    """
    expected_winner = calculate_expected_score(winner_rating, loser_rating, scale_factor)
    expected_loser = 1.0 - expected_winner

    winner_delta = round_half_up(k_factor * (1.0 - expected_winner))
    loser_delta = round_half_up(k_factor * (0.0 - expected_loser))
    return RatingChange(winner_delta=winner_delta, loser_delta=loser_delta)


def compute_competitiveness(rating_a: int, rating_b: int, threshold: int = 200) -> int:
    """Score 0-100 of how close two ratings are; 0 once the gap reaches the threshold."""
    difference = abs(rating_a - rating_b)
    if difference >= threshold:
        return 0
    return round_half_up(100 * (1 - difference / threshold))


def competitiveness_label(score: int) -> str:
    for minimum, label in COMPETITIVENESS_BANDS:
        if score >= minimum:
            return label
    return NOT_COMPETITIVE_LABEL


def compute_win_probability(rating_a: int, rating_b: int, scale_factor: float = 400.0) -> float:
    """Probability that side A beats side B."""
    return calculate_expected_score(rating_a, rating_b, scale_factor)


def side_rating(ratings: Sequence[int]) -> int:
    """Effective rating of a side: the player's own for singles, rounded mean for doubles."""
    if len(ratings) == 1:
        return int(ratings[0])
    return round_half_up(sum(ratings) / len(ratings))


def preview_matchup(
    side1_rating: int,
    side2_rating: int,
    params: MmrParameters | None = None,
) -> MatchupPreview:
    params = params or MmrParameters()
    competitiveness = compute_competitiveness(
        side1_rating,
        side2_rating,
        threshold=params.competitive_threshold,
    )
    return MatchupPreview(
        side1_rating=side1_rating,
        side2_rating=side2_rating,
        competitiveness=competitiveness,
        competitiveness_label=competitiveness_label(competitiveness),
        side1_win_probability=compute_win_probability(
            side1_rating,
            side2_rating,
            scale_factor=params.scale_factor,
        ),
        if_side1_wins=compute_rating_change(
            side1_rating,
            side2_rating,
            params.k_factor,
            scale_factor=params.scale_factor,
        ),
        if_side2_wins=compute_rating_change(
            side2_rating,
            side1_rating,
            params.k_factor,
            scale_factor=params.scale_factor,
        ),
    )


__all__ = [
    "COMPETITIVENESS_BANDS",
    "MatchupPreview",
    "MmrParameters",
    "RatingChange",
    "calculate_expected_score",
    "competitiveness_label",
    "compute_competitiveness",
    "compute_rating_change",
    "compute_win_probability",
    "preview_matchup",
    "round_half_up",
    "side_rating",
]
