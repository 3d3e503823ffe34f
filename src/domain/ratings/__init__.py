"""Rating math modules."""

from domain.ratings.mmr import (
    MatchupPreview,
    MmrParameters,
    RatingChange,
    competitiveness_label,
    compute_competitiveness,
    compute_rating_change,
    compute_win_probability,
    preview_matchup,
    side_rating,
)

__all__ = [
    "MatchupPreview",
    "MmrParameters",
    "RatingChange",
    "competitiveness_label",
    "compute_competitiveness",
    "compute_rating_change",
    "compute_win_probability",
    "preview_matchup",
    "side_rating",
]
