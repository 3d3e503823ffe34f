"""Random matchups drawn from the players marked present for a session."""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from domain.common import Group, MatchType, PlayerSnapshot
from domain.errors import NotFoundError, ValidationError, ValidationRule
from domain.ratings.mmr import MatchupPreview, MmrParameters, preview_matchup, side_rating
from domain.validation import validate_same_group


@dataclass(frozen=True)
class MatchupProposal:
    match_type: MatchType
    group: Group
    side1: tuple[PlayerSnapshot, ...]
    side2: tuple[PlayerSnapshot, ...]
    preview: MatchupPreview

    @property
    def side1_ids(self) -> tuple[int, ...]:
        return tuple(player.player_id for player in self.side1)

    @property
    def side2_ids(self) -> tuple[int, ...]:
        return tuple(player.player_id for player in self.side2)


def eligible_pool(
    players: Sequence[PlayerSnapshot],
    present_ids: Iterable[int],
    *,
    group: Group | None = None,
) -> list[PlayerSnapshot]:
    """Present players, optionally restricted to one group, in id order."""
    present = set(present_ids)
    by_id = {player.player_id: player for player in players}
    missing = present - by_id.keys()
    if missing:
        raise NotFoundError("player", missing)

    pool = [by_id[pid] for pid in sorted(present)]
    if group is not None:
        pool = [player for player in pool if player.group is Group(group)]
    return pool


def generate_random_matchup(
    players: Sequence[PlayerSnapshot],
    present_ids: Iterable[int],
    match_type: MatchType,
    *,
    group: Group | None = None,
    rng: random.Random | None = None,
    params: MmrParameters | None = None,
) -> MatchupProposal:
    """Uniformly sample 2 or 4 distinct present players and split them into two sides."""
    match_type = MatchType(match_type)
    pool = eligible_pool(players, present_ids, group=group)
    if group is None:
        validate_same_group(pool)

    needed = match_type.side_size * 2
    if len(pool) < needed:
        raise ValidationError(
            ValidationRule.INSUFFICIENT_PLAYERS,
            f"Need at least {needed} present players for {match_type.value}, have {len(pool)}",
        )

    picked = (rng or random.Random()).sample(pool, needed)
    side1 = tuple(picked[: match_type.side_size])
    side2 = tuple(picked[match_type.side_size :])
    preview = preview_matchup(
        side_rating([player.rating for player in side1]),
        side_rating([player.rating for player in side2]),
        params,
    )
    return MatchupProposal(
        match_type=match_type,
        group=side1[0].group,
        side1=side1,
        side2=side2,
        preview=preview,
    )


__all__ = ["MatchupProposal", "eligible_pool", "generate_random_matchup"]
