"""Match recording transaction: validate, rate, and persist one result atomically."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from domain.common import MatchRecord, MatchType, PlayerSnapshot
from domain.errors import NotFoundError, PersistenceError
from domain.ratings.mmr import MatchupPreview, MmrParameters, compute_rating_change, preview_matchup, side_rating
from domain.validation import ensure_players_found, validate_same_group, validate_sides, validate_winning_side
from logging_config import get_logger
from repositories.match_repository import insert_match, set_match_result
from repositories.player_repository import fetch_players_by_ids, increment_player_stats
from repositories.team_repository import fetch_active_team_for_pairing, update_team_mmr

log = get_logger(__name__)


class MatchRecorder:
    """Records singles/doubles results and applies MMR changes in one transaction."""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        params: MmrParameters | None = None,
    ) -> None:
        self.session_factory = session_factory
        self.params = params or MmrParameters()

    def preview(self, side1: Sequence[int] | int, side2: Sequence[int] | int) -> MatchupPreview:
        """Estimate competitiveness and rating swings for a prospective match without writing."""
        first, second, _ = validate_sides(side1, side2)
        with self.session_factory() as session:
            try:
                by_id = self._load_participants(session, first + second)
            except SQLAlchemyError as exc:
                raise PersistenceError("Failed to load players for preview") from exc
        return preview_matchup(
            self._side_rating(first, by_id),
            self._side_rating(second, by_id),
            self.params,
        )

    def record_match(
        self,
        side1: Sequence[int] | int,
        side2: Sequence[int] | int,
        winning_side: int,
    ) -> MatchRecord:
        first, second, match_type = validate_sides(side1, side2)
        winner = validate_winning_side(winning_side)
        log.debug(
            "recording %s match side1=%s side2=%s winning_side=%d",
            match_type.value,
            list(first),
            list(second),
            winner,
        )

        with self.session_factory() as session:
            try:
                record = self._record(session, first, second, match_type, winner)
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                log.exception(
                    "failed to record %s match side1=%s side2=%s",
                    match_type.value,
                    list(first),
                    list(second),
                )
                raise PersistenceError("Failed to record match; no changes were saved") from exc
            except Exception:
                session.rollback()
                raise

        log.info(
            "recorded match_id=%d type=%s winners=%s losers=%s winner_delta=%+d loser_delta=%+d",
            record.match_id,
            record.match_type.value,
            list(record.winners),
            list(record.losers),
            record.winner_delta,
            record.loser_delta,
        )
        return record

    def _record(
        self,
        session: Session,
        first: tuple[int, ...],
        second: tuple[int, ...],
        match_type: MatchType,
        winner: int,
    ) -> MatchRecord:
        by_id = self._load_participants(session, first + second)

        side1_rating = self._side_rating(first, by_id)
        side2_rating = self._side_rating(second, by_id)
        winners, losers = (first, second) if winner == 1 else (second, first)
        winner_rating, loser_rating = (
            (side1_rating, side2_rating) if winner == 1 else (side2_rating, side1_rating)
        )
        change = compute_rating_change(
            winner_rating,
            loser_rating,
            self.params.k_factor,
            scale_factor=self.params.scale_factor,
        )

        recorded_at = datetime.now(UTC).replace(tzinfo=None)
        match = insert_match(
            session,
            match_type=match_type,
            side1=first,
            side2=second,
            played_at=recorded_at,
        )
        set_match_result(session, match.id, winning_side=winner, mmr_change=change.magnitude)

        for player_id in winners:
            self._apply_stats(session, player_id, change.winner_delta, won=True)
        for player_id in losers:
            self._apply_stats(session, player_id, change.loser_delta, won=False)

        new_ratings = {pid: by_id[pid].rating + change.winner_delta for pid in winners}
        new_ratings.update({pid: by_id[pid].rating + change.loser_delta for pid in losers})
        self._refresh_team_ratings(session, (first, second), new_ratings)

        return MatchRecord(
            match_id=match.id,
            match_type=match_type,
            side1=first,
            side2=second,
            winning_side=winner,
            side1_rating=side1_rating,
            side2_rating=side2_rating,
            winner_delta=change.winner_delta,
            loser_delta=change.loser_delta,
            recorded_at=recorded_at,
        )

    @staticmethod
    def _load_participants(session: Session, player_ids: tuple[int, ...]) -> dict[int, PlayerSnapshot]:
        players = fetch_players_by_ids(session, player_ids)
        by_id = ensure_players_found(player_ids, players)
        validate_same_group(by_id[pid] for pid in player_ids)
        return by_id

    @staticmethod
    def _side_rating(side: tuple[int, ...], by_id: dict[int, PlayerSnapshot]) -> int:
        return side_rating([by_id[pid].rating for pid in side])

    @staticmethod
    def _apply_stats(session: Session, player_id: int, mmr_delta: int, *, won: bool) -> None:
        if increment_player_stats(session, player_id, mmr_delta, won=won) != 1:
            raise NotFoundError("player", [player_id])

    @staticmethod
    def _refresh_team_ratings(
        session: Session,
        sides: tuple[tuple[int, ...], ...],
        new_ratings: dict[int, int],
    ) -> None:
        """Keep persisted teams for the same pairings in step with their members' ratings."""
        for side in sides:
            members = tuple(sorted(side))
            team = fetch_active_team_for_pairing(
                session,
                members[0],
                members[1] if len(members) > 1 else None,
            )
            if team is None:
                continue
            update_team_mmr(session, team.id, side_rating([new_ratings[pid] for pid in members]))


__all__ = ["MatchRecorder"]
