"""Database repository helpers."""

from repositories.match_repository import count_matches, insert_match, list_matches, set_match_result
from repositories.player_repository import (
    add_player,
    fetch_player,
    fetch_players,
    fetch_players_by_ids,
    increment_player_stats,
)
from repositories.schema import ensure_schema
from repositories.team_repository import (
    fetch_active_team_for_pairing,
    fetch_active_teams_with_players,
    fetch_team_with_players,
    find_team,
    insert_team,
    set_team_active,
    update_team_mmr,
)

__all__ = [
    "add_player",
    "count_matches",
    "ensure_schema",
    "fetch_active_team_for_pairing",
    "fetch_active_teams_with_players",
    "fetch_player",
    "fetch_players",
    "fetch_players_by_ids",
    "fetch_team_with_players",
    "find_team",
    "increment_player_stats",
    "insert_match",
    "insert_team",
    "list_matches",
    "set_match_result",
    "set_team_active",
    "update_team_mmr",
]
