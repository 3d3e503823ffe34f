"""ORM models."""

from models.base import Base
from models.match import Match
from models.player import Player
from models.team import Team

__all__ = [
    "Base",
    "Match",
    "Player",
    "Team",
]
