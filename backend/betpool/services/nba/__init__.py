"""RapidAPI NBA games service."""

from .client import NBAClient, create_nba_client
from .config import NBAConfig
from .exceptions import (
    NBAAPIError,
    NBAAuthError,
    NBANetworkError,
    NBARateLimitError,
)
from .models import Game, GameDate, GameStatus, Scores, Team, Teams, TeamScore

__all__ = [
    "NBAClient",
    "create_nba_client",
    "NBAConfig",
    "NBAAPIError",
    "NBAAuthError",
    "NBANetworkError",
    "NBARateLimitError",
    "Game",
    "GameDate",
    "GameStatus",
    "Scores",
    "Team",
    "Teams",
    "TeamScore",
]
