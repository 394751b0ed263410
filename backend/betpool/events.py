"""Game lookup normalized into uniform event summaries."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Protocol

import httpx
from pydantic import BaseModel

from betpool.exceptions import LookupFailed
from betpool.services.nba import Game, NBAAPIError, NBAClient, NBAConfig

logger = logging.getLogger(__name__)

TBD = "TBD"


class EventSummary(BaseModel):
    """A game reduced to what a bet needs.

    ``participant_a`` is the visiting team, ``participant_b`` the home team.
    ``winner`` is a team name, or ``"TBD"`` while the result is open.
    """

    id: int
    date: str
    participant_a: str
    participant_b: str
    winner: str = TBD


class EventLookup(Protocol):
    async def lookup_events(self, date: str) -> list[EventSummary]: ...


def _finished_winner(game: Game) -> str:
    visitors_points = 0
    home_points = 0
    if game.scores is not None:
        visitors_points = game.scores.visitors.points or 0
        home_points = game.scores.home.points or 0

    if visitors_points > home_points:
        return game.teams.visitors.name
    if home_points > visitors_points:
        return game.teams.home.name
    return TBD


def resolve_games(games: Iterable[Game]) -> list[EventSummary]:
    """Summarize scheduled and finished games; everything else is dropped.

    A finished game with level scores has no winner and reports ``"TBD"``.
    """
    results: list[EventSummary] = []
    for game in games:
        if game.is_scheduled:
            winner = TBD
        elif game.is_finished:
            winner = _finished_winner(game)
        else:
            continue

        results.append(
            EventSummary(
                id=game.id,
                date=game.date.start,
                participant_a=game.teams.visitors.name,
                participant_b=game.teams.home.name,
                winner=winner,
            )
        )
    return results


class EventResolver:
    """Looks up games for a date and resolves them into summaries."""

    def __init__(
        self,
        api_key: str = "",
        config: NBAConfig | None = None,
        timeout_seconds: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.config = config or NBAConfig()
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def _fetch_games(self, date: str) -> list[Game]:
        async with NBAClient(
            api_key=self.api_key,
            config=self.config,
            transport=self._transport,
        ) as client:
            return await client.get_games(date)

    async def lookup_events(self, date: str) -> list[EventSummary]:
        try:
            async with asyncio.timeout(self.timeout_seconds):
                games = await self._fetch_games(date)
        except TimeoutError:
            logger.warning(f"Game lookup for {date} timed out after {self.timeout_seconds}s")
            raise LookupFailed(f"Game lookup for {date} timed out")
        except NBAAPIError as e:
            logger.error(f"Error fetching NBA games: {e}")
            raise LookupFailed(f"Failed to fetch NBA games for {date}: {e}")

        return resolve_games(games)
