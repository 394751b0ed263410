"""Shared fixtures and fake collaborators."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from betpool.events import EventSummary
from betpool.exceptions import LookupFailed
from betpool.registry import BetRegistry

NOW = datetime(2024, 10, 18, 12, 0, tzinfo=timezone.utc)


class FakeGenerator:
    """Returns queued replies in order and records every call."""

    def __init__(self, *replies: str | Exception):
        self.replies = list(replies)
        self.calls: list[tuple[str, str, str | None]] = []

    async def generate(
        self,
        prompt: str,
        system_instruction: str,
        context_data: str | None = None,
    ) -> str:
        self.calls.append((prompt, system_instruction, context_data))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeEvents:
    def __init__(self, events: list[EventSummary] | None = None, fail: bool = False):
        self.events = events or []
        self.fail = fail
        self.dates: list[str] = []

    async def lookup_events(self, date: str) -> list[EventSummary]:
        self.dates.append(date)
        if self.fail:
            raise LookupFailed("games API down")
        return self.events


@pytest.fixture
def registry() -> BetRegistry:
    return BetRegistry()


@pytest.fixture
def lakers_game() -> EventSummary:
    return EventSummary(
        id=14321,
        date="2024-10-22T23:30:00.000Z",
        participant_a="Minnesota Timberwolves",
        participant_b="Los Angeles Lakers",
        winner="TBD",
    )
