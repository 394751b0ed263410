"""Tests for the Telegram transport."""

import asyncio
from types import SimpleNamespace

import pytest

from betpool.dispatcher import CommandDispatcher
from betpool.registry import BetRegistry
from betpool.services.telegram import BetBot, TelegramBotConfig, TelegramConfigError
from betpool.services.telegram.bot import parse_command


class FakeMessage:
    def __init__(self, text: str):
        self.text = text
        self.replies: list[str] = []

    async def reply_text(self, text: str) -> None:
        self.replies.append(text)


def _update(text: str, user_id: int = 42) -> SimpleNamespace:
    return SimpleNamespace(
        effective_message=FakeMessage(text),
        effective_user=SimpleNamespace(id=user_id),
    )


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("/bet Lakers win 10", ("bet", "Lakers win 10")),
        ("/agree@BetPoolBot 3", ("agree", "3")),
        ("/show", ("show", "")),
        ("/Finalize  1 ", ("finalize", "1")),
    ],
)
def test_parse_command(text: str, expected: tuple[str, str]) -> None:
    assert parse_command(text) == expected


def test_bot_requires_token() -> None:
    with pytest.raises(TelegramConfigError):
        BetBot(CommandDispatcher(BetRegistry()), config=TelegramBotConfig())


def test_handle_update_replies_with_dispatcher_text() -> None:
    registry = BetRegistry()
    bot = BetBot(CommandDispatcher(registry), bot_token="123:abc")

    proposal = _update("/bet Lakers win 10", user_id=1)
    vote = _update("/agree 1", user_id=2)
    asyncio.run(bot.handle_update(proposal, None))
    asyncio.run(bot.handle_update(vote, None))

    assert proposal.effective_message.replies[0].startswith("New bet #1")
    assert vote.effective_message.replies == [
        "Someone has responded. There are now 1 agrees and 0 disagrees for Bet #1."
    ]
    assert registry.get(1).votes.keys() == {"2"}


def test_handle_update_ignores_updates_without_message() -> None:
    bot = BetBot(CommandDispatcher(BetRegistry()), bot_token="123:abc")
    update = SimpleNamespace(effective_message=None, effective_user=None)

    asyncio.run(bot.handle_update(update, None))
