"""Routes chat commands to the bet registry and formats replies."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from betpool.exceptions import (
    BetClosed,
    BetNotFound,
    InvalidBetFormat,
    ValidationUnavailable,
)
from betpool.models import VoteChoice
from betpool.registry import BetRegistry, parse_amount
from betpool.validation import IntentValidator

logger = logging.getLogger(__name__)

MSG_INVALID_FORMAT = "Invalid bet format. Please provide a prompt and a valid amount."
MSG_MISSING_BET_ID = "Missing required parameters. Please provide betId."
MSG_BET_NOT_FOUND = "Bet not found."
MSG_CANNOT_VALIDATE = "Cannot validate this bet right now. Please try again later."
MSG_NOT_REAL = "Check your calendar grandpa, this game ain't real"
MSG_NO_ACTIVE = "No active bets."
MSG_UNKNOWN = "Unknown command. Use /help to see all available commands."
MSG_ERROR = "Something went wrong handling that command."

HELP_TEXT = """Available commands:
/bet <prompt> <amount> - propose a bet, e.g. /bet Lakers beat the Celtics on Friday 10
/agree <betId> - vote for a bet
/disagree <betId> - vote against a bet
/finalize <betId> - close voting and settle by majority
/show - list active bets
/help - show this message"""


def split_proposal(raw_text: str) -> tuple[str, float]:
    """Split ``"<prompt> <amount>"`` into prompt and amount.

    The trailing whitespace-separated token is the amount; the rest is the
    prompt.
    """
    words = (raw_text or "").split()
    if len(words) < 2:
        raise InvalidBetFormat(MSG_INVALID_FORMAT)
    amount = parse_amount(words[-1])
    return " ".join(words[:-1]), amount


def _format_amount(amount: float) -> str:
    return str(int(amount)) if amount.is_integer() else str(amount)


class CommandDispatcher:
    """Thin glue between the chat transport and the registry.

    ``validator`` may be None to create bets without checking them against
    real games.
    """

    def __init__(
        self,
        registry: BetRegistry,
        validator: IntentValidator | None = None,
    ):
        self.registry = registry
        self.validator = validator
        self._routes = {
            "bet": self._propose,
            "propose": self._propose,
            "agree": self._agree,
            "disagree": self._disagree,
            "finalize": self._finalize,
            "show": self._show,
            "list": self._show,
            "help": self._help,
        }

    async def handle(self, command: str, args: str, sender: str) -> str:
        """Dispatch one command and return the reply text."""
        route = self._routes.get(command.lower().lstrip("/"))
        if route is None:
            return MSG_UNKNOWN
        try:
            return await route(args, sender)
        except Exception as e:
            logger.error(f"Command /{command} failed: {e}", exc_info=True)
            return MSG_ERROR

    async def _propose(self, args: str, sender: str) -> str:
        return await self.propose(args, sender)

    async def _agree(self, args: str, sender: str) -> str:
        return self.vote(args, VoteChoice.AGREE, sender)

    async def _disagree(self, args: str, sender: str) -> str:
        return self.vote(args, VoteChoice.DISAGREE, sender)

    async def _finalize(self, args: str, sender: str) -> str:
        return self.finalize(args)

    async def _show(self, args: str, sender: str) -> str:
        return self.list_pending()

    async def _help(self, args: str, sender: str) -> str:
        return HELP_TEXT

    async def propose(self, raw_text: str, sender: str) -> str:
        try:
            prompt, amount = split_proposal(raw_text)
        except InvalidBetFormat:
            return MSG_INVALID_FORMAT

        created_at = datetime.now(timezone.utc)

        if self.validator is not None:
            try:
                result = await self.validator.validate(prompt, now=created_at)
            except ValidationUnavailable as e:
                logger.warning(f"Could not validate bet from {sender}: {e}")
                return MSG_CANNOT_VALIDATE
            if not result.valid:
                return MSG_NOT_REAL

        try:
            bet_id = self.registry.propose(prompt, amount, created_at)
        except InvalidBetFormat:
            return MSG_INVALID_FORMAT

        return (
            f'New bet #{bet_id} proposed: "{prompt}" with an amount of '
            f"{_format_amount(amount)}. Please respond with /agree {bet_id} "
            f"or /disagree {bet_id}."
        )

    def _parse_bet_id(self, raw: str) -> int | None:
        token = (raw or "").strip().split(maxsplit=1)
        if not token:
            return None
        return int(token[0].lstrip("#"))

    def vote(self, raw_bet_id: str, choice: VoteChoice, sender: str) -> str:
        try:
            bet_id = self._parse_bet_id(raw_bet_id)
            if bet_id is None:
                return MSG_MISSING_BET_ID
            tally = self.registry.vote(bet_id, sender, choice)
        except (BetNotFound, ValueError):
            return MSG_BET_NOT_FOUND
        except BetClosed as e:
            return f"Bet #{e.bet_id} is already finalized."

        return (
            f"Someone has responded. There are now {tally.agree_count} agrees "
            f"and {tally.disagree_count} disagrees for Bet #{bet_id}."
        )

    def finalize(self, raw_bet_id: str) -> str:
        try:
            bet_id = self._parse_bet_id(raw_bet_id)
            if bet_id is None:
                return MSG_MISSING_BET_ID
            result = self.registry.finalize(bet_id)
        except (BetNotFound, ValueError):
            return MSG_BET_NOT_FOUND

        if result.outcome == "agreed":
            return (
                f'Bet #{bet_id} finalized: Majority agreed to "{result.prompt}" '
                f"for {_format_amount(result.amount)}."
            )
        return f'Bet #{bet_id} finalized: Majority disagreed with "{result.prompt}".'

    def list_pending(self) -> str:
        pending = self.registry.list_pending()
        if not pending:
            return MSG_NO_ACTIVE
        lines = [
            f"Bet #{bet.bet_id}: {bet.prompt} ({_format_amount(bet.amount)})"
            for bet in pending
        ]
        return "Active bets:\n" + "\n".join(lines)
