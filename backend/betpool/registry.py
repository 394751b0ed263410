"""In-memory bet registry: proposals, votes and majority finalization."""

from __future__ import annotations

import logging
import math
import threading
from datetime import datetime, timezone

from .exceptions import BetClosed, BetNotFound, InvalidBetFormat
from .models import (
    Bet,
    BetSnapshot,
    BetStatus,
    FinalizeResult,
    PendingBet,
    Tally,
    VoteChoice,
)

logger = logging.getLogger(__name__)


def parse_amount(amount: float | int | str) -> float:
    """Parse a stake amount, raising InvalidBetFormat unless finite and positive."""
    if isinstance(amount, bool):
        raise InvalidBetFormat(f"Invalid amount: {amount!r}")
    try:
        value = float(amount)
    except (TypeError, ValueError):
        raise InvalidBetFormat(f"Invalid amount: {amount!r}")
    if not math.isfinite(value) or value <= 0:
        raise InvalidBetFormat(f"Invalid amount: {amount!r}")
    return value


def parse_choice(choice: VoteChoice | str) -> VoteChoice:
    try:
        return VoteChoice(choice)
    except ValueError:
        raise ValueError(f"Unknown vote choice: {choice!r}") from None


class BetRegistry:
    """Owns every bet record and the id counter.

    The registry-wide lock only guards id reservation and the id -> bet map.
    Votes and finalization take the per-bet lock, so operations on different
    bets never wait on each other.

    Args:
        allow_votes_after_finalize: When False, voting on a resolved bet
            raises BetClosed instead of updating the tally.
    """

    def __init__(self, allow_votes_after_finalize: bool = True):
        self.allow_votes_after_finalize = allow_votes_after_finalize
        self._bets: dict[int, Bet] = {}
        self._last_id = 0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._bets)

    def __contains__(self, bet_id: object) -> bool:
        with self._lock:
            return bet_id in self._bets

    def _get(self, bet_id: int) -> Bet:
        with self._lock:
            bet = self._bets.get(bet_id)
        if bet is None:
            raise BetNotFound(bet_id)
        return bet

    def propose(
        self,
        prompt: str,
        amount: float | int | str,
        created_at: datetime | None = None,
    ) -> int:
        """Create a pending bet and return its id."""
        prompt = (prompt or "").strip()
        if not prompt:
            raise InvalidBetFormat("Bet prompt must not be empty")
        value = parse_amount(amount)

        bet = Bet(
            prompt=prompt,
            amount=value,
            created_at=created_at or datetime.now(timezone.utc),
        )
        with self._lock:
            self._last_id += 1
            bet_id = self._last_id
            self._bets[bet_id] = bet

        logger.info("Bet #%d proposed: %r for %s", bet_id, prompt, value)
        return bet_id

    def vote(
        self,
        bet_id: int,
        participant: str,
        choice: VoteChoice | str,
    ) -> Tally:
        """Record a participant's vote, replacing any earlier one."""
        choice = parse_choice(choice)
        bet = self._get(bet_id)

        with bet.lock:
            if bet.status is BetStatus.RESOLVED and not self.allow_votes_after_finalize:
                raise BetClosed(bet_id)
            previous = bet.votes.get(participant)
            bet.votes[participant] = choice
            tally = bet.tally()

        if previous is not None and previous != choice:
            logger.info("Bet #%d: %s switched %s -> %s", bet_id, participant, previous, choice)
        logger.debug(
            "Bet #%d tally: %d agree / %d disagree",
            bet_id,
            tally.agree_count,
            tally.disagree_count,
        )
        return tally

    def finalize(self, bet_id: int) -> FinalizeResult:
        """Resolve a bet by simple majority; ties resolve as "disagreed"."""
        bet = self._get(bet_id)

        with bet.lock:
            tally = bet.tally()
            bet.status = BetStatus.RESOLVED

        result = FinalizeResult(
            bet_id=bet_id,
            outcome=tally.outcome,
            prompt=bet.prompt,
            amount=bet.amount,
            tally=tally,
        )
        logger.info(
            "Bet #%d finalized: %s (%d agree / %d disagree)",
            bet_id,
            result.outcome,
            tally.agree_count,
            tally.disagree_count,
        )
        return result

    def get(self, bet_id: int) -> BetSnapshot:
        bet = self._get(bet_id)
        with bet.lock:
            return BetSnapshot(
                bet_id=bet_id,
                prompt=bet.prompt,
                amount=bet.amount,
                status=bet.status,
                created_at=bet.created_at,
                tally=bet.tally(),
                votes=dict(bet.votes),
            )

    def list_pending(self) -> list[PendingBet]:
        """Pending bets in ascending id order."""
        with self._lock:
            entries = sorted(self._bets.items())

        pending: list[PendingBet] = []
        for bet_id, bet in entries:
            with bet.lock:
                if bet.status is not BetStatus.PENDING:
                    continue
            pending.append(PendingBet(bet_id=bet_id, prompt=bet.prompt, amount=bet.amount))
        return pending
