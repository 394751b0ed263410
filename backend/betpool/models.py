"""Pydantic models for bets, votes and registry results."""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, Field, PrivateAttr

Outcome = Literal["agreed", "disagreed"]


class BetStatus(StrEnum):
    """Lifecycle state of a bet."""

    PENDING = "pending"
    RESOLVED = "resolved"


class VoteChoice(StrEnum):
    """A participant's side on a bet."""

    AGREE = "agree"
    DISAGREE = "disagree"


class Tally(BaseModel):
    """Vote counts for a bet at a point in time."""

    agree_count: int = 0
    disagree_count: int = 0

    @property
    def total(self) -> int:
        return self.agree_count + self.disagree_count

    @property
    def outcome(self) -> Outcome:
        """Majority outcome; ties go to "disagreed"."""
        if self.agree_count > self.disagree_count:
            return "agreed"
        return "disagreed"


class Bet(BaseModel):
    """Live bet record owned by the registry.

    ``votes`` is the only vote state; the agreed/disagreed sets and the tally
    are derived from it on demand. Mutations go through the registry while
    holding ``lock``.
    """

    prompt: str = Field(frozen=True)
    amount: float = Field(frozen=True, gt=0)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        frozen=True,
    )
    status: BetStatus = BetStatus.PENDING
    votes: dict[str, VoteChoice] = Field(default_factory=dict)

    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)

    @property
    def lock(self) -> threading.Lock:
        return self._lock

    @property
    def agreed(self) -> frozenset[str]:
        return frozenset(p for p, c in self.votes.items() if c == VoteChoice.AGREE)

    @property
    def disagreed(self) -> frozenset[str]:
        return frozenset(p for p, c in self.votes.items() if c == VoteChoice.DISAGREE)

    def tally(self) -> Tally:
        agree_count = sum(1 for c in self.votes.values() if c == VoteChoice.AGREE)
        return Tally(
            agree_count=agree_count,
            disagree_count=len(self.votes) - agree_count,
        )


class BetSnapshot(BaseModel):
    """Read-only copy of a bet handed out by the registry."""

    bet_id: int
    prompt: str
    amount: float
    status: BetStatus
    created_at: datetime
    tally: Tally
    votes: dict[str, VoteChoice] = Field(default_factory=dict)


class FinalizeResult(BaseModel):
    """Result of finalizing a bet."""

    bet_id: int
    outcome: Outcome
    prompt: str
    amount: float
    tally: Tally


class PendingBet(BaseModel):
    """Entry in the pending bets listing."""

    bet_id: int
    prompt: str
    amount: float
