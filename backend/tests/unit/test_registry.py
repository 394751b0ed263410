"""
Unit Tests: Bet Registry

Test cases:
- Proposal validation and id assignment
- Vote overwrite, idempotent re-vote, side switching
- Majority finalization and tie-break
- Pending listing
- Votes after finalization (allowed and rejected)
- Concurrent votes and proposals
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from betpool.exceptions import BetClosed, BetNotFound, InvalidBetFormat
from betpool.models import Bet, BetStatus, VoteChoice
from betpool.registry import BetRegistry, parse_amount

T0 = datetime(2024, 10, 18, tzinfo=timezone.utc)


def test_majority_agree_scenario(registry: BetRegistry) -> None:
    bet_id = registry.propose("Lakers win", 10, T0)
    assert bet_id == 1

    registry.vote(1, "Alice", "agree")
    registry.vote(1, "Bob", "disagree")
    tally = registry.vote(1, "Carol", "agree")
    assert (tally.agree_count, tally.disagree_count) == (2, 1)

    result = registry.finalize(1)
    assert result.outcome == "agreed"
    assert result.prompt == "Lakers win"
    assert result.amount == 10
    assert result.tally.agree_count == 2


def test_finalize_without_votes_is_disagreed(registry: BetRegistry) -> None:
    registry.propose("Lakers win", 10, T0)
    bet_id = registry.propose("Celtics win", 5, T0)
    assert bet_id == 2

    result = registry.finalize(2)
    assert result.outcome == "disagreed"
    assert result.tally.total == 0


def test_tie_is_disagreed(registry: BetRegistry) -> None:
    bet_id = registry.propose("Knicks cover", 3)
    registry.vote(bet_id, "a", VoteChoice.AGREE)
    registry.vote(bet_id, "b", VoteChoice.DISAGREE)

    assert registry.finalize(bet_id).outcome == "disagreed"


def test_vote_on_unknown_bet_leaves_state_unchanged(registry: BetRegistry) -> None:
    bet_id = registry.propose("Lakers win", 10, T0)
    before = registry.get(bet_id)

    with pytest.raises(BetNotFound) as exc_info:
        registry.vote(999, "Dan", "agree")

    assert exc_info.value.bet_id == 999
    assert len(registry) == 1
    assert 999 not in registry
    assert registry.get(bet_id) == before


def test_finalize_unknown_bet(registry: BetRegistry) -> None:
    with pytest.raises(BetNotFound):
        registry.finalize(1)


def test_empty_prompt_consumes_no_id(registry: BetRegistry) -> None:
    with pytest.raises(InvalidBetFormat):
        registry.propose("", 10, T0)
    with pytest.raises(InvalidBetFormat):
        registry.propose("   ", 10, T0)

    assert len(registry) == 0
    assert registry.propose("Lakers win", 10, T0) == 1


@pytest.mark.parametrize("amount", ["ten", "", "nan", "inf", "-5", 0, None, True])
def test_invalid_amount_rejected(registry: BetRegistry, amount: object) -> None:
    with pytest.raises(InvalidBetFormat):
        registry.propose("Lakers win", amount)
    assert len(registry) == 0


def test_parse_amount_accepts_numeric_strings() -> None:
    assert parse_amount("10") == 10.0
    assert parse_amount("2.5") == 2.5
    assert parse_amount(7) == 7.0


def test_ids_strictly_increasing(registry: BetRegistry) -> None:
    ids = [registry.propose(f"bet {i}", i + 1) for i in range(20)]
    assert ids == list(range(1, 21))


def test_same_side_revote_is_idempotent(registry: BetRegistry) -> None:
    bet_id = registry.propose("Lakers win", 10)
    first = registry.vote(bet_id, "Alice", "agree")
    second = registry.vote(bet_id, "Alice", "agree")

    assert first == second
    assert (second.agree_count, second.disagree_count) == (1, 0)


def test_side_switch_moves_participant(registry: BetRegistry) -> None:
    bet_id = registry.propose("Lakers win", 10)
    registry.vote(bet_id, "Alice", "agree")
    registry.vote(bet_id, "Bob", "agree")

    tally = registry.vote(bet_id, "Alice", "disagree")

    assert (tally.agree_count, tally.disagree_count) == (1, 1)
    snapshot = registry.get(bet_id)
    assert snapshot.votes == {"Alice": VoteChoice.DISAGREE, "Bob": VoteChoice.AGREE}
    assert snapshot.tally.total == 2


def test_derived_sets_never_overlap() -> None:
    bet = Bet(prompt="Lakers win", amount=10)
    for choice in [VoteChoice.AGREE, VoteChoice.DISAGREE, VoteChoice.AGREE, VoteChoice.DISAGREE]:
        bet.votes["Alice"] = choice
    bet.votes["Bob"] = VoteChoice.AGREE

    assert bet.agreed.isdisjoint(bet.disagreed)
    assert bet.disagreed == {"Alice"}
    assert bet.agreed == {"Bob"}
    assert (bet.tally().agree_count, bet.tally().disagree_count) == (1, 1)


def test_registry_votes_switch_sides(registry: BetRegistry) -> None:
    bet_id = registry.propose("Lakers win", 10)
    for choice in ["agree", "disagree", "agree", "disagree"]:
        registry.vote(bet_id, "Alice", choice)

    assert registry.get(bet_id).votes == {"Alice": VoteChoice.DISAGREE}


def test_unknown_choice_rejected(registry: BetRegistry) -> None:
    bet_id = registry.propose("Lakers win", 10)
    with pytest.raises(ValueError) as exc_info:
        registry.vote(bet_id, "Alice", "maybe")
    assert exc_info.value.__suppress_context__
    assert registry.get(bet_id).tally.total == 0


def test_prompt_and_amount_are_frozen() -> None:
    bet = Bet(prompt="Lakers win", amount=10, created_at=T0)

    with pytest.raises(ValidationError):
        bet.prompt = "Celtics win"
    with pytest.raises(ValidationError):
        bet.amount = 1000


def test_list_pending_excludes_finalized(registry: BetRegistry) -> None:
    first = registry.propose("Lakers win", 10)
    second = registry.propose("Celtics win", 5.5)
    third = registry.propose("Heat win", 1)

    registry.finalize(second)
    pending = registry.list_pending()

    assert [p.bet_id for p in pending] == [first, third]
    assert pending[0].prompt == "Lakers win"
    assert pending[0].amount == 10
    # a fresh list every call
    assert registry.list_pending() == pending


def test_finalize_sets_resolved_and_reevaluates(registry: BetRegistry) -> None:
    bet_id = registry.propose("Lakers win", 10)
    registry.vote(bet_id, "Alice", "disagree")
    assert registry.finalize(bet_id).outcome == "disagreed"
    assert registry.get(bet_id).status is BetStatus.RESOLVED

    registry.vote(bet_id, "Alice", "agree")
    result = registry.finalize(bet_id)

    assert result.outcome == "agreed"
    assert registry.get(bet_id).status is BetStatus.RESOLVED


def test_votes_after_finalize_rejected_when_disabled() -> None:
    registry = BetRegistry(allow_votes_after_finalize=False)
    bet_id = registry.propose("Lakers win", 10)
    registry.vote(bet_id, "Alice", "agree")
    registry.finalize(bet_id)

    with pytest.raises(BetClosed):
        registry.vote(bet_id, "Bob", "disagree")

    assert registry.get(bet_id).votes == {"Alice": VoteChoice.AGREE}
    assert registry.finalize(bet_id).outcome == "agreed"


def test_created_at_defaults_to_utc_now(registry: BetRegistry) -> None:
    bet_id = registry.propose("Lakers win", 10)
    created_at = registry.get(bet_id).created_at
    assert created_at.tzinfo is not None


def test_concurrent_votes_keep_exact_tally(registry: BetRegistry) -> None:
    bet_id = registry.propose("Lakers win", 10)
    other_id = registry.propose("Celtics win", 10)

    def cast(i: int) -> None:
        # every participant flips once, ending on their final side
        participant = f"user-{i}"
        registry.vote(bet_id, participant, "disagree" if i % 2 else "agree")
        registry.vote(bet_id, participant, "agree" if i % 2 else "disagree")
        registry.vote(other_id, participant, "agree")

    with ThreadPoolExecutor(max_workers=16) as pool:
        list(pool.map(cast, range(200)))

    tally = registry.get(bet_id).tally
    assert (tally.agree_count, tally.disagree_count) == (100, 100)
    assert registry.get(other_id).tally.agree_count == 200


def test_concurrent_proposals_get_unique_ids(registry: BetRegistry) -> None:
    barrier = threading.Barrier(8)

    def propose(i: int) -> int:
        barrier.wait()
        return registry.propose(f"bet {i}", 1)

    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(propose, range(8)))

    assert sorted(ids) == list(range(1, 9))
    assert len(registry) == 8
