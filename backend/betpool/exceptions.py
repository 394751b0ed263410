"""Domain exceptions for bets and proposal validation."""


class BetPoolError(Exception):
    """Base exception for BetPool errors."""

    pass


class BetError(BetPoolError):
    """Base exception for bet registry errors."""

    pass


class InvalidBetFormat(BetError):
    """Proposal has an empty prompt or a non-numeric amount."""

    pass


class BetNotFound(BetError):
    """Operation referenced a bet id that does not exist."""

    def __init__(self, bet_id: int):
        super().__init__(f"Bet not found: {bet_id}")
        self.bet_id = bet_id


class BetClosed(BetError):
    """Vote rejected because the bet is already resolved."""

    def __init__(self, bet_id: int):
        super().__init__(f"Bet already finalized: {bet_id}")
        self.bet_id = bet_id


class ValidationUnavailable(BetPoolError):
    """Proposal could not be validated because a collaborator failed."""

    pass


class MalformedDate(ValidationUnavailable):
    """Text generation did not return a YYYY-MM-DD date."""

    def __init__(self, raw_reply: str):
        super().__init__(f"Expected a YYYY-MM-DD date, got: {raw_reply!r}")
        self.raw_reply = raw_reply


class LookupFailed(ValidationUnavailable):
    """Event lookup failed."""

    pass
