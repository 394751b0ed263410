class NBAAPIError(Exception):
    """Base exception for NBA API errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NBAAuthError(NBAAPIError):
    """Authentication failed."""

    pass


class NBARateLimitError(NBAAPIError):
    """Rate limit exceeded."""

    pass


class NBANetworkError(NBAAPIError):
    """Request never reached the API or timed out."""

    pass
