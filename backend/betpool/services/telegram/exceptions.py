"""Telegram service exceptions."""


class TelegramError(Exception):
    """Base Telegram exception."""

    pass


class TelegramConfigError(TelegramError):
    """Config error."""

    pass
