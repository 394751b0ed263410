"""Telegram chat transport for bet commands."""

from .bot import BetBot, create_bet_bot
from .config import TelegramBotConfig
from .exceptions import TelegramConfigError, TelegramError

__all__ = [
    "BetBot",
    "create_bet_bot",
    "TelegramBotConfig",
    "TelegramError",
    "TelegramConfigError",
]
