"""Telegram service config."""

from pydantic import BaseModel

COMMANDS = ("bet", "propose", "agree", "disagree", "finalize", "show", "list", "help")


class TelegramBotConfig(BaseModel):
    """Telegram bot config."""

    bot_token: str = ""
    drop_pending_updates: bool = True
    commands: tuple[str, ...] = COMMANDS
