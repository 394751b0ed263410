"""Telegram bot that forwards chat commands to the dispatcher."""

from __future__ import annotations

import logging

from telegram import Update
from telegram.ext import Application, CommandHandler, ContextTypes

from betpool.dispatcher import CommandDispatcher

from .config import TelegramBotConfig
from .exceptions import TelegramConfigError

logger = logging.getLogger(__name__)


def parse_command(text: str) -> tuple[str, str]:
    """Split ``"/bet@SomeBot Lakers win 10"`` into ``("bet", "Lakers win 10")``."""
    head, _, rest = (text or "").strip().partition(" ")
    command = head.lstrip("/").split("@", 1)[0].lower()
    return command, rest.strip()


class BetBot:
    """Polling Telegram bot; holds no bet state of its own."""

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        config: TelegramBotConfig | None = None,
        bot_token: str | None = None,
    ):
        self.dispatcher = dispatcher
        self.config = config or TelegramBotConfig()

        if bot_token:
            self.config.bot_token = bot_token

        if not self.config.bot_token:
            raise TelegramConfigError(
                "bot_token is required. Provide via config or constructor."
            )

        self._application: Application | None = None
        logger.info("Initialized BetBot")

    @property
    def application(self) -> Application:
        if self._application is None:
            self._application = Application.builder().token(self.config.bot_token).build()
            self._application.add_handler(
                CommandHandler(list(self.config.commands), self.handle_update)
            )
        return self._application

    async def handle_update(
        self,
        update: Update,
        context: ContextTypes.DEFAULT_TYPE,
    ) -> None:
        message = update.effective_message
        user = update.effective_user
        if message is None or user is None:
            return

        command, args = parse_command(message.text or "")
        sender = str(user.id)
        logger.info(f"/{command} from {sender}")

        reply = await self.dispatcher.handle(command, args, sender)
        await message.reply_text(reply)

    def run(self) -> None:
        """Poll Telegram until interrupted."""
        logger.info("Starting Telegram polling")
        self.application.run_polling(
            allowed_updates=Update.ALL_TYPES,
            drop_pending_updates=self.config.drop_pending_updates,
        )


def create_bet_bot(
    dispatcher: CommandDispatcher,
    bot_token: str,
    config: TelegramBotConfig | None = None,
) -> BetBot:
    """Create a BetBot instance."""
    return BetBot(dispatcher=dispatcher, config=config, bot_token=bot_token)
