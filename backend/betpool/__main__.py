"""BetPool CLI entry point."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

env_file = Path(__file__).parent.parent / ".env"
load_dotenv(env_file)

from betpool import __version__
from betpool.app import build_dispatcher, build_event_resolver, build_validator
from betpool.config import get_settings
from betpool.exceptions import ValidationUnavailable
from betpool.services.telegram import TelegramBotConfig, TelegramConfigError, create_bet_bot

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)

CONFIG_TEMPLATE = """# BetPool Configuration
# API keys and secrets belong in the .env file, not here.

bets:
  allow_votes_after_finalize: true

validation:
  enabled: true
  model: gpt-5-mini
  timeout_seconds: 30

events:
  timeout_seconds: 15

telegram:
  drop_pending_updates: true
"""


def _init_logfire() -> None:
    """Initialize Logfire if available, without failing commands."""
    try:
        from betpool.observability import initialize_logfire

        initialize_logfire(get_settings())
    except Exception as e:
        logger.warning(f"Failed to initialize Logfire: {e}")


def cmd_init(args: argparse.Namespace) -> int:
    """Create the data directory and a configuration template."""
    data_dir = Path("data").resolve()

    try:
        data_dir.mkdir(exist_ok=True)
        logger.info(f"Created data directory: {data_dir}")

        config_path = data_dir / "config.yaml"
        if not config_path.exists():
            config_path.write_text(CONFIG_TEMPLATE)
            logger.info(f"Created config template: {config_path}")
        else:
            logger.info(f"Config file already exists: {config_path}")

        print(f"\n✓ Data directory initialized at {data_dir}")
        print("\nNext steps:")
        print("1. Create a .env file with your API keys")
        print("2. Review and customize data/config.yaml if needed")
        print("3. Run 'python -m betpool config' to verify configuration")
        print("4. Run 'python -m betpool run' to start the bot\n")

        return 0

    except Exception as e:
        logger.error(f"Failed to initialize: {e}")
        print(f"\n❌ Initialization failed: {e}\n")
        return 1


def cmd_config(args: argparse.Namespace) -> int:
    """Display merged configuration."""
    try:
        settings = get_settings()

        print("\n=== BetPool Configuration ===\n")
        print(f"Data Directory: {settings.data_dir}\n")

        print("Bets:")
        print(f"  Votes After Finalize: {settings.bets.allow_votes_after_finalize}\n")

        print("Validation:")
        print(f"  Enabled: {settings.validation.enabled}")
        print(f"  Model: {settings.validation.model}")
        print(f"  Timeout: {settings.validation.timeout_seconds}s\n")

        print("Events:")
        print(f"  Lookup Timeout: {settings.events.timeout_seconds}s\n")

        print("API Keys:")
        print(f"  OpenAI: {'✓ Set' if settings.openai_api_key else '✗ Not set'}")
        print(f"  Anthropic: {'✓ Set' if settings.anthropic_api_key else '✗ Not set'}")
        print(f"  RapidAPI: {'✓ Set' if settings.rapidapi_key else '✗ Not set'}")
        print(f"  Telegram: {'✓ Set' if settings.telegram_bot_token else '✗ Not set'}")
        print(f"  Logfire: {'✓ Set' if settings.logfire_token else '✗ Not set'}\n")

        return 0

    except ValidationError as e:
        print("\n❌ Configuration Error:\n")
        for error in e.errors():
            print(f"  • {'.'.join(str(x) for x in error['loc'])}: {error['msg']}")
        print()
        return 1
    except Exception as e:
        logger.error(f"Failed to load config: {e}")
        print(f"\n❌ Failed to load configuration: {e}\n")
        return 1


def cmd_events(args: argparse.Namespace) -> int:
    """Look up and print the games on a date."""
    _init_logfire()
    resolver = build_event_resolver(get_settings())

    try:
        events = asyncio.run(resolver.lookup_events(args.date))
    except ValidationUnavailable as e:
        print(f"\n❌ Lookup failed: {e}\n")
        return 1

    print(f"\n=== Games on {args.date} ===\n")
    if not events:
        print("  (None)\n")
        return 0
    for event in events:
        print(f"  #{event.id} {event.participant_a} @ {event.participant_b} - winner: {event.winner}")
    print()
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Check a bet prompt against real games without creating a bet."""
    _init_logfire()
    validator = build_validator(get_settings())

    try:
        result = asyncio.run(validator.validate(args.prompt))
    except ValidationUnavailable as e:
        print(f"\n❌ Cannot validate: {e}\n")
        return 1

    print(f"\nTarget date: {result.target_date}")
    print(f"Games found: {len(result.events)}")
    print(f"Valid: {'✓ yes' if result.valid else '✗ no'}\n")
    return 0 if result.valid else 2


def cmd_run(args: argparse.Namespace) -> int:
    """Start the Telegram bot."""
    try:
        _init_logfire()

        if args.debug:
            logging.getLogger().setLevel(logging.DEBUG)

        settings = get_settings()
        dispatcher = build_dispatcher(settings, validate=False if args.no_validation else None)

        print("\n=== BetPool Telegram Bot ===\n")
        print(f"Version: {__version__}")
        print(f"Validation: {'ON' if dispatcher.validator else 'OFF'}")
        print(f"Votes After Finalize: {settings.bets.allow_votes_after_finalize}\n")

        bot = create_bet_bot(
            dispatcher,
            bot_token=settings.telegram_bot_token,
            config=TelegramBotConfig(
                drop_pending_updates=settings.telegram.drop_pending_updates,
            ),
        )
        bot.run()

        return 0

    except TelegramConfigError as e:
        print(f"\n❌ {e}\nSet TELEGRAM_BOT_TOKEN in .env\n")
        return 1
    except KeyboardInterrupt:
        print("\n\nReceived interrupt signal. Shutting down...\n")
        return 0
    except Exception as e:
        logger.error(f"Failed to start bot: {e}", exc_info=True)
        print(f"\nFailed to start: {e}\n")
        return 1


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="BetPool: group sports bets settled by majority vote",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"BetPool {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parser_init = subparsers.add_parser(
        "init",
        help="Initialize data directory and configuration file",
    )
    parser_init.set_defaults(func=cmd_init)

    parser_config = subparsers.add_parser(
        "config",
        help="Display merged configuration",
    )
    parser_config.set_defaults(func=cmd_config)

    parser_events = subparsers.add_parser(
        "events",
        help="Look up NBA games for a date",
    )
    parser_events.add_argument("date", help="Date in YYYY-MM-DD format")
    parser_events.set_defaults(func=cmd_events)

    parser_validate = subparsers.add_parser(
        "validate",
        help="Check whether a bet prompt matches a real game",
    )
    parser_validate.add_argument("prompt", help="Bet prompt, without the amount")
    parser_validate.set_defaults(func=cmd_validate)

    parser_run = subparsers.add_parser(
        "run",
        help="Start the Telegram bot",
    )
    parser_run.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser_run.add_argument(
        "--no-validation",
        action="store_true",
        help="Create bets without checking them against real games",
    )
    parser_run.set_defaults(func=cmd_run)

    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
