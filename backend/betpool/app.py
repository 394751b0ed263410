"""Wires settings, collaborators and the registry into a dispatcher."""

import logging

from betpool.config import Settings
from betpool.dispatcher import CommandDispatcher
from betpool.events import EventResolver
from betpool.llm_providers import parse_model
from betpool.registry import BetRegistry
from betpool.text_generation import TextGenerator
from betpool.validation import IntentValidator

logger = logging.getLogger(__name__)


def build_event_resolver(settings: Settings) -> EventResolver:
    return EventResolver(
        api_key=settings.rapidapi_key,
        timeout_seconds=settings.events.timeout_seconds,
    )


def build_validator(settings: Settings) -> IntentValidator:
    generator = TextGenerator(
        model=parse_model(settings.validation.model),
        openai_api_key=settings.openai_api_key,
        anthropic_api_key=settings.anthropic_api_key,
    )
    return IntentValidator(
        generator=generator,
        events=build_event_resolver(settings),
        timeout_seconds=settings.validation.timeout_seconds,
    )


def build_dispatcher(settings: Settings, validate: bool | None = None) -> CommandDispatcher:
    """Create a fresh registry and the dispatcher that owns it."""
    registry = BetRegistry(
        allow_votes_after_finalize=settings.bets.allow_votes_after_finalize,
    )

    if validate is None:
        validate = settings.validation.enabled
    validator = build_validator(settings) if validate else None
    if validator is None:
        logger.warning("Bet validation disabled - proposals are not checked against real games")

    return CommandDispatcher(registry=registry, validator=validator)
