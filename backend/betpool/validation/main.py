"""Intent validator: checks that a proposal refers to a real game."""

from __future__ import annotations

import asyncio
import json
import logging
import re
from datetime import date, datetime, timezone
from typing import Protocol

from betpool.events import EventLookup
from betpool.exceptions import MalformedDate, ValidationUnavailable

from .models import ValidationResult
from .prompts import DATE_INSTRUCTION, EVENT_MATCH_INSTRUCTION

logger = logging.getLogger(__name__)

_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


class TextGeneration(Protocol):
    async def generate(
        self,
        prompt: str,
        system_instruction: str,
        context_data: str | None = None,
    ) -> str: ...


def parse_target_date(reply: str) -> str:
    """Return the reply as a ``YYYY-MM-DD`` string or raise MalformedDate."""
    candidate = reply.strip().strip("\"'").strip()
    if not _DATE_PATTERN.fullmatch(candidate):
        raise MalformedDate(reply)
    try:
        date.fromisoformat(candidate)
    except ValueError:
        raise MalformedDate(reply)
    return candidate


class IntentValidator:
    """Best-effort plausibility filter for bet proposals.

    Resolves the date a prompt talks about, looks up the games on that date
    and asks the model whether the prompt matches one of them. Only an exact
    ``"yes"`` counts as a match.
    """

    def __init__(
        self,
        generator: TextGeneration,
        events: EventLookup,
        timeout_seconds: float = 30.0,
    ):
        self.generator = generator
        self.events = events
        self.timeout_seconds = timeout_seconds

    async def _generate(
        self,
        prompt: str,
        system_instruction: str,
        context_data: str | None = None,
    ) -> str:
        try:
            async with asyncio.timeout(self.timeout_seconds):
                return await self.generator.generate(prompt, system_instruction, context_data)
        except TimeoutError:
            logger.warning(f"Text generation timed out after {self.timeout_seconds}s")
            raise ValidationUnavailable("Text generation timed out")
        except Exception as e:
            logger.error(f"Text generation failed: {e}", exc_info=True)
            raise ValidationUnavailable(f"Text generation failed: {e}")

    async def validate(self, prompt: str, now: datetime | None = None) -> ValidationResult:
        now = now or datetime.now(timezone.utc)

        date_reply = await self._generate(prompt, DATE_INSTRUCTION, now.isoformat())
        target_date = parse_target_date(date_reply)
        logger.info(f"Resolved bet date: {target_date}")

        summaries = await self.events.lookup_events(target_date)
        context = json.dumps([s.model_dump() for s in summaries])

        reply = await self._generate(prompt, EVENT_MATCH_INSTRUCTION, context)
        valid = reply == "yes"
        logger.info(
            f"Validation for {prompt!r}: {'valid' if valid else 'invalid'} "
            f"({len(summaries)} games on {target_date})"
        )

        return ValidationResult(valid=valid, target_date=target_date, events=summaries)
