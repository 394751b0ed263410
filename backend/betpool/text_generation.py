"""Text generation through PydanticAI agents."""

from __future__ import annotations

import logging
import os
import re

from pydantic_ai import Agent
from pydantic_ai.models import Model

from betpool.llm_providers import (
    AnthropicModel,
    LLMProvider,
    OpenAIModel,
    get_model_string,
    get_provider_for_model,
)

logger = logging.getLogger(__name__)

_EMPHASIS = re.compile(r"(\*\*|__)(.*?)\1")
_LINK = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_HEADING = re.compile(r"^#+\s*(.*)$", re.MULTILINE)
_INLINE_CODE = re.compile(r"`([^`]+)`")
_EDGE_BACKTICK = re.compile(r"\A`|`\Z")


def clean_reply(reply: str) -> str:
    """Strip markdown decoration from a model reply.

    Bold/underline markers, heading hashes and inline code ticks are removed;
    links collapse to their URL.
    """
    reply = _EMPHASIS.sub(r"\2", reply)
    reply = _LINK.sub(r"\2", reply)
    reply = _HEADING.sub(r"\1", reply)
    reply = _INLINE_CODE.sub(r"\1", reply)
    reply = _EDGE_BACKTICK.sub("", reply)
    return reply.strip()


class TextGenerator:
    """Generates cleaned text replies for a user prompt and system instruction.

    One agent is created per distinct system instruction and reused.

    Args:
        model: A model enum, or any PydanticAI ``Model`` instance.
        openai_api_key: Exported as ``OPENAI_API_KEY`` for OpenAI models.
        anthropic_api_key: Exported as ``ANTHROPIC_API_KEY`` for Anthropic models.
    """

    def __init__(
        self,
        model: OpenAIModel | AnthropicModel | Model = OpenAIModel.GPT_5_MINI,
        openai_api_key: str = "",
        anthropic_api_key: str = "",
    ):
        if isinstance(model, (OpenAIModel, AnthropicModel)):
            self._setup_api_key(model, openai_api_key, anthropic_api_key)
            self._model: Model | str = get_model_string(model)
        else:
            self._model = model
        self._agents: dict[str, Agent[None, str]] = {}
        logger.info(f"Initialized TextGenerator (model={self._model})")

    @staticmethod
    def _setup_api_key(
        model: OpenAIModel | AnthropicModel,
        openai_api_key: str,
        anthropic_api_key: str,
    ) -> None:
        provider = get_provider_for_model(model)
        if provider is LLMProvider.OPENAI and openai_api_key:
            os.environ["OPENAI_API_KEY"] = openai_api_key
        elif provider is LLMProvider.ANTHROPIC and anthropic_api_key:
            os.environ["ANTHROPIC_API_KEY"] = anthropic_api_key

    def _get_agent(self, system_instruction: str) -> Agent[None, str]:
        agent = self._agents.get(system_instruction)
        if agent is None:
            agent = Agent(
                model=self._model,
                output_type=str,
                system_prompt=system_instruction,
            )
            self._agents[system_instruction] = agent
        return agent

    async def generate(
        self,
        prompt: str,
        system_instruction: str,
        context_data: str | None = None,
    ) -> str:
        """Run the model and return its cleaned reply."""
        user_prompt = prompt
        if context_data is not None:
            user_prompt = f"{prompt}\nData Source {context_data}"

        agent = self._get_agent(system_instruction)
        try:
            result = await agent.run(user_prompt)
        except Exception as e:
            logger.error(f"Text generation failed: {e}")
            raise

        return clean_reply(result.output)
