"""
AI Engine Module

This module wraps the text-generation model behind a small async interface.
The review orchestrator only depends on that interface, so tests can inject
a fake generator and the model provider can change without touching it.

Design Decisions:
- One request per call, no retries: callers decide how to react to failure
- Every provider failure surfaces as AIGenerationError
- Rate limit API calls to avoid hitting quotas
"""

from typing import Optional, Protocol

from aiolimiter import AsyncLimiter
from openai import AsyncOpenAI, OpenAIError

from app.config import get_settings
from app.logging_config import get_logger

logger = get_logger(__name__)


class AIGenerationError(Exception):
    """Raised when the model fails to produce text."""
    pass


class TextGenerator(Protocol):
    """Async capability that turns a prompt into model text."""

    async def generate(self, prompt: str, system_instruction: str) -> str:
        """
        Generate text for a prompt.

        Raises:
            AIGenerationError: On any upstream failure
        """
        ...


class AIGenerationEngine:
    """
    Text generator backed by OpenAI chat completions.

    Usage:
        engine = AIGenerationEngine()
        text = await engine.generate(prompt, system_instruction)
    """

    def __init__(self, client: Optional[AsyncOpenAI] = None):
        """
        Initialize the engine.

        Args:
            client: Preconfigured client; built from settings when omitted
        """
        self.settings = get_settings()
        self.client = client or AsyncOpenAI(
            api_key=self.settings.openai_api_key,
            timeout=self.settings.openai_timeout_seconds,
            max_retries=0,
        )

        # Rate limiter for OpenAI API
        self._rate_limiter = AsyncLimiter(
            max_rate=self.settings.openai_rate_limit_rpm,
            time_period=60
        )

    async def generate(self, prompt: str, system_instruction: str) -> str:
        """
        Send one chat completion request.

        Args:
            prompt: User message
            system_instruction: System message describing persona and format

        Returns:
            Model response text

        Raises:
            AIGenerationError: If the request fails or returns no text
        """
        logger.debug(
            "Sending generation request",
            model=self.settings.openai_model,
            prompt_length=len(prompt)
        )

        async with self._rate_limiter:
            try:
                response = await self.client.chat.completions.create(
                    model=self.settings.openai_model,
                    messages=[
                        {"role": "system", "content": system_instruction},
                        {"role": "user", "content": prompt}
                    ],
                    temperature=self.settings.openai_temperature,
                    max_tokens=self.settings.openai_max_tokens,
                )
            except OpenAIError as e:
                logger.error(
                    "Generation request failed",
                    error=str(e),
                    error_type=type(e).__name__
                )
                raise AIGenerationError(f"Generation request failed: {e}") from e

        if not response.choices:
            raise AIGenerationError("Malformed response from AI: no choices")

        content = response.choices[0].message.content
        if not content:
            raise AIGenerationError("Empty response from AI")

        logger.debug(
            "Received AI response",
            response_length=len(content),
            usage=response.usage.model_dump() if response.usage else None
        )

        return content


# Singleton instance
_engine_instance: Optional[AIGenerationEngine] = None


def get_ai_engine() -> AIGenerationEngine:
    """Get the singleton AIGenerationEngine instance."""
    global _engine_instance
    if _engine_instance is None:
        _engine_instance = AIGenerationEngine()
    return _engine_instance
