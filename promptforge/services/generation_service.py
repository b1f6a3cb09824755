"""Generation Service collaborator: interface and OpenAI-backed implementation."""

from abc import ABC, abstractmethod
from typing import List, Optional
import logging

from openai import AsyncOpenAI

from promptforge.models.generation_models import (
    GenerationConfig,
    SafetyThreshold,
    default_safety_thresholds,
)
from promptforge.services.errors import (
    SafetyWithheldError,
    ServiceError,
    ServiceNotConfiguredError,
)
from promptforge.utils.config import get_settings

logger = logging.getLogger(__name__)


class GenerationService(ABC):
    """Interface for the external text-generation collaborator."""

    @abstractmethod
    async def generate(
        self,
        system_instruction: Optional[str],
        user_instruction: str,
        config: GenerationConfig,
        safety_thresholds: List[SafetyThreshold],
        model_id: Optional[str] = None,
    ) -> str:
        """Return the generated text.

        Raises:
            ServiceError: the call failed or its output was withheld
        """


class OpenAIGenerationService(GenerationService):
    """Generation Service on top of OpenAI chat completions."""

    def __init__(self, client: Optional[AsyncOpenAI] = None):
        self.settings = get_settings()
        self.client = client
        if self.client is None and self.settings.generation_configured:
            # Retry policy belongs to the orchestrator
            self.client = AsyncOpenAI(api_key=self.settings.openai_api_key, max_retries=0)

    def default_config(self) -> GenerationConfig:
        return GenerationConfig(
            temperature=self.settings.openai_temperature,
            top_k=self.settings.openai_top_k,
            top_p=self.settings.openai_top_p,
            max_output_tokens=self.settings.openai_max_tokens,
        )

    async def generate(
        self,
        system_instruction: Optional[str],
        user_instruction: str,
        config: GenerationConfig,
        safety_thresholds: Optional[List[SafetyThreshold]] = None,
        model_id: Optional[str] = None,
    ) -> str:
        if self.client is None:
            raise ServiceNotConfiguredError("OPENAI_API_KEY is not set")

        # top_k and safety thresholds have no chat-completions equivalent;
        # OpenAI applies its own content filter.
        safety_thresholds = safety_thresholds or default_safety_thresholds()
        logger.debug(
            "Calling model %s (top_k=%d, %d safety categories)",
            model_id or self.settings.openai_model,
            config.top_k,
            len(safety_thresholds),
        )

        messages = []
        if system_instruction:
            messages.append({"role": "system", "content": system_instruction})
        messages.append({"role": "user", "content": user_instruction})

        try:
            response = await self.client.chat.completions.create(
                model=model_id or self.settings.openai_model,
                messages=messages,
                temperature=config.temperature,
                top_p=config.top_p,
                max_tokens=config.max_output_tokens,
            )
        except Exception as e:
            raise ServiceError(f"Generation call failed: {e}") from e

        if not response.choices:
            raise ServiceError("Generation returned no choices")

        choice = response.choices[0]
        if choice.finish_reason == "content_filter":
            raise SafetyWithheldError("Output withheld by the content filter")

        return choice.message.content or ""
