"""Advisory suggestion collaborator backed by OpenAI JSON output."""

import json
import logging
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI

from promptforge.models.prompt_models import PromptSpec
from promptforge.services.errors import FormatError, ServiceError, ServiceNotConfiguredError
from promptforge.services.suggestion_interfaces import AdvisoryService
from promptforge.utils.config import get_settings
from promptforge.utils.prompts import get_suggestion_prompt

logger = logging.getLogger(__name__)

SYSTEM_MESSAGE = (
    "You are an expert prompt engineer. You review prompt parameter sets and "
    "return concise, actionable improvement suggestions as JSON."
)


class OpenAIAdvisoryService(AdvisoryService):
    """Asks the model for raw suggestion dicts; sanitizing is the caller's job."""

    def __init__(self, client: Optional[AsyncOpenAI] = None):
        self.settings = get_settings()
        self.client = client
        if self.client is None and self.settings.generation_configured:
            self.client = AsyncOpenAI(api_key=self.settings.openai_api_key, max_retries=0)

    async def suggest(self, spec: PromptSpec, max_suggestions: int) -> List[Dict[str, Any]]:
        if self.client is None:
            raise ServiceNotConfiguredError("OPENAI_API_KEY is not set")

        try:
            response = await self.client.chat.completions.create(
                model=spec.model_id or self.settings.openai_model,
                messages=[
                    {"role": "system", "content": SYSTEM_MESSAGE},
                    {"role": "user", "content": get_suggestion_prompt(spec, max_suggestions)},
                ],
                temperature=0.7,
                max_tokens=1500,
                response_format={"type": "json_object"},
            )
        except Exception as e:
            raise ServiceError(f"Advisory call failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        try:
            ai_result = json.loads(content or "")
        except json.JSONDecodeError as e:
            raise FormatError(f"Advisory response is not JSON: {e}") from e

        suggestions = ai_result.get("suggestions") if isinstance(ai_result, dict) else None
        if not isinstance(suggestions, list):
            raise FormatError("Advisory response has no suggestions list")

        logger.debug("Advisory service returned %d raw suggestions", len(suggestions))
        return suggestions
