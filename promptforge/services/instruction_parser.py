"""Turns a free-text instruction into prompt parameters."""

from enum import Enum
from typing import Any, Dict, Optional, Type
import logging
import time

from openai import AsyncOpenAI

from promptforge.models.instruction_models import ParseInstructionRequest, ParsedInstruction
from promptforge.models.prompt_models import Complexity, PromptMode, Tone
from promptforge.services.ai_analyzer import extract_json
from promptforge.services.errors import ServiceNotConfiguredError
from promptforge.services.normalizer import normalize
from promptforge.utils.config import get_settings
from promptforge.utils.prompts import get_parse_instruction_prompt

logger = logging.getLogger(__name__)


def _enum_value(enum_cls: Type[Enum], value: Any) -> Optional[Enum]:
    """Return the enum member for value, or None when it is not a valid option."""
    if value is None:
        return None
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        logger.warning("Discarding invalid %s parsed from instruction: %r", enum_cls.__name__, value)
        return None


def _text(value: Any) -> Optional[str]:
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


class InstructionParser:
    """Asks the model to extract parameters; falls back to keyword normalization."""

    def __init__(self, client: Optional[AsyncOpenAI] = None):
        self.settings = get_settings()
        self.client = client
        if self.client is None and self.settings.generation_configured:
            self.client = AsyncOpenAI(api_key=self.settings.openai_api_key, max_retries=0)

    async def parse(self, request: ParseInstructionRequest) -> ParsedInstruction:
        start_time = time.time()

        try:
            if self.client is None:
                raise ServiceNotConfiguredError("OPENAI_API_KEY is not set")

            response = await self.client.chat.completions.create(
                model=request.model_id or self.settings.openai_model,
                messages=[
                    {"role": "system", "content": get_parse_instruction_prompt(request.language)},
                    {"role": "user", "content": f'Parse the following instruction:\n"{request.instruction}"'},
                ],
                temperature=0.2,
                max_tokens=500,
                response_format={"type": "json_object"},
            )

            parsed = self._transform_ai_response(
                extract_json(response.choices[0].message.content), request.instruction
            )

        except Exception as e:
            logger.warning("Instruction parsing unavailable, normalizing instead: %s", e)
            parsed = self._fallback_parse(request.instruction)

        parsed.processing_time_ms = int((time.time() - start_time) * 1000)
        return parsed

    def _transform_ai_response(self, ai_result: Dict[str, Any], instruction: str) -> ParsedInstruction:
        keywords = _text(ai_result.get("keywords"))
        # The whole instruction echoed back is not a useful topic
        if keywords and keywords.lower() == instruction.lower():
            keywords = None

        mode = _enum_value(PromptMode, ai_result.get("mode"))
        image_style = _text(ai_result.get("image_style") or ai_result.get("imageStyle"))

        return ParsedInstruction(
            keywords=keywords,
            mode=mode,
            tone=_enum_value(Tone, ai_result.get("tone")),
            complexity=_enum_value(Complexity, ai_result.get("complexity")),
            image_style=image_style,
            fallback=False,
        )

    def _fallback_parse(self, instruction: str) -> ParsedInstruction:
        return ParsedInstruction(keywords=normalize(instruction) or None, fallback=True)
