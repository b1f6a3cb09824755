"""Service for AI-assisted prompt analysis with a neutral fallback."""

from typing import Any, Dict, List, Optional
import json
import logging
import re
import time

from openai import AsyncOpenAI

from promptforge.models.analysis_models import AIAnalysisRequest, AIAnalysisResponse
from promptforge.services.errors import FormatError, ServiceNotConfiguredError
from promptforge.utils.config import get_settings
from promptforge.utils.prompts import get_analysis_prompt

logger = logging.getLogger(__name__)

JSON_BLOCK = re.compile(r"\{[\s\S]*\}")
MAX_LIST_ITEMS = 5
NEUTRAL_SCORE = 60
MISSING_SCORE = 50


def extract_json(text: Optional[str]) -> Dict[str, Any]:
    """Parse the first {...} block of a model response.

    Raises:
        FormatError: no JSON object could be parsed
    """
    match = JSON_BLOCK.search(text or "")
    if not match:
        raise FormatError("No JSON object in model response")
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise FormatError(f"Invalid JSON in model response: {e}") from e
    if not isinstance(parsed, dict):
        raise FormatError("Model response is not a JSON object")
    return parsed


def _score(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not value:
        return MISSING_SCORE
    return max(0, min(100, int(round(value))))


def _items(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item][:MAX_LIST_ITEMS]


class AIPromptAnalyzer:
    """Asks the model for a JSON analysis, falling back to neutral scores."""

    def __init__(self, client: Optional[AsyncOpenAI] = None):
        self.settings = get_settings()
        self.client = client
        if self.client is None and self.settings.generation_configured:
            self.client = AsyncOpenAI(api_key=self.settings.openai_api_key, max_retries=0)

    async def analyze(self, request: AIAnalysisRequest) -> AIAnalysisResponse:
        """Analyze the parameter set using AI and fall back to neutral advice if needed."""
        start_time = time.time()

        try:
            if self.client is None:
                raise ServiceNotConfiguredError("OPENAI_API_KEY is not set")

            prompt = get_analysis_prompt(request.params, request.generated_prompt)

            response = await self.client.chat.completions.create(
                model=request.params.model_id or self.settings.openai_model,
                messages=[
                    {
                        "role": "system",
                        "content": "You are an expert in prompt engineering for AI. You give specific, practical and honest assessments of prompt parameters.",
                    },
                    {"role": "user", "content": prompt},
                ],
                temperature=0.3,
                max_tokens=1500,
                response_format={"type": "json_object"},
            )

            ai_result = extract_json(response.choices[0].message.content)
            analysis = self._transform_ai_response(ai_result)

        except Exception as e:
            logger.warning("AI analysis unavailable, using neutral fallback: %s", e)
            analysis = self._fallback_analysis()

        analysis.processing_time_ms = int((time.time() - start_time) * 1000)
        return analysis

    def _transform_ai_response(self, ai_result: Dict[str, Any]) -> AIAnalysisResponse:
        return AIAnalysisResponse(
            score=_score(ai_result.get("score")),
            clarity=_score(ai_result.get("clarity")),
            specificity=_score(ai_result.get("specificity")),
            effectiveness=_score(ai_result.get("effectiveness")),
            strengths=_items(ai_result.get("strengths")),
            weaknesses=_items(ai_result.get("weaknesses")),
            suggestions=_items(ai_result.get("suggestions")),
            improvements=_items(ai_result.get("improvements")),
            fallback=False,
        )

    def _fallback_analysis(self) -> AIAnalysisResponse:
        # Neutral result when the model is unavailable or its output unusable
        return AIAnalysisResponse(
            score=NEUTRAL_SCORE,
            clarity=NEUTRAL_SCORE,
            specificity=NEUTRAL_SCORE,
            effectiveness=NEUTRAL_SCORE,
            strengths=["Basic parameters defined"],
            weaknesses=["Detailed analysis unavailable"],
            suggestions=["Try again in a few moments"],
            improvements=["Add more specific context"],
            fallback=True,
        )
