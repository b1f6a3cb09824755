"""
Topic ideas for a prompt mode.

The model is asked once with the full request and, when the answer holds no
usable lines, once more with a simpler prompt. If that also fails the curated
ideas from the template registry are returned with fallback=True.
"""

from typing import List, Optional
import logging
import re

from openai import AsyncOpenAI

from promptforge.models.instruction_models import TopicSuggestionRequest, TopicSuggestionResponse
from promptforge.services.errors import ServiceError, ServiceNotConfiguredError
from promptforge.utils.config import get_settings
from promptforge.utils.prompt_registry import topic_ideas
from promptforge.utils.prompts import (
    get_simple_topic_prompt,
    get_topic_prompt,
    get_topic_system_prompt,
)

logger = logging.getLogger(__name__)

LIST_MARKER = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")


def parse_topics(text: Optional[str], count: int) -> List[str]:
    """One topic per non-empty line, list markers and quotes removed."""
    topics = []
    for line in (text or "").splitlines():
        topic = LIST_MARKER.sub("", line).strip().strip('"').strip()
        if topic:
            topics.append(topic)
    return topics[:count]


class TopicSuggester:
    """Suggests topics through the model, with a simpler retry and curated ideas."""

    def __init__(self, client: Optional[AsyncOpenAI] = None):
        self.settings = get_settings()
        self.client = client
        if self.client is None and self.settings.generation_configured:
            self.client = AsyncOpenAI(api_key=self.settings.openai_api_key, max_retries=0)

    async def suggest(self, request: TopicSuggestionRequest) -> TopicSuggestionResponse:
        try:
            topics = await self._ask(
                request,
                get_topic_prompt(request.mode, request.count, request.keywords, request.context),
            )
            if not topics:
                logger.warning("No topics in model answer, trying a simpler prompt")
                topics = await self._ask(
                    request, get_simple_topic_prompt(request.mode, request.count, request.language)
                )
            if topics:
                return TopicSuggestionResponse(topics=topics)

        except ServiceError as e:
            logger.warning("Topic suggestions unavailable, using curated ideas: %s", e)

        return TopicSuggestionResponse(
            topics=list(topic_ideas(request.mode, request.language))[: request.count],
            fallback=True,
        )

    async def _ask(self, request: TopicSuggestionRequest, user_prompt: str) -> List[str]:
        if self.client is None:
            raise ServiceNotConfiguredError("OPENAI_API_KEY is not set")

        try:
            response = await self.client.chat.completions.create(
                model=request.model_id or self.settings.openai_model,
                messages=[
                    {"role": "system", "content": get_topic_system_prompt(request.count, request.language)},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=0.9,
                max_tokens=300,
            )
        except Exception as e:
            raise ServiceError(f"Topic call failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        return parse_topics(content, request.count)
