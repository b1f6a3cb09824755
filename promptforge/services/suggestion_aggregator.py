"""
Suggestion aggregation.

Implementation:
- SuggestionAggregator: Local scorer suggestions plus optional advisory ones
- Filter and enricher components injected via dependency injection
- Advisory failures and timeouts are swallowed, local suggestions always return
"""

import asyncio
import logging
import time
from typing import Dict, List, Optional

from promptforge.models.analysis_models import Impact, Suggestion
from promptforge.models.prompt_models import PromptSpec
from promptforge.models.suggestion_models import SmartSuggestion, SuggestionResponse
from promptforge.services import quality_scorer
from promptforge.services.advisory_service import OpenAIAdvisoryService
from promptforge.services.confidence_based_filter import ConfidenceBasedFilter
from promptforge.services.suggestion_enricher import DefaultsEnricher
from promptforge.services.suggestion_interfaces import (
    AdvisoryService,
    ISuggestionEnricher,
    ISuggestionFilter,
)
from promptforge.utils.config import Settings, get_settings

logger = logging.getLogger(__name__)

PRIORITY_CONFIDENCE = {
    Impact.HIGH: 90,
    Impact.MEDIUM: 75,
    Impact.LOW: 60,
}

FIELD_TYPES = {
    "keywords": "keyword",
    "context": "context",
    "tone": "tone",
    "length": "structure",
    "include_examples": "structure",
}

DEFAULT_VALUES = {
    "include_examples": "false",
    "length": "medium",
}


def to_smart_suggestion(suggestion: Suggestion, index: int) -> SmartSuggestion:
    """Convert a scorer suggestion to the aggregated shape."""
    field = suggestion.field or suggestion.category
    value = suggestion.example or DEFAULT_VALUES.get(field) or suggestion.title

    return SmartSuggestion(
        id=f"local-suggestion-{index}",
        type=FIELD_TYPES.get(field, "enhancement"),
        title=suggestion.title,
        description=suggestion.description,
        value=value,
        field=field,
        confidence=PRIORITY_CONFIDENCE[suggestion.priority],
        reasoning=suggestion.description,
        example=suggestion.example,
        source="local",
    )


class SuggestionAggregator:
    """
    Combines local and advisory suggestions.

    Responsibilities:
    - Run the local scorer suggestions first
    - Call the advisory service under a bounded timeout when worthwhile
    - Merge, deduplicate by target field, cap and order by confidence
    """

    def __init__(
        self,
        advisory_service: Optional[AdvisoryService] = None,
        suggestion_filter: Optional[ISuggestionFilter] = None,
        suggestion_enricher: Optional[ISuggestionEnricher] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.advisory_service = advisory_service
        self.filter = suggestion_filter or ConfidenceBasedFilter()
        self.enricher = suggestion_enricher or DefaultsEnricher()
        self.min_confidence_threshold = 0

    def local_suggestions(self, spec: PromptSpec) -> List[SmartSuggestion]:
        issues = quality_scorer.detect_issues(spec)
        suggestions = quality_scorer.generate_suggestions(spec, issues)
        return [to_smart_suggestion(s, i) for i, s in enumerate(suggestions)]

    def should_consult_advisory(self, spec: PromptSpec) -> bool:
        return (
            self.advisory_service is not None
            and self.settings.advisory_enabled
            and len(spec.keywords) > self.settings.advisory_min_keywords_length
        )

    async def advisory_suggestions(
        self, spec: PromptSpec, max_suggestions: int
    ) -> List[SmartSuggestion]:
        """Sanitized advisory suggestions; empty on any failure."""
        try:
            raw = await asyncio.wait_for(
                self.advisory_service.suggest(spec, max_suggestions),
                timeout=self.settings.advisory_timeout_seconds,
            )
            filtered = self.filter.filter(raw, self.min_confidence_threshold)
            enriched = self.enricher.enrich(filtered, spec)
            return [SmartSuggestion(**s) for s in enriched]
        except asyncio.TimeoutError:
            logger.warning(
                "Advisory service timed out after %.1fs, using local suggestions only",
                self.settings.advisory_timeout_seconds,
            )
        except Exception as e:
            logger.warning("Advisory service failed (%s), using local suggestions only", e)
        return []

    @staticmethod
    def merge(
        external: List[SmartSuggestion], local: List[SmartSuggestion], limit: int
    ) -> List[SmartSuggestion]:
        covered_fields = {s.field for s in external}
        combined = external + [s for s in local if s.field not in covered_fields]
        combined = combined[:limit]
        # sort is stable: ties keep advisory-first order
        combined.sort(key=lambda s: s.confidence, reverse=True)
        return combined

    async def aggregate(
        self, spec: PromptSpec, max_suggestions: Optional[int] = None
    ) -> SuggestionResponse:
        """Aggregate suggestions for an already normalized spec."""
        start_time = time.time()
        limit = max_suggestions or self.settings.max_suggestions

        local = self.local_suggestions(spec)
        external: List[SmartSuggestion] = []
        if self.should_consult_advisory(spec):
            external = await self.advisory_suggestions(spec, limit)

        suggestions = self.merge(external, local, limit)
        counts: Dict[str, int] = {"local": 0, "advisory": 0}
        for s in suggestions:
            counts[s.source] += 1

        return SuggestionResponse(
            suggestions=suggestions,
            local_count=counts["local"],
            advisory_count=counts["advisory"],
            advisory_used=bool(external),
            processing_time_ms=int((time.time() - start_time) * 1000),
        )


# Factory function for easy instantiation
def create_suggestion_aggregator() -> SuggestionAggregator:
    """Aggregator wired to the OpenAI advisory service when it is configured."""
    settings = get_settings()
    advisory = OpenAIAdvisoryService() if settings.generation_configured else None
    return SuggestionAggregator(
        advisory_service=advisory,
        suggestion_filter=ConfidenceBasedFilter(),
        suggestion_enricher=DefaultsEnricher(),
    )
