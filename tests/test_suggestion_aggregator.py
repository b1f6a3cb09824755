"""
Tests for suggestion aggregation.

Tests cover:
1. Advisory sanitization (filter and enricher)
2. Merge order, field dedupe and cap
3. Graceful degradation when the advisory service fails
"""

import asyncio

from promptforge.models.prompt_models import PromptMode, PromptSpec
from promptforge.services.confidence_based_filter import ConfidenceBasedFilter, coerce_confidence
from promptforge.services.errors import FormatError
from promptforge.services.suggestion_aggregator import SuggestionAggregator
from promptforge.services.suggestion_enricher import DefaultsEnricher
from promptforge.services.suggestion_interfaces import AdvisoryService


class FakeAdvisoryService(AdvisoryService):
    def __init__(self, suggestions=None, error=None, delay=0.0):
        self.suggestions = suggestions or []
        self.error = error
        self.delay = delay
        self.calls = 0

    async def suggest(self, spec, max_suggestions):
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.suggestions


def advisory_item(title, field, confidence=80, **extra):
    item = {
        "type": "keyword",
        "title": title,
        "description": f"{title} description",
        "value": f"{title} value",
        "field": field,
        "confidence": confidence,
    }
    item.update(extra)
    return item


SPEC = PromptSpec(keywords="app tarefas para equipes remotas", mode=PromptMode.IMAGE_GENERATION)


class TestConfidenceBasedFilter:
    """Sanitization of raw advisory suggestions."""

    def test_incomplete_suggestions_dropped(self):
        """Test incomplete suggestions are dropped"""
        raw = [
            advisory_item("Complete", "keywords"),
            {"title": "No value", "description": "d", "field": "context"},
            {"title": "", "description": "d", "value": "v", "field": "context"},
            "not a dict",
        ]
        filtered = ConfidenceBasedFilter().filter(raw)
        assert [s["title"] for s in filtered] == ["Complete"]

    def test_duplicate_titles_removed(self):
        """Test duplicate titles are removed regardless of case"""
        raw = [advisory_item("Add Context", "context", 60), advisory_item("add context", "context", 90)]
        assert len(ConfidenceBasedFilter().filter(raw)) == 1

    def test_threshold_and_ordering(self):
        """Test the threshold and confidence ordering"""
        raw = [advisory_item("Low", "tone", 20), advisory_item("High", "context", 95), advisory_item("Mid", "keywords", 50)]
        filtered = ConfidenceBasedFilter().filter(raw, threshold=40)
        assert [s["title"] for s in filtered] == ["High", "Mid"]

    def test_confidence_coercion(self):
        """Test confidence coercion and clamping"""
        assert coerce_confidence(None) == 70
        assert coerce_confidence(0) == 70
        assert coerce_confidence(150) == 100
        assert coerce_confidence(-5) == 0
        assert coerce_confidence("85") == 85
        assert coerce_confidence("high") == 70


class TestDefaultsEnricher:
    """Defaults for advisory suggestions."""

    def test_unknown_type_becomes_enhancement(self):
        """Test unknown types become enhancement"""
        enriched = DefaultsEnricher().enrich([advisory_item("T", "tone", type="magic")], SPEC)
        assert enriched[0]["type"] == "enhancement"
        assert enriched[0]["id"] == "ai-suggestion-0"
        assert enriched[0]["source"] == "advisory"


class TestSuggestionAggregator:
    """Merging local and advisory suggestions."""

    def test_local_only_without_advisory(self):
        """Test local suggestions without an advisory service"""
        response = asyncio.run(SuggestionAggregator().aggregate(SPEC))
        assert response.advisory_used is False
        assert response.advisory_count == 0
        assert {s.field for s in response.suggestions} == {"negative_prompt", "context"}
        assert all(s.source == "local" for s in response.suggestions)

    def test_advisory_first_and_covered_fields_dropped(self):
        """Test advisory suggestions replace local ones for the same field"""
        advisory = FakeAdvisoryService([advisory_item("Better context", "context", 75)])
        response = asyncio.run(SuggestionAggregator(advisory_service=advisory).aggregate(SPEC))

        context = [s for s in response.suggestions if s.field == "context"]
        assert len(context) == 1
        assert context[0].source == "advisory"
        assert response.advisory_used is True
        assert response.local_count == 1

    def test_sorted_by_confidence_and_capped(self):
        """Test merged suggestions are sorted and capped"""
        advisory = FakeAdvisoryService(
            [advisory_item(f"S{i}", f"field{i}", 50 + i) for i in range(6)]
        )
        response = asyncio.run(
            SuggestionAggregator(advisory_service=advisory).aggregate(SPEC, max_suggestions=3)
        )
        confidences = [s.confidence for s in response.suggestions]
        assert len(confidences) == 3
        assert confidences == sorted(confidences, reverse=True)

    def test_advisory_failure_is_swallowed(self):
        """Test advisory failures fall back to local suggestions"""
        advisory = FakeAdvisoryService(error=FormatError("not json"))
        response = asyncio.run(SuggestionAggregator(advisory_service=advisory).aggregate(SPEC))
        assert advisory.calls == 1
        assert response.advisory_used is False
        assert response.local_count == len(response.suggestions) > 0

    def test_advisory_timeout_is_swallowed(self, settings):
        """Test advisory timeouts fall back to local suggestions"""
        fast = settings.model_copy(update={"advisory_timeout_seconds": 0.01})
        advisory = FakeAdvisoryService([advisory_item("Late", "tone")], delay=0.5)
        response = asyncio.run(
            SuggestionAggregator(advisory_service=advisory, settings=fast).aggregate(SPEC)
        )
        assert response.advisory_used is False
        assert all(s.source == "local" for s in response.suggestions)

    def test_short_keywords_skip_advisory(self):
        """Test short keywords skip the advisory service"""
        advisory = FakeAdvisoryService([advisory_item("X", "tone")])
        asyncio.run(SuggestionAggregator(advisory_service=advisory).aggregate(PromptSpec(keywords="app")))
        assert advisory.calls == 0

    def test_disabled_advisory_not_called(self, settings):
        """Test a disabled advisory service is not called"""
        disabled = settings.model_copy(update={"advisory_enabled": False})
        advisory = FakeAdvisoryService([advisory_item("X", "tone")])
        asyncio.run(SuggestionAggregator(advisory_service=advisory, settings=disabled).aggregate(SPEC))
        assert advisory.calls == 0
