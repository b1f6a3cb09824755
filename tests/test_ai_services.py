"""Tests for the JSON-returning collaborators and the model catalog."""

import asyncio
import json
from types import SimpleNamespace

import pytest

from conftest import make_chat_client
from promptforge.models.analysis_models import AIAnalysisRequest
from promptforge.models.generation_models import GenerationConfig
from promptforge.models.prompt_models import PromptSpec
from promptforge.services.advisory_service import OpenAIAdvisoryService
from promptforge.services.ai_analyzer import AIPromptAnalyzer, extract_json
from promptforge.services.errors import (
    FormatError,
    SafetyWithheldError,
    ServiceNotConfiguredError,
)
from promptforge.services.generation_service import OpenAIGenerationService
from promptforge.services.model_catalog import ModelCatalogService, display_name, is_chat_model

REQUEST = AIAnalysisRequest(params=PromptSpec(keywords="app tarefas"))


class TestAIPromptAnalyzer:
    """AI analysis with neutral fallback."""

    def test_json_extracted_and_clamped(self):
        """Test JSON is extracted from surrounding text and values are clamped"""
        content = "Here you go:\n" + json.dumps(
            {
                "score": 140,
                "clarity": 72.4,
                "specificity": -3,
                "strengths": ["a", "b", "c", "d", "e", "f", "g"],
                "weaknesses": "not a list",
                "suggestions": ["s"],
                "improvements": [],
            }
        ) + "\nThanks"
        analysis = asyncio.run(AIPromptAnalyzer(client=make_chat_client(content)).analyze(REQUEST))

        assert analysis.fallback is False
        assert analysis.score == 100
        assert analysis.clarity == 72
        assert analysis.specificity == 0
        assert analysis.effectiveness == 50
        assert len(analysis.strengths) == 5
        assert analysis.weaknesses == []

    def test_unparseable_response_falls_back(self):
        """Test unparseable output yields the neutral analysis"""
        analysis = asyncio.run(AIPromptAnalyzer(client=make_chat_client("no json here")).analyze(REQUEST))
        assert analysis.fallback is True
        assert analysis.score == analysis.clarity == analysis.specificity == analysis.effectiveness == 60

    def test_service_error_falls_back(self):
        """Test a failing client yields the neutral analysis"""
        client = make_chat_client(error=RuntimeError("network down"))
        analysis = asyncio.run(AIPromptAnalyzer(client=client).analyze(REQUEST))
        assert analysis.fallback is True
        assert analysis.processing_time_ms is not None

    def test_not_configured_falls_back(self):
        """Test a missing API key yields the neutral analysis"""
        analysis = asyncio.run(AIPromptAnalyzer().analyze(REQUEST))
        assert analysis.fallback is True

    def test_extract_json_errors(self):
        """Test extract_json rejects invalid and missing content"""
        with pytest.raises(FormatError):
            extract_json("{not: valid}")
        with pytest.raises(FormatError):
            extract_json(None)


class TestOpenAIAdvisoryService:
    """Raw advisory suggestions."""

    def test_returns_suggestion_list(self):
        """Test the raw suggestion list is returned"""
        content = json.dumps({"suggestions": [{"title": "t"}]})
        service = OpenAIAdvisoryService(client=make_chat_client(content))
        assert asyncio.run(service.suggest(PromptSpec(keywords="app tarefas"), 5)) == [{"title": "t"}]

    def test_missing_list_is_format_error(self):
        """Test a response without a suggestions list raises FormatError"""
        service = OpenAIAdvisoryService(client=make_chat_client(json.dumps({"items": []})))
        with pytest.raises(FormatError):
            asyncio.run(service.suggest(PromptSpec(keywords="app tarefas"), 5))


class TestOpenAIGenerationService:
    """Adapter behaviour without network access."""

    def test_not_configured(self):
        """Test a missing client raises ServiceNotConfiguredError"""
        with pytest.raises(ServiceNotConfiguredError):
            asyncio.run(OpenAIGenerationService().generate(None, "hi", GenerationConfig(), []))

    def test_system_instruction_becomes_system_message(self):
        """Test the system instruction is sent as the system message"""
        client = make_chat_client("generated text")
        service = OpenAIGenerationService(client=client)
        text = asyncio.run(service.generate("system", "user", GenerationConfig(), [], model_id="m-1"))

        kwargs = client.chat.completions.create.kwargs
        assert text == "generated text"
        assert kwargs["model"] == "m-1"
        assert kwargs["messages"][0] == {"role": "system", "content": "system"}

    def test_content_filter_is_safety_withheld(self):
        """Test a content filter stop raises SafetyWithheldError"""
        async def create(**kwargs):
            choice = SimpleNamespace(message=SimpleNamespace(content=""), finish_reason="content_filter")
            return SimpleNamespace(choices=[choice])

        client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
        with pytest.raises(SafetyWithheldError):
            asyncio.run(OpenAIGenerationService(client=client).generate(None, "u", GenerationConfig(), []))


class TestModelCatalog:
    """Vendor listing with curated fallback."""

    def test_vendor_listing_filtered_and_sorted(self):
        """Test the vendor listing keeps sorted chat models only"""
        async def list_models():
            return SimpleNamespace(
                data=[
                    SimpleNamespace(id="gpt-4o", owned_by="openai"),
                    SimpleNamespace(id="text-embedding-3-small", owned_by="openai"),
                    SimpleNamespace(id="gpt-4o-mini", owned_by="openai"),
                    SimpleNamespace(id="gpt-4o-realtime-preview", owned_by="openai"),
                ]
            )

        client = SimpleNamespace(models=SimpleNamespace(list=list_models))
        catalog = asyncio.run(ModelCatalogService(client=client).list_models())

        assert catalog.fallback is False
        assert [m.name for m in catalog.models] == ["gpt-4o", "gpt-4o-mini"]

    def test_fallback_when_not_configured(self, settings):
        """Test the curated list is served without an API key"""
        catalog = asyncio.run(ModelCatalogService().list_models())
        assert catalog.fallback is True
        assert [m.name for m in catalog.models] == settings.fallback_models
        assert catalog.total == len(settings.fallback_models)

    def test_helpers(self):
        """Test chat model detection and display names"""
        assert is_chat_model("gpt-4.1-mini")
        assert not is_chat_model("whisper-1")
        assert display_name("gpt-4o-mini") == "GPT 4o Mini"
