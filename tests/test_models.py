import pytest
from pydantic import ValidationError

from promptforge.models.analysis_models import AIAnalysisResponse, Issue, QualityScore
from promptforge.models.generation_models import GenerationAttempt, GenerationResponse, InstructionVariant
from promptforge.models.prompt_models import (
    Complexity,
    Language,
    Length,
    PromptMode,
    PromptSpec,
    RefinementRequest,
)
from promptforge.models.suggestion_models import SmartSuggestion, SuggestionRequest


def test_prompt_spec_defaults():
    """Test PromptSpec defaults"""
    spec = PromptSpec(keywords="app tarefas")

    assert spec.length == Length.MEDIUM
    assert spec.include_examples is True
    assert spec.language == Language.PORTUGUESE
    assert spec.tone is None
    assert spec.mode is None
    assert spec.is_image_mode is False


def test_prompt_spec_blank_optionals_are_absent():
    """Test whitespace-only optional text is treated as missing"""
    spec = PromptSpec(keywords="x", context="   ", negative_prompt="", image_style=" anime ")

    assert spec.context is None
    assert spec.negative_prompt is None
    assert spec.image_style == "anime"


def test_prompt_spec_is_immutable():
    """Test PromptSpec is frozen"""
    spec = PromptSpec(keywords="app tarefas")
    with pytest.raises(ValidationError):
        spec.keywords = "other"


def test_prompt_spec_invalid_enum():
    """Test invalid enumerated values are rejected"""
    with pytest.raises(ValidationError):
        PromptSpec(keywords="x", mode="website_creation")


def test_complexity_coarse_mapping():
    """Test finer complexity variants map onto the coarse scale"""
    assert Complexity.BEGINNER.coarse == Complexity.SIMPLE
    assert Complexity.INTERMEDIATE.coarse == Complexity.MODERATE
    assert Complexity.ADVANCED.coarse == Complexity.DETAILED
    assert Complexity.DETAILED.coarse == Complexity.DETAILED


def test_refinement_request_requires_text():
    """Test RefinementRequest validation"""
    request = RefinementRequest(
        keywords="app", mode=PromptMode.APP_CREATION, previous_prompt_text=" old ", modification_request="new"
    )
    assert request.previous_prompt_text == "old"

    with pytest.raises(ValidationError):
        RefinementRequest(keywords="app", previous_prompt_text="old", modification_request="   ")


def test_quality_score_bounds():
    """Test QualityScore rejects out-of-range values"""
    with pytest.raises(ValidationError):
        QualityScore(overall=101, clarity=50, specificity=50, structure=50, completeness=50, effectiveness=50)


def test_issue_requires_suggestion():
    """Test Issue suggestion is never empty"""
    with pytest.raises(ValidationError):
        Issue(severity="warning", category="clarity", message="m", suggestion="", impact="medium")


def test_generation_models():
    """Test generation attempt and response bounds"""
    attempt = GenerationAttempt(ordinal=2, instruction_variant=InstructionVariant.CONSOLIDATED)
    assert attempt.accepted is False

    with pytest.raises(ValidationError):
        GenerationAttempt(ordinal=3, instruction_variant=InstructionVariant.STRUCTURED)

    with pytest.raises(ValidationError):
        GenerationResponse(id="p", text="", used_fallback=True, attempts=2)


def test_ai_analysis_lists_capped():
    """Test AIAnalysisResponse list sizes"""
    with pytest.raises(ValidationError):
        AIAnalysisResponse(score=50, clarity=50, specificity=50, effectiveness=50, strengths=["s"] * 6)


def test_smart_suggestion_validation():
    """Test SmartSuggestion confidence and type"""
    suggestion = SmartSuggestion(
        id="s-1", type="context", title="t", description="d", value="v", field="context", confidence=80
    )
    assert suggestion.source == "local"

    with pytest.raises(ValidationError):
        SmartSuggestion(id="s", title="t", description="d", value="v", field="f", confidence=101)

    with pytest.raises(ValidationError):
        SmartSuggestion(id="s", type="magic", title="t", description="d", value="v", field="f", confidence=5)


def test_suggestion_request_bounds():
    """Test max_suggestions bounds"""
    with pytest.raises(ValidationError):
        SuggestionRequest(params=PromptSpec(keywords="x"), max_suggestions=20)
