"""Tests for the generation state machine."""

import asyncio

import pytest

from conftest import FakeGenerationService
from promptforge.models.generation_models import InstructionVariant
from promptforge.models.prompt_models import (
    Language,
    Length,
    PromptMode,
    PromptSpec,
    RefinementRequest,
)
from promptforge.services.errors import (
    PromptValidationError,
    SafetyWithheldError,
    ServiceError,
    ServiceNotConfiguredError,
)
from promptforge.services.generation_orchestrator import GenerationOrchestrator, limit_lines


def run(orchestrator, spec):
    return asyncio.run(orchestrator.run(spec))


class TestGenerationOrchestrator:
    """Primary, retry and fallback transitions."""

    def test_primary_accepted(self, long_text):
        """Test an acceptable first output is returned"""
        service = FakeGenerationService([long_text])
        outcome = run(GenerationOrchestrator(service), PromptSpec(keywords="app de tarefas"))

        assert outcome.text == long_text
        assert outcome.used_fallback is False
        assert outcome.diagnostics is None
        assert len(service.calls) == 1
        assert service.calls[0]["system_instruction"]

    def test_empty_outputs_fall_back(self):
        """Test two empty outputs lead to the fallback"""
        service = FakeGenerationService(["", ""])
        spec = PromptSpec(keywords="Crie um app de tarefas", mode=PromptMode.APP_CREATION)
        outcome = run(GenerationOrchestrator(service), spec)

        assert outcome.used_fallback is True
        assert outcome.text.strip()
        assert "aplicativo" in outcome.text
        assert len(service.calls) == 2
        assert '"app tarefas"' in outcome.text
        assert "empty output" in outcome.diagnostics

    def test_retry_uses_consolidated_instruction(self, long_text):
        """Test the retry sends the consolidated instruction only"""
        service = FakeGenerationService([ServiceError("boom"), long_text])
        outcome = run(GenerationOrchestrator(service), PromptSpec(keywords="app de tarefas"))

        assert outcome.used_fallback is False
        assert [a.instruction_variant for a in outcome.attempts] == [
            InstructionVariant.STRUCTURED,
            InstructionVariant.CONSOLIDATED,
        ]
        assert service.calls[1]["system_instruction"] is None
        assert "TAREFA OBRIGATÓRIA" in service.calls[1]["user_instruction"]
        assert "attempt 1 (structured) rejected: boom" == outcome.diagnostics

    @pytest.mark.parametrize(
        "failure",
        [ServiceError("down"), SafetyWithheldError("blocked"), ServiceNotConfiguredError("no key"), RuntimeError("bug")],
    )
    def test_at_most_two_calls(self, failure):
        """Test the service is called at most twice"""
        service = FakeGenerationService([failure, failure, failure])
        outcome = run(GenerationOrchestrator(service), PromptSpec(keywords="app de tarefas"))

        assert outcome.used_fallback is True
        assert len(service.calls) == 2
        assert len(outcome.attempts) == 2

    def test_too_short_output_rejected(self, long_text):
        """Test output below the minimum length is rejected"""
        service = FakeGenerationService(["ok", long_text])
        outcome = run(GenerationOrchestrator(service), PromptSpec(keywords="app de tarefas"))

        assert outcome.attempts[0].accepted is False
        assert "too short" in outcome.attempts[0].rejection_reason
        assert outcome.text == long_text

    def test_timeout_counts_as_rejection(self, settings):
        """Test a timed out attempt is rejected"""
        fast = settings.model_copy(
            update={"generation_timeout_seconds": 0.01, "retry_timeout_increment_seconds": 0.01}
        )
        service = FakeGenerationService(["x" * 100, "x" * 100], delay=0.5)
        outcome = run(GenerationOrchestrator(service, settings=fast), PromptSpec(keywords="app de tarefas"))

        assert outcome.used_fallback is True
        assert all("timed out" in a.rejection_reason for a in outcome.attempts)

    def test_empty_keywords_make_no_call(self):
        """Test empty keywords fail before any service call"""
        service = FakeGenerationService(["x" * 100])
        with pytest.raises(PromptValidationError):
            run(GenerationOrchestrator(service), PromptSpec(keywords=""))
        assert service.calls == []

    def test_short_length_truncates_to_six_lines(self):
        """Test short output is cut to six lines"""
        text = "\n".join(f"linha {i} com texto suficiente" for i in range(10))
        service = FakeGenerationService([text])
        outcome = run(GenerationOrchestrator(service), PromptSpec(keywords="app de tarefas", length=Length.SHORT))

        assert len(outcome.text.split("\n")) == 6
        assert "LINHAS" in service.calls[0]["system_instruction"]

    def test_model_id_passed_through(self, long_text):
        """Test the model id reaches the service unchanged"""
        service = FakeGenerationService([long_text])
        run(GenerationOrchestrator(service), PromptSpec(keywords="app de tarefas", model_id="any/opaque-id"))
        assert service.calls[0]["model_id"] == "any/opaque-id"

    def test_image_style_is_an_absolute_requirement(self, long_text):
        """Test the image style is stated as an absolute requirement"""
        service = FakeGenerationService([long_text])
        spec = PromptSpec(
            keywords="castle at dawn",
            mode=PromptMode.IMAGE_GENERATION,
            image_style="watercolor",
            negative_prompt="text, watermark",
            language=Language.ENGLISH,
        )
        run(GenerationOrchestrator(service), spec)

        assert "ABSOLUTE REQUIREMENT" in service.calls[0]["system_instruction"]
        assert "NEGATIVE PROMPT (Elements to AVOID): text, watermark" in service.calls[0]["user_instruction"]


class TestRefinement:
    """Refinement folds the previous prompt into the instructions."""

    def test_refinement_instruction(self, long_text):
        """Test refinement instructions carry previous prompt and change"""
        service = FakeGenerationService([long_text])
        request = RefinementRequest(
            keywords="app de tarefas",
            previous_prompt_text="Crie um app simples de tarefas.",
            modification_request="adicione lembretes",
        )
        outcome = run(GenerationOrchestrator(service), request)

        user_instruction = service.calls[0]["user_instruction"]
        assert "Crie um app simples de tarefas." in user_instruction
        assert "adicione lembretes" in user_instruction
        assert outcome.used_fallback is False

    def test_refinement_falls_back_like_generation(self):
        """Test refinement falls back like generation"""
        service = FakeGenerationService(["", ""])
        request = RefinementRequest(
            keywords="app de tarefas",
            mode=PromptMode.APP_CREATION,
            previous_prompt_text="Crie um app simples de tarefas.",
            modification_request="adicione lembretes",
        )
        outcome = run(GenerationOrchestrator(service), request)

        assert outcome.used_fallback is True
        assert len(service.calls) == 2
        assert "adicione lembretes" in service.calls[1]["user_instruction"]


def test_limit_lines():
    """Test limit_lines keeps the first lines only"""
    assert limit_lines("a\nb", 6) == "a\nb"
    assert limit_lines("\n".join("abcdefgh"), 6) == "a\nb\nc\nd\ne\nf"
