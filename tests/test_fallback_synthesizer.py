"""Tests for the network-free fallback synthesis and the template registry."""

import pytest

from promptforge.models.prompt_models import Language, PromptMode, PromptSpec, Tone
from promptforge.services.fallback_synthesizer import (
    FallbackSynthesizer,
    select_example,
    stable_seed,
)
from promptforge.utils.prompt_registry import MODE_TEMPLATES, STYLE_TEMPLATES, lookup


class TestRegistry:
    """(mode, style) lookup."""

    def test_every_mode_has_both_languages(self):
        """Test every mode has Portuguese and English templates"""
        for template in MODE_TEMPLATES.values():
            for language in Language:
                assert template.fallback_clause[language]
                assert template.required_phrase[language] in template.fallback_clause[language]

    def test_style_examples_take_precedence(self):
        """Test style examples replace the mode examples"""
        entry = lookup(PromptMode.IMAGE_GENERATION, "realistic", Language.PORTUGUESE)
        assert entry.example_bank == STYLE_TEMPLATES["realistic"].examples[Language.PORTUGUESE]
        assert entry.style_examples

    def test_style_without_examples_uses_mode_bank(self):
        """Test a style without examples keeps the mode bank"""
        entry = lookup(PromptMode.IMAGE_GENERATION, "anime", Language.ENGLISH)
        assert entry.example_bank == MODE_TEMPLATES[PromptMode.IMAGE_GENERATION].examples[Language.ENGLISH]
        assert "ANIME" in entry.template_text

    def test_unknown_style_gets_generic_clause(self):
        """Test an unknown style gets the generic clause"""
        entry = lookup(PromptMode.IMAGE_GENERATION, "vaporwave", Language.PORTUGUESE)
        assert "estilo visual coerente" in entry.template_text
        assert entry.style_definition is None

    def test_style_ignored_outside_image_mode(self):
        """Test styles only apply in image mode"""
        entry = lookup(PromptMode.CODING, "realistic", Language.ENGLISH)
        assert entry.style_definition is None

    def test_general_entry_when_mode_missing(self):
        """Test the general entry is used without a mode"""
        entry = lookup(None, None, Language.PORTUGUESE)
        assert entry.required_phrase == "prompt"
        assert entry.example_bank == ()


class TestSelector:
    """Injectable example selection."""

    def test_same_seed_same_example(self):
        """Test the same seed picks the same example"""
        bank = ("a", "b", "c", "d")
        assert select_example(bank, 42) == select_example(bank, 42)

    def test_empty_bank(self):
        """Test an empty bank selects nothing"""
        assert select_example((), 1) is None

    def test_stable_seed_is_deterministic(self):
        """Test stable_seed depends only on its input"""
        assert stable_seed("app tarefas") == stable_seed("app tarefas")
        assert stable_seed("app tarefas") != stable_seed("app tarefa")


class TestFallbackSynthesizer:
    """Synthesis is a pure function of the parameters."""

    @pytest.mark.parametrize("mode", list(PromptMode))
    @pytest.mark.parametrize("language", list(Language))
    def test_always_non_empty_with_required_phrase(self, mode, language):
        """Test fallback text always carries the mode phrase"""
        spec = PromptSpec(keywords="tema qualquer", mode=mode, language=language)
        text = FallbackSynthesizer().synthesize(spec)
        assert text.strip()
        assert lookup(mode, None, language).required_phrase in text

    def test_app_creation_mentions_aplicativo(self):
        """Test app creation fallback mentions aplicativo"""
        spec = PromptSpec(keywords="app tarefas", mode=PromptMode.APP_CREATION)
        assert "aplicativo" in FallbackSynthesizer().synthesize(spec)

    def test_identical_spec_identical_text(self):
        """Test identical parameters give identical text"""
        spec = PromptSpec(keywords="cidade futurista", mode=PromptMode.IMAGE_GENERATION, image_style="realistic")
        assert FallbackSynthesizer().synthesize(spec) == FallbackSynthesizer().synthesize(spec)

    def test_templated_clauses_independent_of_selector(self):
        """Test templated clauses do not depend on the selector"""
        spec = PromptSpec(keywords="app tarefas", mode=PromptMode.APP_CREATION, tone=Tone.FRIENDLY)
        first = FallbackSynthesizer(selector=lambda bank, seed: bank[0] if bank else None)
        last = FallbackSynthesizer(selector=lambda bank, seed: bank[-1] if bank else None)
        assert first.templated_text(spec) == last.templated_text(spec)
        assert first.synthesize(spec) != last.synthesize(spec)

    def test_explicit_seed_is_passed_to_selector(self):
        """Test an explicit seed reaches the selector"""
        seen = []

        def selector(bank, seed):
            seen.append(seed)
            return None

        spec = PromptSpec(keywords="app tarefas", mode=PromptMode.APP_CREATION, example_seed=7)
        FallbackSynthesizer(selector=selector).synthesize(spec)
        assert seen == [7]

    def test_style_example_label(self):
        """Test the example label names the style"""
        spec = PromptSpec(keywords="tigre", mode=PromptMode.IMAGE_GENERATION, image_style="analog")
        text = FallbackSynthesizer().synthesize(spec)
        assert "Exemplo de prompt para analog" in text
        assert "ANALÓGICO/FILME" in text

    def test_negative_prompt_listed_as_elements_to_avoid(self):
        """Test the negative prompt is listed as elements to avoid"""
        spec = PromptSpec(
            keywords="castle",
            mode=PromptMode.IMAGE_GENERATION,
            negative_prompt="watermark",
            language=Language.ENGLISH,
        )
        assert "Elements to avoid (negative prompt): watermark." in FallbackSynthesizer().synthesize(spec)

    def test_tone_and_complexity_defaults(self):
        """Test default tone and complexity wording"""
        spec = PromptSpec(keywords="app tarefas", include_examples=False)
        text = FallbackSynthesizer().templated_text(spec)
        assert text.startswith('Crie um prompt claro e eficaz sobre "app tarefas" com um tom profissional')
        assert "instruções moderadas" in text
