"""
Network-free prompt synthesis used when every generation attempt is rejected.

The templated clauses are a pure function of the spec. Example selection is
delegated to an injectable selector so the whole output stays reproducible:
the default selector seeds ``random.Random`` with ``spec.example_seed`` or,
when absent, with a stable hash of the normalized keywords.
"""

import hashlib
import random
from typing import Callable, Optional, Sequence

from promptforge.models.prompt_models import Language, PromptSpec
from promptforge.utils.prompt_registry import (
    COMPLEXITY_INSTRUCTIONS,
    DEFAULT_COMPLEXITY,
    DEFAULT_TONE,
    TONE_DESCRIPTIONS,
    lookup,
)

ExampleSelector = Callable[[Sequence[str], int], Optional[str]]


def stable_seed(text: str) -> int:
    """Process-independent seed derived from text (unlike the builtin hash)."""
    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()
    return int(digest[:8], 16)


def select_example(bank: Sequence[str], seed: int) -> Optional[str]:
    """Pick one example from the bank with a seeded random source."""
    if not bank:
        return None
    return random.Random(seed).choice(list(bank))


class FallbackSynthesizer:
    """Builds the final prompt text purely from the spec."""

    def __init__(self, selector: ExampleSelector = select_example):
        self.selector = selector

    def templated_text(self, spec: PromptSpec) -> str:
        """Every clause except the example; depends on the parameters only."""
        language = spec.language
        english = language == Language.ENGLISH
        entry = lookup(spec.mode, spec.image_style, language)

        tone = TONE_DESCRIPTIONS[spec.tone][language] if spec.tone else DEFAULT_TONE[language]
        complexity = (
            COMPLEXITY_INSTRUCTIONS[spec.complexity][language]
            if spec.complexity
            else DEFAULT_COMPLEXITY[language]
        )

        if english:
            text = (
                f'Create a clear and effective prompt about "{spec.keywords}" with a {tone} tone'
                f" and {complexity} instructions."
            )
        else:
            text = (
                f'Crie um prompt claro e eficaz sobre "{spec.keywords}" com um tom {tone}'
                f" e instruções {complexity}."
            )

        text += entry.template_text

        if spec.context:
            text += f" Context: {spec.context}." if english else f" Contexto: {spec.context}."

        if spec.is_image_mode and spec.negative_prompt:
            text += (
                f" Elements to avoid (negative prompt): {spec.negative_prompt}."
                if english
                else f" Elementos a evitar (prompt negativo): {spec.negative_prompt}."
            )

        if spec.include_examples:
            text += (
                " Include a few examples to illustrate the kind of answer expected."
                if english
                else " Inclua alguns exemplos para ilustrar o tipo de resposta esperada."
            )

        return text

    def synthesize(self, spec: PromptSpec) -> str:
        """Templated text plus one example from the (mode, style) bank."""
        language = spec.language
        text = self.templated_text(spec)
        entry = lookup(spec.mode, spec.image_style, language)

        seed = spec.example_seed if spec.example_seed is not None else stable_seed(spec.keywords)
        example = self.selector(entry.example_bank, seed)
        if example:
            if entry.style_examples:
                label = f"Example prompt for {spec.image_style}" if language == Language.ENGLISH else (
                    f"Exemplo de prompt para {spec.image_style}"
                )
            else:
                label = "Example prompt for this case" if language == Language.ENGLISH else (
                    "Exemplo de prompt para este caso"
                )
            text += f'\n\n{label}:\n"{example}"'

        return text
