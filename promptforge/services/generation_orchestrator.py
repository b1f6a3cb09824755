"""
Resilient prompt generation.

NORMALIZE -> PRIMARY_ATTEMPT -> {ACCEPT | RETRY_ATTEMPT} -> {ACCEPT | FALLBACK} -> DONE

The Generation Service is called at most twice, sequentially. Errors,
safety withholding and timeouts all count as a rejected attempt; only an
empty keyword set fails the run, and it does so before any call is made.
"""

import asyncio
import logging
from typing import List, Optional, Tuple

from promptforge.models.generation_models import (
    GenerationAttempt,
    GenerationConfig,
    GenerationOutcome,
    InstructionVariant,
    default_safety_thresholds,
)
from promptforge.models.prompt_models import Length, PromptSpec
from promptforge.services.errors import SafetyWithheldError, ServiceError
from promptforge.services.fallback_synthesizer import FallbackSynthesizer
from promptforge.services.generation_service import GenerationService
from promptforge.services.normalizer import prepare_spec
from promptforge.utils.config import Settings, get_settings
from promptforge.utils.prompts import (
    SHORT_MAX_LINES,
    get_consolidated_instruction,
    get_system_instruction,
    get_user_instruction,
)

logger = logging.getLogger(__name__)


def limit_lines(text: str, max_lines: int = SHORT_MAX_LINES) -> str:
    lines = text.split("\n")
    if len(lines) <= max_lines:
        return text
    return "\n".join(lines[:max_lines])


class GenerationOrchestrator:
    """Drives the Generation Service through retry and local fallback."""

    def __init__(
        self,
        generation_service: GenerationService,
        synthesizer: Optional[FallbackSynthesizer] = None,
        settings: Optional[Settings] = None,
        config: Optional[GenerationConfig] = None,
    ):
        self.generation_service = generation_service
        self.synthesizer = synthesizer or FallbackSynthesizer()
        self.settings = settings or get_settings()
        self.config = config or GenerationConfig(
            temperature=self.settings.openai_temperature,
            top_k=self.settings.openai_top_k,
            top_p=self.settings.openai_top_p,
            max_output_tokens=self.settings.openai_max_tokens,
        )

    async def run(self, spec: PromptSpec) -> GenerationOutcome:
        """Produce the final prompt text for a spec (or a refinement request).

        Raises:
            PromptValidationError: keywords are missing or empty after normalization
        """
        spec = prepare_spec(spec)
        attempts: List[GenerationAttempt] = []
        primary_timeout = self.settings.generation_timeout_seconds
        retry_timeout = primary_timeout + self.settings.retry_timeout_increment_seconds

        # PRIMARY_ATTEMPT
        attempt = await self._attempt(
            ordinal=1,
            variant=InstructionVariant.STRUCTURED,
            system_instruction=get_system_instruction(spec),
            user_instruction=get_user_instruction(spec),
            timeout=primary_timeout,
            spec=spec,
        )
        attempts.append(attempt)
        if attempt.accepted:
            return self._accept(spec, attempt, attempts)

        logger.warning("Primary attempt rejected (%s), retrying", attempt.rejection_reason)

        # RETRY_ATTEMPT
        attempt = await self._attempt(
            ordinal=2,
            variant=InstructionVariant.CONSOLIDATED,
            system_instruction=None,
            user_instruction=get_consolidated_instruction(spec),
            timeout=retry_timeout,
            spec=spec,
        )
        attempts.append(attempt)
        if attempt.accepted:
            return self._accept(spec, attempt, attempts)

        # FALLBACK
        logger.warning("Retry attempt rejected (%s), using local fallback", attempt.rejection_reason)
        text = self.synthesizer.synthesize(spec)
        if spec.length == Length.SHORT:
            text = limit_lines(text)

        return GenerationOutcome(
            text=text,
            used_fallback=True,
            attempts=attempts,
            diagnostics=self._diagnostics(attempts),
        )

    async def _attempt(
        self,
        ordinal: int,
        variant: InstructionVariant,
        system_instruction: Optional[str],
        user_instruction: str,
        timeout: float,
        spec: PromptSpec,
    ) -> GenerationAttempt:
        logger.info("Generation attempt %d (%s), timeout %.1fs", ordinal, variant.value, timeout)
        try:
            output = await asyncio.wait_for(
                self.generation_service.generate(
                    system_instruction,
                    user_instruction,
                    self.config,
                    default_safety_thresholds(),
                    model_id=spec.model_id,
                ),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            return self._rejected(ordinal, variant, f"timed out after {timeout:g}s")
        except SafetyWithheldError as e:
            return self._rejected(ordinal, variant, f"withheld for safety: {e}")
        except ServiceError as e:
            return self._rejected(ordinal, variant, str(e))
        except Exception as e:
            logger.exception("Unexpected Generation Service failure")
            return self._rejected(ordinal, variant, f"unexpected error: {e}")

        accepted, reason = self.check_acceptance(output)
        return GenerationAttempt(
            ordinal=ordinal,
            instruction_variant=variant,
            output_text=output or "",
            accepted=accepted,
            rejection_reason=reason,
        )

    def check_acceptance(self, output: Optional[str]) -> Tuple[bool, Optional[str]]:
        """Accept non-empty output of at least the minimum viable length."""
        text = (output or "").strip()
        if not text:
            return False, "empty output"
        if len(text) < self.settings.min_acceptable_length:
            return False, (
                f"output too short ({len(text)} < {self.settings.min_acceptable_length} chars)"
            )
        return True, None

    @staticmethod
    def _rejected(ordinal: int, variant: InstructionVariant, reason: str) -> GenerationAttempt:
        return GenerationAttempt(
            ordinal=ordinal,
            instruction_variant=variant,
            accepted=False,
            rejection_reason=reason,
        )

    def _accept(
        self, spec: PromptSpec, attempt: GenerationAttempt, attempts: List[GenerationAttempt]
    ) -> GenerationOutcome:
        text = attempt.output_text.strip()
        if spec.length == Length.SHORT:
            text = limit_lines(text)
        logger.info("Generation attempt %d accepted", attempt.ordinal)

        return GenerationOutcome(
            text=text,
            used_fallback=False,
            attempts=attempts,
            diagnostics=self._diagnostics(attempts),
        )

    @staticmethod
    def _diagnostics(attempts: List[GenerationAttempt]) -> Optional[str]:
        rejected = [
            f"attempt {a.ordinal} ({a.instruction_variant.value}) rejected: {a.rejection_reason}"
            for a in attempts
            if not a.accepted
        ]
        return "; ".join(rejected) or None
