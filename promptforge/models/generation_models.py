"""Models for prompt generation attempts, configuration and responses."""

from typing import List, Optional
from enum import Enum

from pydantic import BaseModel, Field


class InstructionVariant(str, Enum):
    """How the instruction for an attempt is laid out."""
    STRUCTURED = "structured"
    CONSOLIDATED = "consolidated"


class HarmCategory(str, Enum):
    """Safety categories a Generation Service may filter."""
    HARASSMENT = "harassment"
    HATE_SPEECH = "hate_speech"
    SEXUALLY_EXPLICIT = "sexually_explicit"
    DANGEROUS_CONTENT = "dangerous_content"


class BlockThreshold(str, Enum):
    """Blocking threshold applied to a safety category."""
    BLOCK_LOW_AND_ABOVE = "block_low_and_above"
    BLOCK_MEDIUM_AND_ABOVE = "block_medium_and_above"
    BLOCK_ONLY_HIGH = "block_only_high"


class SafetyThreshold(BaseModel):
    """A single category/threshold pair."""
    category: HarmCategory
    threshold: BlockThreshold = BlockThreshold.BLOCK_MEDIUM_AND_ABOVE


def default_safety_thresholds() -> List[SafetyThreshold]:
    """Medium-and-above blocking on every category."""
    return [SafetyThreshold(category=category) for category in HarmCategory]


class GenerationConfig(BaseModel):
    """Sampling configuration sent with every Generation Service call."""
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    top_k: int = Field(default=1, ge=1)
    top_p: float = Field(default=1.0, ge=0.0, le=1.0)
    max_output_tokens: int = Field(default=2048, ge=1)


class GenerationAttempt(BaseModel):
    """One call to the Generation Service and whether its output was usable."""
    ordinal: int = Field(ge=1, le=2)
    instruction_variant: InstructionVariant
    output_text: str = ""
    accepted: bool = False
    rejection_reason: Optional[str] = None


class GenerationOutcome(BaseModel):
    """Result of one run of the Generation Orchestrator."""
    text: str = Field(..., min_length=1)
    used_fallback: bool
    attempts: List[GenerationAttempt] = Field(default_factory=list, max_length=2)
    diagnostics: Optional[str] = None


class GenerationResponse(BaseModel):
    """Model for the generation and refinement endpoints."""
    id: str
    text: str = Field(..., min_length=1)
    used_fallback: bool
    diagnostics: Optional[str] = None
    attempts: int = Field(ge=0, le=2)
    model_id: Optional[str] = None
    processing_time_ms: Optional[int] = None

    model_config = {"protected_namespaces": ()}
