"""Models describing the parameter set a prompt is generated from."""

from typing import Optional
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class Tone(str, Enum):
    """Enumeration of writing tones."""
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    CREATIVE = "creative"
    TECHNICAL = "technical"
    NEUTRAL = "neutral"
    FORMAL = "formal"
    FRIENDLY = "friendly"
    ENTHUSIASTIC = "enthusiastic"
    AUTHORITATIVE = "authoritative"


class Complexity(str, Enum):
    """Enumeration of complexity levels, coarse and fine grained."""
    SIMPLE = "simple"
    MODERATE = "moderate"
    DETAILED = "detailed"
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def coarse(self) -> "Complexity":
        """Map the finer variants onto simple/moderate/detailed."""
        return _COARSE_COMPLEXITY.get(self, self)


_COARSE_COMPLEXITY = {
    Complexity.BEGINNER: Complexity.SIMPLE,
    Complexity.INTERMEDIATE: Complexity.MODERATE,
    Complexity.ADVANCED: Complexity.DETAILED,
}


class Length(str, Enum):
    """Enumeration of desired output lengths."""
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class PromptMode(str, Enum):
    """Enumeration of use cases a prompt can be generated for."""
    APP_CREATION = "app_creation"
    IMAGE_GENERATION = "image_generation"
    CONTENT_CREATION = "content_creation"
    PROBLEM_SOLVING = "problem_solving"
    CODING = "coding"
    INSTRUCT = "instruct"
    EXPLAIN = "explain"


class Language(str, Enum):
    """Language of the generated prompt."""
    PORTUGUESE = "portuguese"
    ENGLISH = "english"


class PromptSpec(BaseModel):
    """Structured parameter set describing the desired prompt."""
    keywords: str = ""
    context: Optional[str] = None
    tone: Optional[Tone] = None
    complexity: Optional[Complexity] = None
    length: Length = Length.MEDIUM
    mode: Optional[PromptMode] = None
    include_examples: bool = True
    image_style: Optional[str] = None
    negative_prompt: Optional[str] = None
    language: Language = Language.PORTUGUESE
    model_id: Optional[str] = None
    example_seed: Optional[int] = Field(
        default=None, description="Seed for fallback example selection"
    )

    model_config = {"frozen": True, "protected_namespaces": ()}

    @field_validator("context", "image_style", "negative_prompt")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat whitespace-only optional text as absent."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def is_image_mode(self) -> bool:
        return self.mode == PromptMode.IMAGE_GENERATION


class RefinementRequest(PromptSpec):
    """Parameter set plus the prompt to refine and the requested change."""
    previous_prompt_text: str = Field(..., min_length=1)
    modification_request: str = Field(..., min_length=1)

    @field_validator("previous_prompt_text", "modification_request")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure refinement text is not just whitespace."""
        if not v.strip():
            raise ValueError("Refinement text cannot be empty or whitespace only")
        return v.strip()
