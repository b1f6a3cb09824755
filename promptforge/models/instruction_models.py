"""Models for free-text instruction parsing and topic ideas."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from promptforge.models.prompt_models import Complexity, Language, PromptMode, Tone

MIN_INSTRUCTION_LENGTH = 5


class ParseInstructionRequest(BaseModel):
    """Model for a free-text instruction to turn into prompt parameters."""
    instruction: str = Field(..., description="What the user wants, in their own words")
    language: Language = Language.PORTUGUESE
    model_id: Optional[str] = None

    model_config = {
        "protected_namespaces": (),
        "json_schema_extra": {
            "example": {
                "instruction": "Crie uma imagem realista de um castelo ao amanhecer",
                "language": "portuguese",
            }
        },
    }

    @field_validator("instruction")
    @classmethod
    def validate_instruction(cls, v: str) -> str:
        """Ensure the instruction carries some content."""
        if len(v.strip()) < MIN_INSTRUCTION_LENGTH:
            raise ValueError(
                f"Instruction must have at least {MIN_INSTRUCTION_LENGTH} characters"
            )
        return v.strip()


class ParsedInstruction(BaseModel):
    """Prompt parameters extracted from an instruction; undetermined fields are absent."""
    keywords: Optional[str] = None
    mode: Optional[PromptMode] = None
    tone: Optional[Tone] = None
    complexity: Optional[Complexity] = None
    image_style: Optional[str] = None
    fallback: bool = False
    processing_time_ms: Optional[int] = None


class TopicSuggestionRequest(BaseModel):
    """Model for a topic ideas request."""
    mode: PromptMode
    language: Language = Language.PORTUGUESE
    keywords: Optional[str] = Field(None, description="Current idea to refine, if any")
    context: Optional[str] = None
    count: int = Field(3, ge=1, le=10)
    model_id: Optional[str] = None

    model_config = {"protected_namespaces": ()}

    @field_validator("keywords", "context")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()


class TopicSuggestionResponse(BaseModel):
    """Model for topic ideas."""
    topics: List[str]
    fallback: bool = False
