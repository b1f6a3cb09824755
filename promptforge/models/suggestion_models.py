"""
Data models for the suggestion aggregation endpoint.

Local suggestions from the quality scorer and advisory suggestions from the
external service are merged into one list of SmartSuggestion items.
"""

from typing import List, Optional, Literal
from pydantic import BaseModel, Field, field_validator

from promptforge.models.prompt_models import PromptSpec


SuggestionType = Literal["keyword", "context", "tone", "structure", "enhancement"]


class SuggestionRequest(BaseModel):
    """Request model for aggregated suggestions."""

    params: PromptSpec
    max_suggestions: Optional[int] = Field(
        default=None, ge=1, le=8, description="Maximum number of suggestions to return"
    )


class SmartSuggestion(BaseModel):
    """
    A single actionable suggestion.

    `field` names the PromptSpec field the suggestion targets and `value` is
    what the client can apply to it.
    """

    id: str = Field(..., description="Unique identifier for this suggestion")
    type: SuggestionType = Field(default="enhancement")
    title: str = Field(..., min_length=1, max_length=120)
    description: str = Field(..., min_length=1, max_length=500)
    value: str = Field(..., min_length=1)
    field: str = Field(..., min_length=1)
    confidence: int = Field(
        ..., ge=0, le=100, description="Confidence score (0-100) used for ordering"
    )
    reasoning: str = Field(default="")
    example: Optional[str] = None
    source: Literal["local", "advisory"] = "local"

    @field_validator("confidence")
    @classmethod
    def validate_confidence(cls, v: int) -> int:
        """Ensure confidence is in valid range."""
        if v < 0 or v > 100:
            raise ValueError("Confidence must be between 0 and 100")
        return v


class SuggestionResponse(BaseModel):
    """Response model for aggregated suggestions."""

    suggestions: List[SmartSuggestion] = Field(
        default_factory=list,
        description="Suggestions ordered by descending confidence",
    )
    local_count: int = Field(ge=0)
    advisory_count: int = Field(ge=0)
    advisory_used: bool = False
    processing_time_ms: Optional[int] = Field(default=None, ge=0)
