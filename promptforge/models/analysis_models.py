"""Models for prompt quality analysis responses."""

from typing import List, Optional
from enum import Enum
from pydantic import BaseModel, Field

from promptforge.models.prompt_models import PromptSpec


class IssueSeverity(str, Enum):
    """Enumeration for issue severities, in emission order."""
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class IssueCategory(str, Enum):
    """Enumeration for issue categories."""
    CLARITY = "clarity"
    SPECIFICITY = "specificity"
    STRUCTURE = "structure"
    COMPLETENESS = "completeness"
    TONE = "tone"
    LENGTH = "length"


class Impact(str, Enum):
    """Enumeration for impact and priority levels."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SuggestionKind(str, Enum):
    """Enumeration for local suggestion kinds."""
    ENHANCEMENT = "enhancement"
    OPTIMIZATION = "optimization"
    ALTERNATIVE = "alternative"


class ReadabilityLevel(str, Enum):
    """Enumeration for readability classification."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class QualityScore(BaseModel):
    """Five-axis quality score plus the rounded mean."""
    overall: int = Field(ge=0, le=100)
    clarity: int = Field(ge=0, le=100)
    specificity: int = Field(ge=0, le=100)
    structure: int = Field(ge=0, le=100)
    completeness: int = Field(ge=0, le=100)
    effectiveness: int = Field(ge=0, le=100)


class Issue(BaseModel):
    """Model for a detected issue in a parameter set."""
    severity: IssueSeverity
    category: IssueCategory
    message: str
    suggestion: str = Field(..., min_length=1)
    impact: Impact
    field: Optional[str] = None


class Suggestion(BaseModel):
    """Model for a locally generated improvement suggestion."""
    kind: SuggestionKind
    category: str
    title: str
    description: str
    example: Optional[str] = None
    priority: Impact = Impact.MEDIUM
    field: Optional[str] = None


class AnalysisResponse(BaseModel):
    """Model for the local analysis response."""
    score: QualityScore
    issues: List[Issue]
    suggestions: List[Suggestion]
    strengths: List[str]
    improvements: List[str]
    readability_level: ReadabilityLevel
    estimated_tokens: int = Field(ge=0)
    normalized_keywords: Optional[str] = None


class AIAnalysisRequest(BaseModel):
    """Model for an AI-assisted analysis request."""
    params: PromptSpec
    generated_prompt: Optional[str] = None


class AIAnalysisResponse(BaseModel):
    """Model for the AI-assisted analysis response."""
    score: int = Field(ge=0, le=100)
    clarity: int = Field(ge=0, le=100)
    specificity: int = Field(ge=0, le=100)
    effectiveness: int = Field(ge=0, le=100)
    strengths: List[str] = Field(default_factory=list, max_length=5)
    weaknesses: List[str] = Field(default_factory=list, max_length=5)
    suggestions: List[str] = Field(default_factory=list, max_length=5)
    improvements: List[str] = Field(default_factory=list, max_length=5)
    fallback: bool = False
    processing_time_ms: Optional[int] = None
