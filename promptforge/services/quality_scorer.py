"""
Deterministic quality scoring for prompt parameter sets.

Every function here is pure: the same PromptSpec always yields the same
score, issues, suggestions and estimates. This is the only place the
scoring heuristics live; the analysis router and the suggestion aggregator
both import from here.
"""

import math
from typing import List, Optional

from promptforge.models.analysis_models import (
    AnalysisResponse,
    Impact,
    Issue,
    IssueCategory,
    IssueSeverity,
    QualityScore,
    ReadabilityLevel,
    Suggestion,
    SuggestionKind,
)
from promptforge.models.prompt_models import Complexity, Length, PromptMode, PromptSpec, Tone
from promptforge.utils.text_matching import contains_any, count_present, tokenize

# Length thresholds, in characters
KEYWORD_CRITICAL_LENGTH = 5
KEYWORD_MIN_LENGTH = 10
KEYWORD_OPTIMAL_LENGTH = 50
CONTEXT_MIN_LENGTH = 20
CONTEXT_OPTIMAL_LENGTH = 100

TOKEN_BASE = 50
TOKEN_MULTIPLIERS = {
    Complexity.SIMPLE: 1.2,
    Complexity.MODERATE: 1.5,
    Complexity.DETAILED: 2.0,
}

VAGUE_WORDS = [
    "coisa", "algo", "qualquer", "talvez", "tipo", "meio",
    "something", "maybe", "some kind of", "whatever", "stuff",
]
PRECISION_WORDS = [
    "específico", "detalhado", "preciso", "exato",
    "specific", "detailed", "precise", "exact",
]
DETAIL_WORDS = [
    "como", "quando", "onde", "por que", "qual", "quanto",
    "how", "when", "where", "why", "which", "how much",
]
TECHNICAL_TERMS = [
    "api", "framework", "algoritmo", "algorithm", "interface", "database", "banco de dados",
]

# (tone, mode) pairings rewarded by the structure axis
WELL_MATCHED_PAIRINGS = {
    (Tone.PROFESSIONAL, PromptMode.APP_CREATION): 15,
    (Tone.CREATIVE, PromptMode.IMAGE_GENERATION): 15,
    (Tone.TECHNICAL, PromptMode.APP_CREATION): 10,
    (Tone.TECHNICAL, PromptMode.CODING): 10,
}

MISMATCHED_PAIRINGS = {
    (Tone.CASUAL, PromptMode.APP_CREATION): (
        "Casual tone may not be ideal for app creation",
        'Consider a "professional" or "technical" tone',
    ),
}

SEVERITY_PRIORITY = {
    IssueSeverity.CRITICAL: Impact.HIGH,
    IssueSeverity.WARNING: Impact.MEDIUM,
    IssueSeverity.INFO: Impact.LOW,
}


def _clamp(value: float) -> int:
    return int(min(100, max(0, value)))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _coarse(complexity: Optional[Complexity]) -> Optional[Complexity]:
    return complexity.coarse if complexity else None


def _length(text: Optional[str]) -> int:
    return len(text) if text else 0


# =============================================================================
# SCORE AXES
# =============================================================================


def score_clarity(spec: PromptSpec) -> int:
    score = 50
    keywords_length = _length(spec.keywords)

    if keywords_length:
        if keywords_length >= KEYWORD_OPTIMAL_LENGTH:
            score += 20
        elif keywords_length >= KEYWORD_MIN_LENGTH:
            score += 10

        if contains_any(spec.keywords, VAGUE_WORDS):
            score -= 15
        if contains_any(spec.keywords, PRECISION_WORDS):
            score += 10

    if _length(spec.context) > CONTEXT_MIN_LENGTH:
        score += 15

    return _clamp(score)


def score_specificity(spec: PromptSpec) -> int:
    score = 40

    if spec.keywords:
        score += count_present(spec.keywords, DETAIL_WORDS) * 8
        if contains_any(spec.keywords, TECHNICAL_TERMS):
            score += 15

    if spec.is_image_mode and spec.image_style:
        score += 20
    if spec.is_image_mode and spec.negative_prompt:
        score += 10

    return _clamp(score)


def score_structure(spec: PromptSpec) -> int:
    score = 60
    complexity = _coarse(spec.complexity)

    score += WELL_MATCHED_PAIRINGS.get((spec.tone, spec.mode), 0)

    if complexity == Complexity.DETAILED and spec.length == Length.LONG:
        score += 10
    if complexity == Complexity.SIMPLE and spec.length == Length.SHORT:
        score += 10

    if spec.include_examples and spec.length != Length.SHORT:
        score += 10

    return _clamp(score)


def score_completeness(spec: PromptSpec) -> int:
    score = 30

    if spec.keywords:
        score += 25
    if spec.context:
        score += 20
    if spec.tone:
        score += 10
    if spec.complexity:
        score += 10
    if spec.mode:
        score += 15

    if spec.is_image_mode:
        if spec.image_style:
            score += 10
        if spec.negative_prompt:
            score += 5

    return _clamp(score)


def score_effectiveness(spec: PromptSpec) -> int:
    score = 50
    complexity = _coarse(spec.complexity)

    if spec.length == Length.LONG and complexity == Complexity.DETAILED:
        score += 20
    if spec.length == Length.SHORT and complexity == Complexity.SIMPLE:
        score += 15

    # Topical overlap between context and keywords
    if spec.context and spec.keywords:
        if tokenize(spec.context) & tokenize(spec.keywords):
            score += 15

    return _clamp(score)


def score(spec: PromptSpec) -> QualityScore:
    """Compute the five-axis quality score; overall is their rounded mean."""
    clarity = score_clarity(spec)
    specificity = score_specificity(spec)
    structure = score_structure(spec)
    completeness = score_completeness(spec)
    effectiveness = score_effectiveness(spec)

    overall = _round_half_up((clarity + specificity + structure + completeness + effectiveness) / 5)

    return QualityScore(
        overall=overall,
        clarity=clarity,
        specificity=specificity,
        structure=structure,
        completeness=completeness,
        effectiveness=effectiveness,
    )


# =============================================================================
# DIAGNOSTICS
# =============================================================================


def detect_issues(spec: PromptSpec) -> List[Issue]:
    """Detect issues, ordered critical, then warnings, then info."""
    critical: List[Issue] = []
    warnings: List[Issue] = []
    info: List[Issue] = []
    keywords_length = _length(spec.keywords)

    if keywords_length < KEYWORD_CRITICAL_LENGTH:
        critical.append(
            Issue(
                severity=IssueSeverity.CRITICAL,
                category=IssueCategory.COMPLETENESS,
                message="Keywords are too short or missing",
                suggestion=f"Add at least {KEYWORD_MIN_LENGTH} characters describing what you want",
                impact=Impact.HIGH,
                field="keywords",
            )
        )

    if 0 < keywords_length < KEYWORD_MIN_LENGTH:
        warnings.append(
            Issue(
                severity=IssueSeverity.WARNING,
                category=IssueCategory.SPECIFICITY,
                message="Keywords are not very specific",
                suggestion="Be more specific about what you want to get",
                impact=Impact.MEDIUM,
                field="keywords",
            )
        )

    if _length(spec.context) < CONTEXT_MIN_LENGTH:
        warnings.append(
            Issue(
                severity=IssueSeverity.WARNING,
                category=IssueCategory.CLARITY,
                message="Insufficient context",
                suggestion="Add more context about the intended use",
                impact=Impact.MEDIUM,
                field="context",
            )
        )

    if spec.length == Length.SHORT and _coarse(spec.complexity) == Complexity.DETAILED:
        warnings.append(
            Issue(
                severity=IssueSeverity.WARNING,
                category=IssueCategory.STRUCTURE,
                message="Short length conflicts with detailed complexity",
                suggestion='Increase the length to "medium" or reduce the complexity',
                impact=Impact.MEDIUM,
                field="length",
            )
        )

    mismatch = MISMATCHED_PAIRINGS.get((spec.tone, spec.mode))
    if mismatch:
        message, suggestion = mismatch
        info.append(
            Issue(
                severity=IssueSeverity.INFO,
                category=IssueCategory.TONE,
                message=message,
                suggestion=suggestion,
                impact=Impact.LOW,
                field="tone",
            )
        )

    return critical + warnings + info


def _priority_for(issues: List[Issue], field: str) -> Impact:
    # Highest severity issue on that field wins; not issue-driven means medium
    for issue in issues:
        if issue.field == field:
            return SEVERITY_PRIORITY[issue.severity]
    return Impact.MEDIUM


def generate_suggestions(spec: PromptSpec, issues: List[Issue]) -> List[Suggestion]:
    """One suggestion per improvable gap, prioritised by the issue it addresses."""
    suggestions: List[Suggestion] = []
    issue_fields = {issue.field for issue in issues}

    if spec.is_image_mode and not spec.negative_prompt:
        suggestions.append(
            Suggestion(
                kind=SuggestionKind.ENHANCEMENT,
                category="image_generation",
                title="Add a negative prompt",
                description="Specify elements you do NOT want in the image",
                example="blurry, low quality, distorted, ugly",
                priority=Impact.MEDIUM,
                field="negative_prompt",
            )
        )

    if spec.keywords and not spec.context:
        suggestions.append(
            Suggestion(
                kind=SuggestionKind.ENHANCEMENT,
                category="context",
                title="Add context",
                description="Give more information about the intended use",
                example="For a young audience, modern style, commercial use",
                priority=_priority_for(issues, "context"),
                field="context",
            )
        )

    if spec.include_examples and spec.length == Length.SHORT:
        suggestions.append(
            Suggestion(
                kind=SuggestionKind.OPTIMIZATION,
                category="structure",
                title="Optimize length",
                description="In short prompts, examples can take up too much space",
                priority=Impact.MEDIUM,
                field="include_examples",
            )
        )

    if "keywords" in issue_fields:
        suggestions.append(
            Suggestion(
                kind=SuggestionKind.ENHANCEMENT,
                category="keywords",
                title="Expand keywords",
                description="Describe the subject, the audience and the expected result in the keywords",
                example="task management app for remote teams with reminders",
                priority=_priority_for(issues, "keywords"),
                field="keywords",
            )
        )

    return suggestions


def identify_strengths(spec: PromptSpec) -> List[str]:
    strengths = []

    if _length(spec.keywords) >= KEYWORD_OPTIMAL_LENGTH:
        strengths.append("Well detailed keywords")
    if _length(spec.context) >= CONTEXT_OPTIMAL_LENGTH:
        strengths.append("Rich and informative context")
    if spec.is_image_mode and spec.image_style:
        strengths.append("Well defined visual style")
    if spec.include_examples:
        strengths.append("Includes examples for better guidance")

    return strengths


def suggest_improvements(spec: PromptSpec, issues: List[Issue]) -> List[str]:
    improvements = []

    if any(i.severity == IssueSeverity.CRITICAL for i in issues):
        improvements.append("Resolve critical issues first")
    if any(i.severity == IssueSeverity.WARNING for i in issues):
        improvements.append("Address warnings for better quality")
    if not spec.context:
        improvements.append("Add detailed context")
    if spec.is_image_mode and not spec.negative_prompt:
        improvements.append("Consider a negative prompt for images")

    return improvements


def estimate_tokens(spec: PromptSpec) -> int:
    """Estimate prompt tokens: the summed parts are multiplied, then rounded."""
    total = TOKEN_BASE
    total += math.ceil(_length(spec.keywords) / 4)
    total += math.ceil(_length(spec.context) / 4)
    if spec.negative_prompt:
        total += math.ceil(len(spec.negative_prompt) / 4)

    multiplier = TOKEN_MULTIPLIERS.get(_coarse(spec.complexity), 1.0)
    return _round_half_up(total * multiplier)


def classify_readability(spec: PromptSpec) -> ReadabilityLevel:
    signals = 0

    if _length(spec.keywords) > KEYWORD_OPTIMAL_LENGTH:
        signals += 1
    if _length(spec.context) > CONTEXT_OPTIMAL_LENGTH:
        signals += 1
    if _coarse(spec.complexity) == Complexity.DETAILED:
        signals += 1
    if spec.is_image_mode and spec.negative_prompt:
        signals += 1

    if signals >= 3:
        return ReadabilityLevel.ADVANCED
    if signals >= 1:
        return ReadabilityLevel.INTERMEDIATE
    return ReadabilityLevel.BEGINNER


def analyze(spec: PromptSpec) -> AnalysisResponse:
    """Run every diagnostic over an already normalized spec."""
    issues = detect_issues(spec)

    return AnalysisResponse(
        score=score(spec),
        issues=issues,
        suggestions=generate_suggestions(spec, issues),
        strengths=identify_strengths(spec),
        improvements=suggest_improvements(spec, issues),
        readability_level=classify_readability(spec),
        estimated_tokens=estimate_tokens(spec),
        normalized_keywords=spec.keywords,
    )
