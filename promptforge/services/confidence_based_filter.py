"""
Confidence-based filtering strategy for advisory suggestions.

Single responsibility: Keep only usable, distinct suggestions and order
them by confidence.
"""

from typing import List, Dict, Any

from promptforge.services.suggestion_interfaces import ISuggestionFilter

REQUIRED_FIELDS = ("title", "description", "value", "field")
DEFAULT_CONFIDENCE = 70


def coerce_confidence(value: Any) -> int:
    """Confidence as an int in [0, 100]; missing or invalid means the default."""
    if not value:
        return DEFAULT_CONFIDENCE
    try:
        confidence = int(float(value))
    except (TypeError, ValueError):
        confidence = DEFAULT_CONFIDENCE
    return max(0, min(100, confidence))


class ConfidenceBasedFilter(ISuggestionFilter):
    """
    Filters advisory suggestions.

    Responsibilities:
    - Discard suggestions missing title, description, value or field
    - Apply confidence threshold filtering
    - Remove duplicate suggestions
    """

    def filter(
        self, suggestions: List[Dict[str, Any]], threshold: int = 0
    ) -> List[Dict[str, Any]]:
        """
        Filter suggestions returned by the advisory service.

        Args:
            suggestions: Raw suggestion dicts
            threshold: Minimum confidence (0-100)

        Returns:
            Usable suggestions, highest confidence first
        """
        complete = [
            {**s, "confidence": coerce_confidence(s.get("confidence"))}
            for s in suggestions
            if isinstance(s, dict) and all(str(s.get(key) or "").strip() for key in REQUIRED_FIELDS)
        ]

        filtered = [s for s in complete if s["confidence"] >= threshold]

        # Remove duplicates by title (case-insensitive)
        seen_titles = set()
        unique = []
        for s in filtered:
            title_lower = str(s["title"]).strip().lower()
            if title_lower not in seen_titles:
                seen_titles.add(title_lower)
                unique.append(s)

        unique.sort(key=lambda x: x["confidence"], reverse=True)

        return unique
