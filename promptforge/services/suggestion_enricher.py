"""
Defaults enrichment strategy for advisory suggestions.

Single responsibility: Make filtered suggestions fit the SmartSuggestion model.
"""

from typing import List, Dict, Any, get_args

from promptforge.models.prompt_models import PromptSpec
from promptforge.models.suggestion_models import SuggestionType
from promptforge.services.suggestion_interfaces import ISuggestionEnricher

KNOWN_TYPES = set(get_args(SuggestionType))


class DefaultsEnricher(ISuggestionEnricher):
    """
    Enriches suggestions with default values.

    Responsibilities:
    - Assign stable ids
    - Map unknown types to "enhancement"
    - Trim text to the response model limits
    """

    def enrich(
        self, suggestions: List[Dict[str, Any]], context: PromptSpec
    ) -> List[Dict[str, Any]]:
        enriched = []

        for index, s in enumerate(suggestions):
            suggestion_type = s.get("type")
            enriched_s = {
                "id": f"ai-suggestion-{index}",
                "type": suggestion_type if suggestion_type in KNOWN_TYPES else "enhancement",
                "title": str(s["title"]).strip()[:120],
                "description": str(s["description"]).strip()[:500],
                "value": str(s["value"]).strip(),
                "field": str(s["field"]).strip(),
                "confidence": s.get("confidence", 70),
                "reasoning": str(s.get("reasoning") or ""),
                "source": "advisory",
            }

            if s.get("example"):
                enriched_s["example"] = str(s["example"])

            enriched.append(enriched_s)

        return enriched
