"""
Abstract interfaces for suggestion aggregation components.

Focused, minimal interfaces for each component:
- AdvisoryService: External collaborator returning raw suggestion dicts
- ISuggestionFilter: Sanitizes and filters raw advisory suggestions
- ISuggestionEnricher: Fills defaults so suggestions fit the response model
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Any

from promptforge.models.prompt_models import PromptSpec


class AdvisoryService(ABC):
    """Interface for the optional advisory suggestion collaborator."""

    @abstractmethod
    async def suggest(self, spec: PromptSpec, max_suggestions: int) -> List[Dict[str, Any]]:
        """Return raw suggestion dicts; may raise ServiceError or FormatError."""


class ISuggestionFilter(ABC):
    """Interface for filtering advisory suggestions."""

    @abstractmethod
    def filter(
        self, suggestions: List[Dict[str, Any]], threshold: int
    ) -> List[Dict[str, Any]]:
        """Drop unusable suggestions and those below the confidence threshold."""


class ISuggestionEnricher(ABC):
    """Interface for enriching suggestions with defaults."""

    @abstractmethod
    def enrich(
        self, suggestions: List[Dict[str, Any]], context: PromptSpec
    ) -> List[Dict[str, Any]]:
        """Fill missing optional fields and normalize values."""
