"""
FastAPI router for aggregated prompt suggestions.

Local heuristic suggestions are always returned; advisory suggestions from
the model are merged in when available.
"""

import logging

from fastapi import APIRouter, HTTPException, status, Depends
from fastapi.responses import JSONResponse

from promptforge.models.suggestion_models import SuggestionRequest, SuggestionResponse
from promptforge.services.errors import PromptValidationError
from promptforge.services.normalizer import prepare_spec
from promptforge.services.suggestion_aggregator import (
    SuggestionAggregator,
    create_suggestion_aggregator,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_suggestion_aggregator() -> SuggestionAggregator:
    """Dependency injection for SuggestionAggregator."""
    return create_suggestion_aggregator()


@router.post(
    "/suggestions",
    response_model=SuggestionResponse,
    status_code=status.HTTP_200_OK,
    summary="Get suggestions to improve a prompt parameter set",
    description="""
    Combine local heuristic suggestions with optional advisory suggestions.

    **Behavior:**
    - Local suggestions are computed first and always available
    - The advisory model is consulted only when keywords are long enough
    - Advisory failures or timeouts silently degrade to local-only results
    - Advisory suggestions come first; local ones targeting a field already
      covered are dropped; the list is capped and ordered by confidence
    """,
    responses={
        200: {
            "description": "Successfully aggregated suggestions",
            "content": {
                "application/json": {
                    "example": {
                        "suggestions": [
                            {
                                "id": "local-suggestion-0",
                                "type": "context",
                                "title": "Add context",
                                "description": "Give more information about the intended use",
                                "value": "For a young audience, modern style, commercial use",
                                "field": "context",
                                "confidence": 75,
                                "reasoning": "Give more information about the intended use",
                                "source": "local",
                            }
                        ],
                        "local_count": 1,
                        "advisory_count": 0,
                        "advisory_used": False,
                        "processing_time_ms": 3,
                    }
                }
            },
        },
        400: {
            "description": "Keywords missing or empty",
            "content": {"application/json": {"example": {"detail": "Keywords are required"}}},
        },
        422: {"description": "Validation error in request body"},
    },
    tags=["Suggestions"],
)
async def get_suggestions(
    request: SuggestionRequest,
    aggregator: SuggestionAggregator = Depends(get_suggestion_aggregator),
) -> SuggestionResponse:
    """
    Aggregate suggestions for a parameter set.

    Raises:
        HTTPException: 400 when keywords are empty
    """
    try:
        spec = prepare_spec(request.params)
        return await aggregator.aggregate(spec, request.max_suggestions)

    except PromptValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    except Exception as e:
        logger.exception("Error in suggestions endpoint")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Suggestion service temporarily unavailable",
        ) from e


@router.get(
    "/suggestions/health",
    status_code=status.HTTP_200_OK,
    summary="Health check for suggestions service",
    tags=["Suggestions"],
)
async def suggestions_health_check():
    """
    Health check endpoint for suggestion service.

    Returns:
        Status of the suggestions service
    """
    try:
        aggregator = create_suggestion_aggregator()
        return {
            "status": "healthy",
            "service": "suggestions",
            "advisory_available": aggregator.advisory_service is not None,
            "max_suggestions": aggregator.settings.max_suggestions,
        }
    except Exception as e:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unhealthy",
                "service": "suggestions",
                "error": str(e)[:200],
            },
        )
