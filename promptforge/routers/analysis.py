import logging

from fastapi import APIRouter, HTTPException, Depends

from promptforge.models.analysis_models import (
    AIAnalysisRequest,
    AIAnalysisResponse,
    AnalysisResponse,
)
from promptforge.models.prompt_models import PromptSpec
from promptforge.services import quality_scorer
from promptforge.services.ai_analyzer import AIPromptAnalyzer
from promptforge.services.errors import PromptValidationError
from promptforge.services.normalizer import prepare_spec

logger = logging.getLogger(__name__)

router = APIRouter()


def get_ai_analyzer() -> AIPromptAnalyzer:
    """Dependency injection for AIPromptAnalyzer."""
    return AIPromptAnalyzer()


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze_prompt(spec: PromptSpec) -> AnalysisResponse:
    """
    Score a parameter set with the deterministic quality heuristics.

    Returns the five-axis score, issues, suggestions, strengths, improvements,
    readability level and estimated token cost. Never calls an external model.
    """
    try:
        return quality_scorer.analyze(prepare_spec(spec))

    except PromptValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        logger.exception("Analysis failed")
        raise HTTPException(status_code=500, detail=f"Analysis failed: {str(e)}") from e


@router.post("/analyze/ai", response_model=AIAnalysisResponse)
async def analyze_prompt_with_ai(
    request: AIAnalysisRequest,
    analyzer: AIPromptAnalyzer = Depends(get_ai_analyzer),
) -> AIAnalysisResponse:
    """
    Ask the model for a qualitative analysis of a parameter set.

    Falls back to a neutral analysis (fallback=true) when the model is
    unavailable or its answer cannot be parsed.
    """
    try:
        params = prepare_spec(request.params)
        return await analyzer.analyze(request.model_copy(update={"params": params}))

    except PromptValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        logger.exception("AI analysis failed")
        raise HTTPException(status_code=500, detail=f"Analysis failed: {str(e)}") from e


@router.get("/analysis/health")
async def analysis_health():
    """Health check endpoint for the analysis router."""
    return {"status": "healthy", "service": "analysis"}
