import logging
import time
import uuid

from fastapi import APIRouter, HTTPException, Depends

from promptforge.models.generation_models import GenerationResponse
from promptforge.models.prompt_models import PromptSpec, RefinementRequest
from promptforge.services.errors import PromptValidationError
from promptforge.services.generation_orchestrator import GenerationOrchestrator
from promptforge.services.generation_service import OpenAIGenerationService
from promptforge.utils.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


def get_generation_orchestrator() -> GenerationOrchestrator:
    """Dependency injection for GenerationOrchestrator."""
    return GenerationOrchestrator(OpenAIGenerationService())


async def _run(orchestrator: GenerationOrchestrator, spec: PromptSpec) -> GenerationResponse:
    start_time = time.time()
    try:
        outcome = await orchestrator.run(spec)
    except PromptValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        logger.exception("Generation failed")
        raise HTTPException(status_code=500, detail=f"Generation failed: {str(e)}") from e

    return GenerationResponse(
        id=f"prompt-{uuid.uuid4()}",
        text=outcome.text,
        used_fallback=outcome.used_fallback,
        diagnostics=outcome.diagnostics,
        attempts=len(outcome.attempts),
        model_id=spec.model_id or get_settings().openai_model,
        processing_time_ms=int((time.time() - start_time) * 1000),
    )


@router.post("/generate", response_model=GenerationResponse)
async def generate_prompt(
    spec: PromptSpec,
    orchestrator: GenerationOrchestrator = Depends(get_generation_orchestrator),
) -> GenerationResponse:
    """
    Generate a finished prompt from a parameter set.

    The model is tried twice at most; when both answers are unusable the
    prompt is synthesized locally and used_fallback is true.
    """
    return await _run(orchestrator, spec)


@router.post("/refine", response_model=GenerationResponse)
async def refine_prompt(
    request: RefinementRequest,
    orchestrator: GenerationOrchestrator = Depends(get_generation_orchestrator),
) -> GenerationResponse:
    """Rewrite a previously generated prompt according to a modification request."""
    return await _run(orchestrator, request)


@router.get("/generation/health")
async def generation_health():
    """Health check endpoint for the generation router."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": "generation",
        "generation_configured": settings.generation_configured,
        "default_model": settings.openai_model,
    }
