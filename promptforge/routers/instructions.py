import logging

from fastapi import APIRouter, HTTPException, Depends

from promptforge.models.instruction_models import (
    ParseInstructionRequest,
    ParsedInstruction,
    TopicSuggestionRequest,
    TopicSuggestionResponse,
)
from promptforge.services.instruction_parser import InstructionParser
from promptforge.services.topic_suggester import TopicSuggester

logger = logging.getLogger(__name__)

router = APIRouter()


def get_instruction_parser() -> InstructionParser:
    """Dependency injection for InstructionParser."""
    return InstructionParser()


def get_topic_suggester() -> TopicSuggester:
    """Dependency injection for TopicSuggester."""
    return TopicSuggester()


@router.post("/parse-instruction", response_model=ParsedInstruction)
async def parse_instruction(
    request: ParseInstructionRequest,
    parser: InstructionParser = Depends(get_instruction_parser),
) -> ParsedInstruction:
    """
    Extract keywords, mode, tone, complexity and image style from a free-text instruction.

    Values outside the accepted options are left out. When the model is
    unavailable only normalized keywords are returned (fallback=true).
    """
    try:
        return await parser.parse(request)

    except Exception as e:
        logger.exception("Instruction parsing failed")
        raise HTTPException(status_code=500, detail=f"Instruction parsing failed: {str(e)}") from e


@router.post("/suggest-topic", response_model=TopicSuggestionResponse)
async def suggest_topic(
    request: TopicSuggestionRequest,
    suggester: TopicSuggester = Depends(get_topic_suggester),
) -> TopicSuggestionResponse:
    """
    Suggest topic ideas for a prompt mode, refining the current keywords when given.

    Falls back to curated ideas (fallback=true) when the model gives no topics.
    """
    try:
        return await suggester.suggest(request)

    except Exception as e:
        logger.exception("Topic suggestion failed")
        raise HTTPException(status_code=500, detail=f"Topic suggestion failed: {str(e)}") from e


@router.get("/instructions/health")
async def instructions_health():
    """Health check endpoint for the instructions router."""
    return {"status": "healthy", "service": "instructions"}
