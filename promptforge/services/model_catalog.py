"""Model catalog: vendor model listing with a curated fallback."""

import logging
from typing import List, Optional

from openai import AsyncOpenAI

from promptforge.models.catalog_models import ModelCatalogResponse, ModelInfo
from promptforge.services.errors import ServiceNotConfiguredError
from promptforge.utils.config import get_settings

logger = logging.getLogger(__name__)

CHAT_MODEL_PREFIXES = ("gpt-", "o1", "o3", "o4", "chatgpt-")
EXCLUDED_MARKERS = ("audio", "realtime", "transcribe", "tts", "search", "image", "embedding", "instruct")


def is_chat_model(model_id: str) -> bool:
    lowered = model_id.lower()
    return lowered.startswith(CHAT_MODEL_PREFIXES) and not any(m in lowered for m in EXCLUDED_MARKERS)


def display_name(model_id: str) -> str:
    """'gpt-4o-mini' -> 'GPT 4o Mini'."""
    parts = model_id.split("-")
    return " ".join(p.upper() if p in ("gpt", "o1", "o3", "o4") else p.capitalize() for p in parts)


class ModelCatalogService:
    """Lists the models a client may pass through as model_id."""

    def __init__(self, client: Optional[AsyncOpenAI] = None):
        self.settings = get_settings()
        self.client = client
        if self.client is None and self.settings.generation_configured:
            self.client = AsyncOpenAI(api_key=self.settings.openai_api_key, max_retries=0)

    async def list_models(self) -> ModelCatalogResponse:
        try:
            if self.client is None:
                raise ServiceNotConfiguredError("OPENAI_API_KEY is not set")

            page = await self.client.models.list()
            models = [
                ModelInfo(
                    name=model.id,
                    display_name=display_name(model.id),
                    description=f"OpenAI model owned by {model.owned_by}",
                )
                for model in page.data
                if is_chat_model(model.id)
            ]
            if not models:
                raise ValueError("Vendor listing returned no chat models")

            models.sort(key=lambda m: m.name)
            return ModelCatalogResponse(
                models=models,
                total=len(models),
                default_model=self.settings.openai_model,
            )

        except Exception as e:
            logger.warning("Model listing unavailable, serving curated list: %s", e)
            return self.fallback_catalog(str(e))

    def fallback_catalog(self, error: Optional[str] = None) -> ModelCatalogResponse:
        models: List[ModelInfo] = [
            ModelInfo(
                name=name,
                display_name=display_name(name),
                description="Curated model (vendor listing unavailable)",
            )
            for name in self.settings.fallback_models
        ]
        return ModelCatalogResponse(
            models=models,
            total=len(models),
            default_model=self.settings.openai_model,
            fallback=True,
            error=error,
        )
