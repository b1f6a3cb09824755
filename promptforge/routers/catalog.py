from fastapi import APIRouter, Depends

from promptforge.models.catalog_models import ModelCatalogResponse
from promptforge.services.model_catalog import ModelCatalogService

router = APIRouter()


def get_model_catalog() -> ModelCatalogService:
    """Dependency injection for ModelCatalogService."""
    return ModelCatalogService()


@router.get("/models", response_model=ModelCatalogResponse)
async def list_models(
    catalog: ModelCatalogService = Depends(get_model_catalog),
) -> ModelCatalogResponse:
    """List model identifiers accepted as model_id; curated list when the vendor is unreachable."""
    return await catalog.list_models()


@router.get("/models/health")
async def catalog_health():
    """Health check endpoint for the catalog router."""
    return {"status": "healthy", "service": "catalog"}
