"""Models for the model catalog endpoint."""

from typing import List, Optional
from pydantic import BaseModel, Field


class ModelInfo(BaseModel):
    """A model identifier the client may pass through as model_id."""
    name: str
    display_name: str
    description: str = ""
    input_token_limit: Optional[int] = None
    output_token_limit: Optional[int] = None


class ModelCatalogResponse(BaseModel):
    """Available models and where the list came from."""
    models: List[ModelInfo] = Field(default_factory=list)
    total: int = Field(ge=0)
    default_model: str
    fallback: bool = False
    error: Optional[str] = None
