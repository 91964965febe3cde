"""
Model Listing API Routes.
"""

from fastapi import APIRouter, Depends

from core.dependencies import get_model_catalog_dependency
from internal.api.schemas import ModelInfoSchema, ModelsResponse
from internal.api.utils import dump
from services.model_catalog import ModelCatalog


router = APIRouter(tags=["Models"])


@router.get(
    "/api/models",
    response_model=ModelsResponse,
    summary="List available models",
    description="Model keys accepted by `POST /api/transcribe?model=<key>`.",
    operation_id="list_models",
)
async def list_models(catalog: ModelCatalog = Depends(get_model_catalog_dependency)):
    return dump(
        ModelsResponse(
            models=[
                ModelInfoSchema(key=m.key, name=m.name, description=m.description)
                for m in catalog.list_models()
            ]
        )
    )
