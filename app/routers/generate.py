from __future__ import annotations

from fastapi import APIRouter, Depends

from app.core.config import Settings
from app.core.registry import ProviderRegistry
from app.dependencies import get_http_client_factory, get_registry, get_settings
from app.generation.schemas import (
    GenerateImageRequest,
    GenerateImageResponse,
    GenerateMultiImageRequest,
)
from app.generation.service import (
    HttpClientFactory,
    generate_baseline_image,
    generate_multi_model_image,
)

router = APIRouter(tags=["generation"])


@router.post("/generate-image", response_model=GenerateImageResponse)
async def generate_image(
    payload: GenerateImageRequest,
    settings: Settings = Depends(get_settings),
    http_client_factory: HttpClientFactory = Depends(get_http_client_factory),
):
    return await generate_baseline_image(payload, settings, http_client_factory)


@router.post("/generate-image-multi", response_model=GenerateImageResponse)
async def generate_image_multi(
    payload: GenerateMultiImageRequest,
    settings: Settings = Depends(get_settings),
    registry: ProviderRegistry = Depends(get_registry),
    http_client_factory: HttpClientFactory = Depends(get_http_client_factory),
):
    return await generate_multi_model_image(
        payload,
        settings,
        registry,
        http_client_factory,
    )
