from __future__ import annotations

from fastapi import APIRouter, Depends

from app.core.registry import ProviderRegistry
from app.dependencies import get_registry

router = APIRouter(tags=["models"])


@router.get("/models")
async def list_models(registry: ProviderRegistry = Depends(get_registry)) -> dict:
    return {
        "data": [
            {"id": descriptor.id, "label": descriptor.label or descriptor.id}
            for descriptor in registry.descriptors()
        ],
    }
