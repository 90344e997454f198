from __future__ import annotations

from fastapi import APIRouter, Depends

from app.core.config import Settings
from app.dependencies import get_settings

router = APIRouter(prefix="/internal", tags=["internal"])


@router.get("/healthz")
async def healthz(settings: Settings = Depends(get_settings)) -> dict:
    return {
        "status": "ok",
        "credentials": {
            "nebius": settings.nebius_api_key is not None,
            "huggingface": settings.hf_token is not None,
        },
    }
