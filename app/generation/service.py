from __future__ import annotations

import logging
from typing import Any, Callable

import httpx

from app.core.config import Settings
from app.core.errors import (
    ImageGatewayError,
    InvalidInput,
    Misconfigured,
    map_generation_error,
)
from app.core.registry import DEFAULT_MULTI_MODEL_ID, ProviderRegistry
from app.core.types import ProviderFamily
from app.providers.adapter import build_baseline_body, build_request_body
from app.providers.client import UpstreamClient
from app.providers.normalizer import (
    extract_for_family,
    normalize,
    resolve_reference,
)

from .schemas import GenerateImageRequest, GenerateMultiImageRequest

logger = logging.getLogger(__name__)

HttpClientFactory = Callable[[], httpx.AsyncClient]

BASELINE_PROVIDER = "Nebius"
BASELINE_MODEL_NAME = "black-forest-labs/flux-schnell"
MULTI_MODEL_PROVIDER = "Hugging Face"


async def generate_baseline_image(
    request: GenerateImageRequest,
    settings: Settings,
    http_client_factory: HttpClientFactory,
) -> dict[str, Any]:
    prompt = _require_prompt(request.prompt)

    if not settings.nebius_api_key:
        raise Misconfigured("Nebius API key not configured")

    logger.info("Generating image with %s", BASELINE_MODEL_NAME)

    try:
        async with http_client_factory() as http:
            client = UpstreamClient(http, settings.nebius_api_key, BASELINE_PROVIDER)
            raw = await client.post_json(
                f"{settings.nebius_base_url}/images/generations",
                build_baseline_body(prompt, BASELINE_MODEL_NAME),
            )
            reference = extract_for_family(
                ProviderFamily.INLINE_BASE64, raw, BASELINE_PROVIDER
            )
            result = await resolve_reference(reference, client.fetch_bytes)
    except ImageGatewayError:
        raise
    except Exception as exc:
        logger.exception("%s API error", BASELINE_PROVIDER)
        raise map_generation_error(exc) from exc

    return result.to_payload()


async def generate_multi_model_image(
    request: GenerateMultiImageRequest,
    settings: Settings,
    registry: ProviderRegistry,
    http_client_factory: HttpClientFactory,
) -> dict[str, Any]:
    prompt = _require_prompt(request.prompt)

    model_id = request.model if request.model is not None else DEFAULT_MULTI_MODEL_ID
    descriptor = registry.lookup(model_id)
    if descriptor is None:
        raise InvalidInput("Invalid model selected")

    if not settings.hf_token:
        raise Misconfigured("Hugging Face token not configured")

    logger.info("Generating image with model '%s'", model_id)

    try:
        async with http_client_factory() as http:
            client = UpstreamClient(http, settings.hf_token, MULTI_MODEL_PROVIDER)
            raw = await client.post_json(
                descriptor.endpoint_url,
                build_request_body(prompt, model_id, descriptor),
            )
            result = await normalize(
                model_id, raw, client.fetch_bytes, MULTI_MODEL_PROVIDER
            )
    except ImageGatewayError:
        raise
    except Exception as exc:
        logger.exception("%s API error", MULTI_MODEL_PROVIDER)
        raise map_generation_error(exc) from exc

    return result.to_payload()


def _require_prompt(prompt: str | None) -> str:
    if prompt is None or not prompt.strip():
        raise InvalidInput("Prompt is required")
    return prompt
