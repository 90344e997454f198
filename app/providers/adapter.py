from __future__ import annotations

from typing import Any

from app.core.registry import ModelDescriptor
from app.core.types import ProviderFamily

QWEN_IMAGE_MODEL_ID = "qwen-image"
FLUX_MODEL_PREFIX = "flux"


def provider_family(model_id: str) -> ProviderFamily:
    # Exact ids first, so a prefix rule never shadows them.
    if model_id == QWEN_IMAGE_MODEL_ID:
        return ProviderFamily.HOSTED_SQUARE
    if model_id.startswith(FLUX_MODEL_PREFIX):
        return ProviderFamily.HOSTED_LANDSCAPE
    return ProviderFamily.INLINE_BASE64


def build_request_body(
    prompt: str,
    model_id: str,
    descriptor: ModelDescriptor,
) -> dict[str, Any]:
    family = provider_family(model_id)

    if family is ProviderFamily.HOSTED_SQUARE:
        return {
            "prompt": prompt,
            "image_size": "square_hd",
            "num_inference_steps": 25,
            "guidance_scale": 3.5,
        }

    if family is ProviderFamily.HOSTED_LANDSCAPE:
        return {
            "prompt": prompt,
            "image_size": "landscape_4_3",
            "num_inference_steps": 28,
            "guidance_scale": 3.5,
        }

    return {
        "response_format": "b64_json",
        "prompt": prompt,
        "model": descriptor.upstream_model_name,
    }


def build_baseline_body(prompt: str, upstream_model_name: str) -> dict[str, Any]:
    """Fixed OpenAI-style images body used by the single-model endpoint."""

    return {
        "model": upstream_model_name,
        "prompt": prompt,
        "response_format": "b64_json",
        "width": 1024,
        "height": 1024,
        "num_inference_steps": 4,
        "negative_prompt": "",
        "seed": -1,
    }
