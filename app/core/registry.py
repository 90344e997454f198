from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

DEFAULT_MULTI_MODEL_ID = "stable-diffusion-xl"


@dataclass(frozen=True, slots=True)
class ModelDescriptor:
    id: str
    endpoint_url: str
    upstream_model_name: str
    label: str = ""


class ProviderRegistry:
    """Read-only lookup of model id to provider endpoint."""

    def __init__(self, descriptors: Iterable[ModelDescriptor]) -> None:
        entries: dict[str, ModelDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.id in entries:
                raise ValueError(f"Duplicate model id '{descriptor.id}'.")
            entries[descriptor.id] = descriptor
        self._entries: Mapping[str, ModelDescriptor] = MappingProxyType(entries)

    def lookup(self, model_id: str) -> ModelDescriptor | None:
        return self._entries.get(model_id)

    def descriptors(self) -> list[ModelDescriptor]:
        return list(self._entries.values())

    def __contains__(self, model_id: object) -> bool:
        return model_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def default_registry() -> ProviderRegistry:
    return ProviderRegistry(
        [
            ModelDescriptor(
                id="stable-diffusion-xl",
                endpoint_url="https://router.huggingface.co/nscale/v1/images/generations",
                upstream_model_name="stabilityai/stable-diffusion-xl-base-1.0",
                label="Stable Diffusion XL",
            ),
            ModelDescriptor(
                id="qwen-image",
                endpoint_url="https://router.huggingface.co/fal-ai/fal-ai/qwen-image",
                upstream_model_name="fal-ai/qwen-image",
                label="Qwen Image",
            ),
            ModelDescriptor(
                id="flux-dev",
                endpoint_url="https://router.huggingface.co/fal-ai/fal-ai/flux/dev",
                upstream_model_name="fal-ai/flux/dev",
                label="FLUX.1 [dev]",
            ),
        ]
    )
