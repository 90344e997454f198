"""Turn provider responses into a single PNG data URL.

Inline providers answer with `data[0].b64_json`. Hosted providers answer with
a URL under one of several paths, tried in order: `images[0].url`,
`image.url`, `data[0].url`. Hosted images are downloaded and re-encoded.
"""

from __future__ import annotations

import base64
import logging
from typing import Any, Awaitable, Callable

from app.core.errors import MalformedResponse
from app.core.types import (
    PNG_DATA_URL_PREFIX,
    HostedUrl,
    ImageReference,
    InlineBase64,
    NormalizedResult,
    ProviderFamily,
)

from .adapter import provider_family

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[bytes]]

INLINE_PATH: tuple[str | int, ...] = ("data", 0, "b64_json")
HOSTED_URL_PATHS: tuple[tuple[str | int, ...], ...] = (
    ("images", 0, "url"),
    ("image", "url"),
    ("data", 0, "url"),
)


def extract_image_reference(
    model_id: str,
    raw: Any,
    provider: str = "provider",
) -> ImageReference:
    family = provider_family(model_id)
    return extract_for_family(family, raw, provider)


def extract_for_family(
    family: ProviderFamily,
    raw: Any,
    provider: str = "provider",
) -> ImageReference:
    if family.returns_hosted_url:
        for path in HOSTED_URL_PATHS:
            url = _string_at(raw, path)
            if url:
                return HostedUrl(url=url)
    else:
        payload = _string_at(raw, INLINE_PATH)
        if payload:
            return InlineBase64(payload=payload)

    logger.error("Unrecognized response from %s: %r", provider, raw)
    raise MalformedResponse(provider, raw)


def to_data_url(payload: bytes | str) -> str:
    if isinstance(payload, bytes):
        payload = base64.b64encode(payload).decode("ascii")
    return f"{PNG_DATA_URL_PREFIX}{payload}"


async def resolve_reference(reference: ImageReference, fetch: Fetcher) -> NormalizedResult:
    if isinstance(reference, InlineBase64):
        return NormalizedResult(image_data_url=to_data_url(reference.payload))

    logger.info("Fetching hosted image %s", reference.url)
    image_bytes = await fetch(reference.url)
    return NormalizedResult(image_data_url=to_data_url(image_bytes))


async def normalize(
    model_id: str,
    raw: Any,
    fetch: Fetcher,
    provider: str = "provider",
) -> NormalizedResult:
    reference = extract_image_reference(model_id, raw, provider)
    return await resolve_reference(reference, fetch)


def _string_at(raw: Any, path: tuple[str | int, ...]) -> str | None:
    node = raw
    for key in path:
        if isinstance(key, int):
            if not isinstance(node, list) or len(node) <= key:
                return None
            node = node[key]
        else:
            if not isinstance(node, dict):
                return None
            node = node.get(key)

    if isinstance(node, str) and node:
        return node
    return None
