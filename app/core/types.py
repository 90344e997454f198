from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

PNG_DATA_URL_PREFIX = "data:image/png;base64,"


class ProviderFamily(str, Enum):
    HOSTED_SQUARE = "hosted_square"
    HOSTED_LANDSCAPE = "hosted_landscape"
    INLINE_BASE64 = "inline_base64"

    @property
    def returns_hosted_url(self) -> bool:
        return self is not ProviderFamily.INLINE_BASE64


@dataclass(frozen=True, slots=True)
class InlineBase64:
    payload: str


@dataclass(frozen=True, slots=True)
class HostedUrl:
    url: str


ImageReference = Union[InlineBase64, HostedUrl]


@dataclass(frozen=True, slots=True)
class NormalizedResult:
    image_data_url: str

    def to_payload(self) -> dict[str, str]:
        return {"imageData": self.image_data_url}
