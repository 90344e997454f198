from __future__ import annotations

from dataclasses import dataclass
from typing import Any

GENERATION_FAILED = "Failed to generate image"


@dataclass(eq=False)
class ImageGatewayError(Exception):
    status_code: int
    message: str
    details: str | None = None

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message

    def to_error(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class InvalidInput(ImageGatewayError):
    def __init__(self, message: str) -> None:
        super().__init__(status_code=400, message=message)


class MethodNotAllowed(ImageGatewayError):
    def __init__(self, message: str = "Method not allowed") -> None:
        super().__init__(status_code=405, message=message)


class Misconfigured(ImageGatewayError):
    def __init__(self, message: str) -> None:
        super().__init__(status_code=500, message=message)


class UpstreamError(ImageGatewayError):
    """Non-2xx answer from a provider; keeps the status and body text."""

    def __init__(self, upstream_status: int, body: str) -> None:
        super().__init__(
            status_code=500,
            message=GENERATION_FAILED,
            details=f"Upstream API error: {upstream_status} {body}",
        )
        self.upstream_status = upstream_status
        self.body = body


class MalformedResponse(ImageGatewayError):
    def __init__(self, provider: str, raw: Any = None) -> None:
        super().__init__(
            status_code=500,
            message=GENERATION_FAILED,
            details=f"Invalid response format from {provider}",
        )
        self.raw = raw


def map_generation_error(exc: Exception) -> ImageGatewayError:
    """Map anything raised during a generation call to a gateway error."""

    if isinstance(exc, ImageGatewayError):
        return exc

    return ImageGatewayError(
        status_code=500,
        message=GENERATION_FAILED,
        details=str(exc) or exc.__class__.__name__,
    )
