from __future__ import annotations

import logging
from typing import Any

import httpx

from app.core.errors import MalformedResponse, UpstreamError

logger = logging.getLogger(__name__)


class UpstreamClient:
    """Bearer-authenticated calls to one image provider. No retries."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        token: str,
        provider: str = "provider",
    ) -> None:
        self._http = http
        self._token = token
        self.provider = provider

    async def post_json(self, url: str, body: dict[str, Any]) -> Any:
        response = await self._http.post(
            url,
            json=body,
            headers={
                "Authorization": f"Bearer {self._token}",
                "Content-Type": "application/json",
            },
        )

        if not response.is_success:
            logger.error(
                "%s API error: %s %s",
                self.provider,
                response.status_code,
                response.text,
            )
            raise UpstreamError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as exc:
            logger.error("%s returned non-JSON body: %s", self.provider, response.text)
            raise MalformedResponse(self.provider, response.text) from exc

    async def fetch_bytes(self, url: str) -> bytes:
        response = await self._http.get(url)

        if not response.is_success:
            logger.error(
                "Image download from %s failed: %s",
                url,
                response.status_code,
            )
            raise UpstreamError(response.status_code, response.text)

        return response.content
