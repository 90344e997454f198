"""Process-wide settings read from the environment (and a local `.env`)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv

DEFAULT_NEBIUS_BASE_URL = "https://api.studio.nebius.com/v1"
DEFAULT_UPSTREAM_TIMEOUT = 120.0


@dataclass(frozen=True, slots=True)
class Settings:
    nebius_api_key: str | None = None
    hf_token: str | None = None
    nebius_base_url: str = DEFAULT_NEBIUS_BASE_URL
    upstream_timeout: float = DEFAULT_UPSTREAM_TIMEOUT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        if environ is None:
            load_dotenv()
            environ = os.environ

        timeout_raw = environ.get("UPSTREAM_TIMEOUT")
        try:
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_UPSTREAM_TIMEOUT
        except ValueError as exc:
            raise ValueError(
                f"UPSTREAM_TIMEOUT must be a number of seconds, got '{timeout_raw}'."
            ) from exc

        return cls(
            nebius_api_key=_non_empty(environ.get("NEBIUS_API_KEY")),
            hf_token=_non_empty(environ.get("HF_TOKEN")),
            nebius_base_url=(
                _non_empty(environ.get("NEBIUS_BASE_URL")) or DEFAULT_NEBIUS_BASE_URL
            ).rstrip("/"),
            upstream_timeout=timeout,
            log_level=_non_empty(environ.get("LOG_LEVEL")) or "INFO",
        )


def _non_empty(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None
