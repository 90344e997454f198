from __future__ import annotations

import httpx
from fastapi import FastAPI

from app.core.config import Settings
from app.core.log_config import configure_logging
from app.core.registry import ProviderRegistry, default_registry
from app.dependencies import register_exception_handlers
from app.generation.service import HttpClientFactory
from app.internal import admin
from app.routers import generate, models


def create_app(
    settings: Settings | None = None,
    registry: ProviderRegistry | None = None,
    http_client_factory: HttpClientFactory | None = None,
) -> FastAPI:
    if settings is None:
        settings = Settings.from_env()
    if registry is None:
        registry = default_registry()
    if http_client_factory is None:
        http_client_factory = _http_client_factory(settings.upstream_timeout)

    configure_logging(settings.log_level)

    app = FastAPI(
        title="imagegen-gateway",
        version="0.1.0",
        docs_url="/docs",
        redoc_url=None,
    )

    app.state.settings = settings
    app.state.registry = registry
    app.state.http_client_factory = http_client_factory

    register_exception_handlers(app)

    app.include_router(generate.router)
    app.include_router(models.router)
    app.include_router(admin.router)

    return app


def _http_client_factory(timeout: float) -> HttpClientFactory:
    def factory() -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=timeout)

    return factory


app = create_app()
