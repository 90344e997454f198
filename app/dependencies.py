from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import Settings
from app.core.errors import ImageGatewayError, InvalidInput, MethodNotAllowed
from app.core.registry import ProviderRegistry
from app.generation.service import HttpClientFactory


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_registry(request: Request) -> ProviderRegistry:
    return request.app.state.registry


def get_http_client_factory(request: Request) -> HttpClientFactory:
    return request.app.state.http_client_factory


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ImageGatewayError)
    async def handle_gateway_error(
        _request: Request,
        exc: ImageGatewayError,
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_error(),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        _request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        first_error = exc.errors()[0]["msg"] if exc.errors() else "Invalid request"
        error = InvalidInput(first_error)
        return JSONResponse(
            status_code=error.status_code,
            content=error.to_error(),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(
        _request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        if exc.status_code == 405:
            error = MethodNotAllowed()
            return JSONResponse(
                status_code=error.status_code,
                content=error.to_error(),
                headers=exc.headers,
            )

        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=exc.headers,
        )
