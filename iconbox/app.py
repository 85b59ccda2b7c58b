"""
FastAPI application entry point for the icon service.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from iconbox.config import get_settings
from iconbox.errors import ServerConfigurationError, StoreUnavailableError
from iconbox.routes import router

logger = logging.getLogger(__name__)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    if exc.status_code == 404 and detail == "Not Found":
        detail = "404 Not Found"
    return PlainTextResponse(
        str(detail), status_code=exc.status_code, headers=exc.headers
    )


async def _validation_exception_handler(
    request: Request, exc: RequestValidationError
):
    return PlainTextResponse("Bad Request", status_code=400)


async def _configuration_error_handler(
    request: Request, exc: ServerConfigurationError
):
    logger.error("%s %s: %s", request.method, request.url.path, exc)
    return PlainTextResponse(f"Server Configuration Error: {exc}", status_code=500)


async def _store_unavailable_handler(request: Request, exc: StoreUnavailableError):
    return PlainTextResponse("Service Unavailable", status_code=503)


def create_app() -> FastAPI:
    app = FastAPI(
        title="iconbox",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.include_router(router)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(ServerConfigurationError, _configuration_error_handler)
    app.add_exception_handler(StoreUnavailableError, _store_unavailable_handler)
    return app


app = create_app()


def main() -> None:
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
