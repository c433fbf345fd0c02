"""FastAPI application entrypoint for the patch bridge."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from patchbridge.api.middleware.logging import LoggingMiddleware
from patchbridge.api.routes import connections, objects, status as status_routes
from patchbridge.core.config import settings
from patchbridge.core.exceptions import ApplicationError
from patchbridge.core.observability import setup_tracing
from patchbridge.models import ErrorResponse
from patchbridge.orchestration.facade import PatcherFacade
from patchbridge.orchestration.transport import build_transport

logger = logging.getLogger(__name__)


def create_app(facade: Optional[PatcherFacade] = None) -> FastAPI:
    """Build the application around `facade`, or one wired from settings."""

    facade = facade if facade is not None else PatcherFacade(build_transport())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Attach the host transport on startup and detach it on shutdown."""

        await app.state.facade.start()
        try:
            yield
        finally:
            await app.state.facade.stop()

    app = FastAPI(
        title=settings.API_TITLE,
        version=settings.API_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.facade = facade

    setup_tracing(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    # Routers
    app.include_router(status_routes.router)
    app.include_router(objects.router)
    app.include_router(connections.router)

    @app.exception_handler(ApplicationError)
    async def handle_application_error(_: Request, exc: ApplicationError):
        """Return standardized responses for application layer exceptions."""

        if exc.status_code >= 500:
            logger.warning("%s: %s", exc.code, exc.message)
        return JSONResponse(status_code=exc.status_code, content=ErrorResponse(error=exc.message, code=exc.code).model_dump())

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError):
        """Malformed bodies are client errors like missing fields."""

        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(error=f"invalid request: {details}", code="invalid_request").model_dump(),
        )

    return app


app = create_app()
