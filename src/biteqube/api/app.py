"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from biteqube.api.routers import (
    auth,
    chat,
    checkout,
    cookbook,
    profile,
    recipes,
    scan,
    search,
    shopping,
    visitors,
)
from biteqube.app_logging import configure_logging
from biteqube.containers import AppContainer
from biteqube.domain.errors import BiteQubeError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.environment)
    logger = logging.getLogger(__name__)
    debug_errors = container.settings.environment == "local"

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="BiteQube", lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(BiteQubeError)
    async def handle_domain_error(
        request: Request, exc: BiteQubeError
    ) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "Request failed", extra={"path": request.url.path, "error": exc.message}
            )
        detail = exc.message
        if debug_errors and exc.__cause__ is not None:
            detail = f"{detail} ({exc.__cause__})"
        return JSONResponse(status_code=exc.status_code, content={"detail": detail})

    for router_module in (
        auth,
        profile,
        search,
        scan,
        recipes,
        cookbook,
        shopping,
        chat,
        checkout,
        visitors,
    ):
        app.include_router(router_module.router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
