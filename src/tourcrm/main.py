"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import clients, health, position, radar, sync, tours
from .config import settings
from .container import AppContainer, build_container

logger = logging.getLogger(__name__)


def create_app(container: AppContainer | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Reconcile with the remote store on startup; flush a pending upload on shutdown."""
        if app.state.container is None:
            app.state.container = build_container()
        app.state.container.sync.reconcile_on_startup()
        yield
        app.state.container.sync.shutdown()

    app = FastAPI(title=settings.app_name, root_path="", lifespan=lifespan)
    app.state.container = container

    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Root endpoint for diagnostics
    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "status": "running",
            "api_prefix": settings.api_prefix,
            "health": f"{settings.api_prefix}/health",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(clients.router, prefix=settings.api_prefix)
    app.include_router(radar.router, prefix=settings.api_prefix)
    app.include_router(tours.router, prefix=settings.api_prefix)
    app.include_router(sync.router, prefix=settings.api_prefix)
    app.include_router(position.router, prefix=settings.api_prefix)
    return app


app = create_app()
