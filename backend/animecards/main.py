"""FastAPI application entrypoint."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from animecards.api import api_router
from animecards.api.errors import register_exception_handlers
from animecards.core.config import Settings, get_settings
from animecards.core.context import AppContext
from animecards.services.scheduler import start_scheduler, stop_scheduler

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around an explicitly constructed context."""

    settings = settings or get_settings()
    context = AppContext.from_settings(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        await context.create_all()
        start_scheduler(context)
        logger.info("%s ready (database: %s)", settings.app_name, context.engine.url.render_as_string())
        try:
            yield
        finally:
            stop_scheduler(context)
            await context.dispose()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)
    return app
