"""FastAPI application setup."""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..app import Application
from .routes import configuration, control, observability, topics

# Vite dev server ports
DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://localhost:5174")


# Global application instance
_app: Application | None = None


def get_app() -> Application:
    """Get the global application instance."""
    global _app
    if not _app:
        _app = Application()
    return _app


def cors_origins() -> list[str]:
    """UI origins from CORS_ORIGINS (comma separated) or the dev defaults."""
    raw = os.getenv("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or list(DEFAULT_CORS_ORIGINS)


def create_fastapi_app(application: Application | None = None) -> FastAPI:
    """Create the FastAPI app around ``application`` (the global one by default)."""
    application = application if application is not None else get_app()

    @asynccontextmanager
    async def lifespan(fastapi_app: FastAPI):
        application.start()
        yield
        # The demo driver publishes over HTTP; stop it before agents go away
        sim_instance = control.get_sim_instance()
        if sim_instance is not None and sim_instance.running:
            await sim_instance.stop()
        application.stop()

    fastapi_app = FastAPI(
        title="topicflow API",
        description="Publish inputs, inspect the topic/agent graph and follow flow events",
        version="0.1.0",
        lifespan=lifespan,
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    fastapi_app.include_router(configuration.create_configuration_router(application))
    fastapi_app.include_router(topics.create_topics_router(application))
    fastapi_app.include_router(observability.create_observability_router(application))
    fastapi_app.include_router(control.create_control_router(application))

    return fastapi_app
