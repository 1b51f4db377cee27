from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from commentwidget.app import App
from commentwidget.config import Config
from commentwidget.errors import IdentifierError, StorageError
from commentwidget.web.error_handlers import general_exception_handler, storage_error_handler
from commentwidget.web.routers import comments_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        app.state.app = app_instance
        app.state.config = config
        async with app_instance.lifespan():
            yield

    app = FastAPI(title="Comment Widget", version="0.1.0", lifespan=lifespan)

    # The widget is embedded into pages served from other origins
    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(comments_router)

    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(IdentifierError, storage_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    return app
