from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog

from commentwidget.config import Config
from commentwidget.core.modules.comment.service import CommentService
from commentwidget.core.modules.comment.store import CommentStore

logger = structlog.get_logger(__name__)


class Core:
    """Container providing config, the comment store and the comment service."""

    config: Config
    store: CommentStore
    comments: CommentService

    def __init__(self, config: Config) -> None:
        """Initialize core with config and a store bound to the configured log file."""
        self.config = config
        self.store = CommentStore(config.comments_path)
        self.comments = CommentService(self.store)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        """Make sure the comments log exists; StorageInitError aborts startup."""
        self.store.ensure_initialized()
        logger.info("core_started", comments_path=str(self.store.path))

    async def on_stop(self) -> None:
        logger.info("core_stopped")
