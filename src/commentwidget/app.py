import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from commentwidget.config import Config
from commentwidget.core.core import Core
from commentwidget.core.modules.comment.models import Comment
from commentwidget.core.modules.comment.rendering import render_comment_section


class App:
    """Facade for all application operations, runs blocking core work on worker threads."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def list_comments(self) -> list[Comment]:
        """Get all comments in posting order."""
        return await asyncio.to_thread(self._core.comments.list)

    async def submit_comment(self, name: str, body: str, website: str) -> list[Comment]:
        """Submit a comment and get the refreshed list (unchanged if the submission was rejected)."""
        return await asyncio.to_thread(self._core.comments.submit, name, body, website)

    async def render_comments(self) -> str:
        """Render the comment section for the current list."""
        comments = await self.list_comments()
        return render_comment_section(comments)

    async def submit_and_render(self, name: str, body: str, website: str) -> str:
        """Submit a comment and render the resulting comment section."""
        comments = await self.submit_comment(name, body, website)
        return render_comment_section(comments)
