"""Shared pytest fixtures."""

from datetime import datetime
from pathlib import Path

import pytest

from commentwidget.core.modules.comment.service import CommentService
from commentwidget.core.modules.comment.store import CommentStore

FIXED_NOW = datetime(2024, 5, 1, 13, 45, 59)


@pytest.fixture
def comments_path(tmp_path: Path) -> Path:
    """Path of a not yet created comments log."""
    return tmp_path / "data" / "comments.jsonl"


@pytest.fixture
def store(comments_path):
    """Create an initialized store backed by an empty log file."""
    store = CommentStore(comments_path)
    store.ensure_initialized()
    return store


@pytest.fixture
def service(store):
    """Create a comment service with a fixed clock."""
    return CommentService(store, clock=lambda: FIXED_NOW)
