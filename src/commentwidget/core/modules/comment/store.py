"""Append-only JSON Lines persistence for comments."""

import os
from collections.abc import Callable
from pathlib import Path

import structlog
from pydantic import ValidationError

from commentwidget.core.modules.comment.locking import ReadWriteLock
from commentwidget.core.modules.comment.models import Comment
from commentwidget.errors import (
    CorruptRecordError,
    ReadFailedError,
    SerializeFailedError,
    StorageInitError,
    WriteFailedError,
)

logger = structlog.get_logger(__name__)


class CommentStore:
    """Owns the comments log file and the lock guarding it.

    Each comment is one self-contained JSON object on its own line. Appends
    hold the write lock from open to close; reads hold the read lock for the
    whole pass over the file, so a reader never sees a half-written record
    from this process. Other processes sharing the same path are not
    coordinated with.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = ReadWriteLock()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def lock(self) -> ReadWriteLock:
        return self._lock

    def ensure_initialized(self) -> None:
        """Create an empty log file if none exists.

        Raises:
            StorageInitError: If the file cannot be created or the path is not a regular file
        """
        with self._lock.write():
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                if not self._path.exists():
                    self._path.touch()
                    logger.info("comments_log_created", path=str(self._path))
            except OSError as e:
                raise StorageInitError(f"Cannot create comments log {self._path}: {e}") from e
            if not self._path.is_file():
                raise StorageInitError(f"Comments log {self._path} is not a regular file")

    def append(self, comment: Comment) -> None:
        """Append one record to the log.

        The record is flushed and synced before returning, so any later
        load_all sees it.

        Raises:
            SerializeFailedError: If the comment cannot be encoded
            WriteFailedError: If the file cannot be opened or written
        """
        with self._lock.write():
            self._write_record(comment)

    def append_new(self, build: Callable[[], Comment]) -> Comment:
        """Build a comment and append it within one exclusive section.

        Identifiers and timestamps assigned by ``build`` therefore follow
        append order. Nothing is written if ``build`` raises.

        Raises:
            SerializeFailedError: If the comment cannot be encoded
            WriteFailedError: If the file cannot be opened or written
        """
        with self._lock.write():
            comment = build()
            self._write_record(comment)
        return comment

    def _write_record(self, comment: Comment) -> None:
        try:
            record = comment.model_dump_json().encode("utf-8") + b"\n"
        except ValueError as e:
            raise SerializeFailedError(f"Cannot serialize comment {comment.id}: {e}") from e

        try:
            with self._path.open("ab") as f:
                f.write(record)
                f.flush()
                os.fsync(f.fileno())
        except OSError as e:
            raise WriteFailedError(f"Cannot append to {self._path}: {e}") from e

        logger.debug("comment_appended", comment_id=comment.id, size=len(record))

    def load_all(self) -> list[Comment]:
        """Read every comment in file order.

        Returns:
            Comments in append order; an empty file gives an empty list

        Raises:
            CorruptRecordError: If any line is not a valid record (no partial result is returned)
            ReadFailedError: If the file cannot be opened or read
        """
        comments: list[Comment] = []
        with self._lock.read():
            try:
                with self._path.open("rb") as f:
                    for line_index, line in enumerate(f):
                        comments.append(self._decode_line(line_index, line))
            except OSError as e:
                raise ReadFailedError(f"Cannot read {self._path}: {e}") from e
        return comments

    def _decode_line(self, line_index: int, line: bytes) -> Comment:
        try:
            return Comment.model_validate_json(line.rstrip(b"\r\n"))
        except ValidationError as e:
            logger.warning("corrupt_record", path=str(self._path), line_index=line_index, errors=e.error_count())
            raise CorruptRecordError(line_index, str(e)) from e
