from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import structlog

from commentwidget.core.modules.comment.identifiers import IdentifierGenerator
from commentwidget.core.modules.comment.models import Comment
from commentwidget.core.modules.comment.store import CommentStore
from commentwidget.core.modules.comment.validators import find_rejection_reason
from commentwidget.errors import IdentifierError, WriteFailedError
from commentwidget.utils import format_created, now

logger = structlog.get_logger(__name__)


class CommentService:
    """Validates submissions, builds comments and sequences store operations.

    The only place a Comment is constructed. Methods block on file I/O and
    lock acquisition; call them from worker threads.
    """

    def __init__(
        self,
        store: CommentStore,
        identifiers: IdentifierGenerator | None = None,
        clock: Callable[[], datetime] = now,
    ) -> None:
        self._store = store
        self._identifiers = identifiers or IdentifierGenerator()
        self._clock = clock

    def list(self) -> list[Comment]:
        """Get all comments in append order."""
        return self._store.load_all()

    def submit(self, raw_name: str, raw_body: str, honeypot: str) -> list[Comment]:
        """Store a new comment and return the refreshed list.

        Rejected submissions are not errors: the current list is returned
        unchanged and the caller cannot tell which rule failed.

        Raises:
            WriteFailedError: If an identifier cannot be generated or the record cannot be written
            SerializeFailedError: If the comment cannot be encoded
            CorruptRecordError: If the log cannot be read back afterwards
        """
        name = raw_name.strip()
        body = raw_body.strip()

        reason = find_rejection_reason(name, body, honeypot)
        if reason is not None:
            logger.debug("submission_rejected", reason=reason)
            return self.list()

        def build() -> Comment:
            # Runs under the store's write lock so ids and timestamps follow append order
            try:
                comment_id = self._identifiers.generate()
            except IdentifierError as e:
                raise WriteFailedError(f"Cannot assign comment identifier: {e}") from e
            return Comment(id=comment_id, name=name, body=body, created=format_created(self._clock()))

        comment = self._store.append_new(build)
        logger.info("comment_created", comment_id=comment.id)
        return self.list()
