from abc import ABC


class CommentWidgetError(ABC, Exception):
    """Base class for comment widget errors.

    Messages of these errors may contain file paths and other internal
    details. They are logged, never shown to the client.
    """


class StorageInitError(CommentWidgetError):
    """Raised when the comments log file cannot be created at startup."""


class StorageError(CommentWidgetError):
    """Base class for failures while reading or writing the comments log."""


class WriteFailedError(StorageError):
    """Raised when a record cannot be appended to the log."""


class SerializeFailedError(StorageError):
    """Raised when a comment cannot be encoded as a log record."""


class ReadFailedError(StorageError):
    """Raised when the log file cannot be opened or read."""


class CorruptRecordError(StorageError):
    """Raised when a line of the log cannot be decoded into a comment."""

    def __init__(self, line_index: int, reason: str) -> None:
        super().__init__(f"Corrupt record at line {line_index}: {reason}")
        self.line_index = line_index


class IdentifierError(CommentWidgetError):
    """Base class for identifier generation failures."""


class EntropyUnavailableError(IdentifierError):
    """Raised when the secure random source cannot provide bytes."""

    def __init__(self, message: str = "Secure random source unavailable") -> None:
        super().__init__(message)
