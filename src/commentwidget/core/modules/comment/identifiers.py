"""UUID v7 shaped identifiers for comments."""

import secrets
import time
from collections.abc import Callable
from uuid import UUID

from commentwidget.errors import EntropyUnavailableError

TIMESTAMP_BYTES = 6
RANDOM_BYTES = 10


def _unix_ms() -> int:
    return time.time_ns() // 1_000_000


class IdentifierGenerator:
    """Generates identifiers whose first 48 bits are a Unix millisecond timestamp.

    The remaining 80 bits come from the secure random source, with the version
    nibble set to 7 and the RFC 4122 variant bits set. Identifiers created in
    later milliseconds sort after earlier ones; within one millisecond the
    order is random.
    """

    def __init__(
        self,
        clock: Callable[[], int] = _unix_ms,
        entropy: Callable[[int], bytes] = secrets.token_bytes,
    ) -> None:
        self._clock = clock
        self._entropy = entropy

    def generate(self) -> str:
        """Return a new identifier in canonical 8-4-4-4-12 form.

        Raises:
            EntropyUnavailableError: If the random source fails or returns short data
        """
        timestamp = self._clock() & 0xFFFF_FFFF_FFFF
        try:
            random_part = self._entropy(RANDOM_BYTES)
        except (OSError, NotImplementedError) as e:
            raise EntropyUnavailableError(f"Secure random source failed: {e}") from e
        if len(random_part) != RANDOM_BYTES:
            raise EntropyUnavailableError(f"Expected {RANDOM_BYTES} random bytes, got {len(random_part)}")

        raw = bytearray(timestamp.to_bytes(TIMESTAMP_BYTES, "big") + random_part)
        raw[6] = (raw[6] & 0x0F) | 0x70  # version 7
        raw[8] = (raw[8] & 0x3F) | 0x80  # RFC 4122 variant
        return str(UUID(bytes=bytes(raw)))
