from commentwidget.core.modules.comment.models import BODY_MAX_BYTES, NAME_MAX_BYTES
from commentwidget.utils import utf8_length


def find_rejection_reason(name: str, body: str, honeypot: str) -> str | None:
    """Check an already trimmed submission against the acceptance rules.

    Rules:
    - Honeypot field must be empty
    - Name and body must be non-empty
    - Name at most 80 bytes, body at most 1000 bytes (UTF-8)

    Returns:
        Short machine-readable reason for the first failed rule, or None if the
        submission is acceptable. Reasons are for logs only, never for the client.
    """
    if honeypot:
        return "honeypot_filled"
    if not name:
        return "name_empty"
    if not body:
        return "body_empty"
    if utf8_length(name) > NAME_MAX_BYTES:
        return "name_too_long"
    if utf8_length(body) > BODY_MAX_BYTES:
        return "body_too_long"
    return None
