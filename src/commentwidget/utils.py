from datetime import datetime

CREATED_FORMAT = "%Y-%m-%d %H:%M"


def now() -> datetime:
    """Local wall-clock time."""
    return datetime.now()


def format_created(moment: datetime) -> str:
    """Format a timestamp with minute granularity, e.g. 2024-05-01 13:45."""
    return moment.strftime(CREATED_FORMAT)


def utf8_length(value: str) -> int:
    return len(value.encode("utf-8"))
