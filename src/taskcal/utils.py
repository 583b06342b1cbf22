import re
from datetime import UTC, datetime

MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def is_month(value: str) -> bool:
    """Check a `YYYY-MM` calendar month string."""
    return bool(MONTH_RE.fullmatch(value))


def now() -> datetime:
    return datetime.now(UTC)


def timestamp_id(moment: datetime | None = None) -> str:
    """Millisecond timestamp string, the id format clients generate for tasks."""
    moment = moment or now()
    return str(int(moment.timestamp() * 1000))
