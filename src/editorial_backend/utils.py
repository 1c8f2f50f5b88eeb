from datetime import datetime, timezone
from time import time


def utcnow() -> datetime:
    """Timezone-aware current time in UTC"""
    return datetime.now(timezone.utc)


def make_id(prefix: str) -> str:
    """Generate an identifier from the current time in milliseconds

    Two ids generated within the same millisecond collide.
    """
    return f"{prefix}-{int(time() * 1000)}"


def contains(text: str, term: str) -> bool:
    """Case-insensitive substring search"""
    return term.lower() in (text or "").lower()
