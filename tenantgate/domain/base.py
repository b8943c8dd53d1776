import time
from datetime import UTC, datetime


def utc_now() -> datetime:
    """Naive UTC timestamp, matching how DateTime columns are stored"""
    return datetime.now(UTC).replace(tzinfo=None)


def epoch_ms() -> int:
    return int(time.time() * 1000)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()
