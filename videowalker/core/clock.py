from datetime import datetime, timezone


def utcnow() -> datetime:
    # naive UTC, same representation the DATETIME columns store
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def get_now() -> datetime:
    """FastAPI dependency; tests override it to freeze time."""
    return utcnow()
