from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current instant as a naive UTC datetime (the form stored in the database)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
