from datetime import datetime, timezone as dt_timezone


def utc_now() -> datetime:
    """Current time as a UTC-naive datetime, the form stored in the database."""
    return datetime.now(dt_timezone.utc).replace(tzinfo=None)


def isoformat_now() -> str:
    return datetime.now(dt_timezone.utc).isoformat()
