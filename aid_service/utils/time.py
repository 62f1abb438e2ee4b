from datetime import datetime, timezone


def utcnow():
    return datetime.now(timezone.utc)


def as_utc(dt):
    """
    Normalize a stored timestamp to an aware UTC datetime.
    SQLite hands DateTime(timezone=True) columns back without tzinfo.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def isoformat(dt):
    return as_utc(dt).isoformat() if dt else None
