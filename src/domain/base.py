from datetime import UTC, datetime


def utc_now() -> datetime:
    # Stored columns are naive UTC
    return datetime.now(UTC).replace(tzinfo=None)
