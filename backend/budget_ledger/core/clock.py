from datetime import datetime, timezone


def utcnow() -> datetime:
    """Текущее время в UTC (naive, как хранится в колонках DateTime)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
