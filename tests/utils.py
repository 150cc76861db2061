from datetime import date, timedelta


def day(offset: int, *, anchor: date = date(2025, 11, 20)) -> date:
    """Calendar date ``offset`` days from the anchor used across the tests."""
    return anchor + timedelta(days=offset)
