"""
Utility functions for the Kickoff game-day engine.

This module contains time helpers used throughout the application.
"""
from datetime import date, datetime
from typing import Any, Optional


def fmt_mmss(seconds: int) -> str:
    """
    Format seconds as MM:SS string.

    Args:
        seconds: Number of seconds to format

    Returns:
        Formatted time string in MM:SS format

    Example:
        >>> fmt_mmss(90)
        '01:30'
        >>> fmt_mmss(480)
        '08:00'
    """
    m = seconds // 60
    s = seconds % 60
    return f"{m:02d}:{s:02d}"


def now_dt() -> datetime:
    """Get the current local time as a datetime."""
    return datetime.now()


def today_str() -> str:
    """Return today's calendar date as a YYYY-MM-DD string."""
    return date.today().isoformat()


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Serialize a datetime to ISO 8601, passing None through."""
    return value.isoformat() if value is not None else None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Convert a serialized timestamp back into a datetime.

    Accepts ISO 8601 strings (including a trailing ``Z``), epoch numbers in
    seconds or milliseconds, and datetimes.

    Raises:
        ValueError: If the value cannot be interpreted as a timestamp
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        seconds = value / 1000 if value > 1e11 else value
        return datetime.fromtimestamp(seconds)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    raise ValueError(f"Invalid timestamp: {value!r}")
