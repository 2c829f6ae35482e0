"""Timestamp parsing for rows returned by Supabase."""
from datetime import datetime
from typing import Optional, Union


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """
    Parse a timestamp from Supabase, handling various formats.

    Supabase can return timestamps with varying microsecond precision,
    which fromisoformat() can't always handle, so the fraction is
    normalized to six digits first.

    Args:
        value: ISO timestamp string, datetime, or None

    Returns:
        datetime object, or None when no timestamp was given
    """
    if value is None or isinstance(value, datetime):
        return value

    timestamp_str = value.replace("Z", "+00:00")

    # Format: 2026-02-21T02:08:26.18976+00:00
    if "." in timestamp_str:
        head, tail = timestamp_str.split(".", 1)
        for sign in ("+", "-"):
            if sign in tail:
                fraction, tz = tail.split(sign, 1)
                timestamp_str = f"{head}.{fraction[:6].ljust(6, '0')}{sign}{tz}"
                break
        else:
            timestamp_str = f"{head}.{tail[:6].ljust(6, '0')}"

    return datetime.fromisoformat(timestamp_str)
