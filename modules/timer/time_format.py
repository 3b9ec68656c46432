from __future__ import annotations

import re
from typing import Optional, Tuple

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def format_time(milliseconds: float) -> str:
    """Render a non-negative millisecond duration as ``HH:MM:SS``.

    Sub-second parts are truncated, never rounded.
    """
    total = int(milliseconds // 1000)
    hours, rem = divmod(total, 3600)
    minutes, sec = divmod(rem, 60)
    return f"{hours:02d}:{minutes:02d}:{sec:02d}"


def parse_leading_int(raw) -> Optional[int]:
    """Read the integer prefix of ``raw`` ("12abc" -> 12), or None."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    match = _LEADING_INT_RE.match(str(raw if raw is not None else ""))
    if not match:
        return None
    return int(match.group(1))


def clamp_field_value(raw, minimum: int, maximum: int) -> int:
    value = parse_leading_int(raw)
    if value is None or value < minimum:
        return minimum
    if value > maximum:
        return maximum
    return value


def split_preset_minutes(minutes: int) -> Tuple[int, int, int]:
    return minutes // 60, minutes % 60, 0


def total_seconds(hours: int, minutes: int, seconds: int) -> int:
    return hours * 3600 + minutes * 60 + seconds
