"""
Parsing of venue opening-hours text and HH:MM clock strings.

Everything here is best effort: unparseable input yields ``None`` (or an
"unparsed" DayHours) so callers can fail open instead of raising.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60

_CLOCK_CHARS = re.compile(r"[^0-9:]")
_RANGE_SEPARATOR = re.compile(r"[–-]")

RANGE = "range"
CLOSED = "closed"
UNPARSED = "unparsed"


@dataclass(frozen=True)
class ClockTime:
    hour: int
    minute: int

    @property
    def minute_of_day(self) -> int:
        return self.hour * 60 + self.minute


@dataclass(frozen=True)
class DayHours:
    kind: str
    open_minute: Optional[int] = None
    close_minute: Optional[int] = None
    open_text: Optional[str] = None
    close_text: Optional[str] = None

    @property
    def spans_midnight(self) -> bool:
        return self.kind == RANGE and self.close_minute <= self.open_minute


CLOSED_ALL_DAY = DayHours(kind=CLOSED)
UNPARSED_DAY = DayHours(kind=UNPARSED)


def parse_clock_time(text: object) -> Optional[ClockTime]:
    if not isinstance(text, str):
        return None
    marker = text.lower()
    parts = _CLOCK_CHARS.sub("", text).split(":")
    if not parts[0].isdigit():
        return None
    hour = int(parts[0])
    minute = 0
    if len(parts) > 1 and parts[1]:
        if not parts[1].isdigit():
            return None
        minute = int(parts[1])

    if "pm" in marker and hour != 12:
        hour += 12
    elif "am" in marker and hour == 12:
        hour = 0

    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return ClockTime(hour=hour, minute=minute)


def parse_day_range(day_text: object) -> Optional[DayHours]:
    """
    Parse one "<Weekday>: <open> – <close>" line.

    Returns CLOSED_ALL_DAY for closed days and ``None`` when the line cannot
    be read as a single open/close range.
    """
    if not isinstance(day_text, str) or ": " not in day_text:
        return None
    remainder = day_text.split(": ", 1)[1]
    if "closed" in remainder.lower():
        return CLOSED_ALL_DAY

    bounds = _RANGE_SEPARATOR.split(remainder)
    if len(bounds) != 2:
        return None
    open_text, close_text = bounds[0].strip(), bounds[1].strip()
    opens = parse_clock_time(open_text)
    closes = parse_clock_time(close_text)
    if opens is None or closes is None:
        return None
    return DayHours(
        kind=RANGE,
        open_minute=opens.minute_of_day,
        close_minute=closes.minute_of_day,
        open_text=open_text,
        close_text=close_text,
    )


def classify_day(day_text: object) -> DayHours:
    return parse_day_range(day_text) or UNPARSED_DAY


@lru_cache(maxsize=4096)
def _decode_opening_hours(raw: str) -> Optional[Tuple[str, ...]]:
    try:
        decoded = json.loads(raw)
    except (ValueError, RecursionError):
        logger.debug("Opening hours are not valid JSON: %r", raw[:80])
        return None
    return _as_lines(decoded)


def _as_lines(value: object) -> Optional[Tuple[str, ...]]:
    if not isinstance(value, (list, tuple)):
        return None
    return tuple(line for line in value if isinstance(line, str))


def parse_opening_hours(raw: object) -> Optional[Tuple[str, ...]]:
    """Weekday lines of an activity's opening hours, or ``None`` without usable data."""
    if raw is None:
        return None
    if isinstance(raw, str):
        if not raw.strip():
            return None
        return _decode_opening_hours(raw)
    if isinstance(raw, Sequence):
        return _as_lines(list(raw))
    return None


def find_weekday_line(lines: Sequence[str], weekday: str) -> Optional[str]:
    wanted = weekday.lower()
    for line in lines:
        name = line.split(":", 1)[0].strip().lower()
        if name == wanted:
            return line
    return None


@lru_cache(maxsize=4096)
def hours_for_weekday(lines: Tuple[str, ...], weekday: str) -> Optional[DayHours]:
    """Tagged hours for ``weekday``; ``None`` when the weekday has no line at all."""
    line = find_weekday_line(lines, weekday)
    if line is None:
        return None
    return classify_day(line)


def format_minutes(minutes: int) -> str:
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
