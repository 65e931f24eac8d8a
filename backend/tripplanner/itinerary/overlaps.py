"""
Detection of scheduled items whose time windows overlap once both are
converted to UTC, so items in different timezones are compared correctly.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from itertools import combinations
from typing import Iterable, List, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from tripplanner.itinerary.time_window import parse_clock_time
from tripplanner.models.domain import Overlap, TripActivity

logger = logging.getLogger(__name__)

Window = Tuple[datetime, datetime]


def load_zone(name: str) -> Optional[ZoneInfo]:
    """The IANA zone called ``name``, or ``None`` when no such zone file exists."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, TypeError, OSError):
        # directory names such as "Europe" surface as IsADirectoryError
        return None


def is_known_timezone(name: str) -> bool:
    return load_zone(name) is not None


def local_window(trip_activity: TripActivity) -> Optional[Window]:
    starts = parse_clock_time(trip_activity.start_time)
    if starts is None or trip_activity.effective_duration <= 0:
        return None
    zone = load_zone(trip_activity.zone)
    if zone is None:
        logger.info("Unknown timezone %r on item %s, skipping", trip_activity.zone, trip_activity.id)
        return None
    start = datetime(
        trip_activity.planned_date.year,
        trip_activity.planned_date.month,
        trip_activity.planned_date.day,
        starts.hour,
        starts.minute,
        tzinfo=zone,
    )
    return start, start + timedelta(minutes=trip_activity.effective_duration)


def utc_window(trip_activity: TripActivity) -> Optional[Window]:
    window = local_window(trip_activity)
    if window is None:
        return None
    start, end = window
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def find_overlaps(trip_activities: Iterable[TripActivity]) -> List[Overlap]:
    windows = []
    for item in trip_activities:
        window = utc_window(item)
        if window is not None:
            windows.append((item, window))

    overlaps: List[Overlap] = []
    for (first, (a_start, a_end)), (second, (b_start, b_end)) in combinations(windows, 2):
        if a_start < b_end and b_start < a_end:
            overlaps.append(Overlap(first=first, second=second))
    return overlaps


def overlaps_with(candidate: TripActivity, others: Iterable[TripActivity]) -> List[TripActivity]:
    window = utc_window(candidate)
    if window is None:
        return []
    start, end = window
    clashing = []
    for other in others:
        if other.id == candidate.id:
            continue
        other_window = utc_window(other)
        if other_window and start < other_window[1] and other_window[0] < end:
            clashing.append(other)
    return clashing


def describe_overlap(trip_activity: TripActivity) -> str:
    window = local_window(trip_activity)
    if window is None:
        return f"{trip_activity.display_name} (time data incomplete)"
    start, end = window
    return (
        f"{trip_activity.display_name} ({start.date().isoformat()} "
        f"{start:%H:%M}-{end:%H:%M} {trip_activity.zone})"
    )
