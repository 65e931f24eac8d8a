"""
Advisory check of a scheduled activity against its venue's opening hours.

The checker is never a validation gate: missing or ambiguous data resolves to
"not in conflict" and no input makes it raise.
"""
from __future__ import annotations

import logging
from typing import Optional

from tripplanner.itinerary.time_window import (
    CLOSED,
    MINUTES_PER_DAY,
    RANGE,
    DayHours,
    format_minutes,
    hours_for_weekday,
    parse_clock_time,
    parse_opening_hours,
)
from tripplanner.models.domain import NO_CONFLICT, ConflictResult, TripActivity

logger = logging.getLogger(__name__)

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def weekday_name(trip_activity: TripActivity) -> str:
    return WEEKDAYS[trip_activity.planned_date.weekday()]


def previous_weekday_name(trip_activity: TripActivity) -> str:
    return WEEKDAYS[(trip_activity.planned_date.weekday() - 1) % 7]


def window_fits(start: int, end: int, hours: DayHours, overnight_compat: bool = False) -> bool:
    """True when ``[start, end)`` lies inside the venue's ``[open, close)`` range."""
    opens, closes = hours.open_minute, hours.close_minute
    if overnight_compat or not hours.spans_midnight:
        return start >= opens and end <= closes
    # Evening opening that runs into the next day's early hours.
    return start >= opens and end <= closes + MINUTES_PER_DAY


def fits_previous_tail(start: int, end: int, previous: Optional[DayHours]) -> bool:
    """True when ``[start, end)`` falls in the after-midnight part of yesterday's hours."""
    if previous is None or not previous.spans_midnight:
        return False
    return start < previous.close_minute and end <= previous.close_minute


def check_conflict(trip_activity: TripActivity, overnight_compat: bool = False) -> ConflictResult:
    try:
        return _check(trip_activity, overnight_compat)
    except (AttributeError, TypeError, ValueError) as exc:
        logger.warning("Venue hours check failed open for %s: %s", getattr(trip_activity, "id", None), exc)
        return NO_CONFLICT


def _check(trip_activity: TripActivity, overnight_compat: bool) -> ConflictResult:
    activity = trip_activity.activity
    if activity is None:
        return NO_CONFLICT
    lines = parse_opening_hours(activity.opening_hours)
    if not lines:
        return NO_CONFLICT

    starts = parse_clock_time(trip_activity.start_time)
    start = end = None
    if starts is not None:
        start = starts.minute_of_day
        end = start + max(trip_activity.effective_duration, 0)
        if not overnight_compat:
            previous = hours_for_weekday(lines, previous_weekday_name(trip_activity))
            if fits_previous_tail(start, end, previous):
                return NO_CONFLICT

    weekday = weekday_name(trip_activity)
    hours = hours_for_weekday(lines, weekday)
    if hours is None:
        logger.debug("No %s line in opening hours of activity %s", weekday, activity.id)
        return NO_CONFLICT
    if hours.kind == CLOSED:
        return ConflictResult(in_conflict=True, reason=f"venue closed on {weekday}")
    if hours.kind != RANGE:
        logger.debug("Unparsed %s hours for activity %s", weekday, activity.id)
        return NO_CONFLICT

    if start is None:
        return NO_CONFLICT
    if window_fits(start, end, hours, overnight_compat):
        return NO_CONFLICT

    return ConflictResult(
        in_conflict=True,
        reason=(
            f"scheduled {format_minutes(start)}-{format_minutes(end)} is outside "
            f"opening hours on {weekday} ({hours.open_text} – {hours.close_text})"
        ),
    )
