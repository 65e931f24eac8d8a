from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Tuple

from tripplanner.itinerary.venue_hours import check_conflict
from tripplanner.models.domain import (
    TimelineEntry,
    TimelineGroup,
    TimelineResult,
    Trip,
    TripActivity,
)

logger = logging.getLogger(__name__)


def partition_by_range(
    trip: Trip, trip_activities: Iterable[TripActivity]
) -> Tuple[List[TripActivity], List[TripActivity]]:
    valid: List[TripActivity] = []
    invalid: List[TripActivity] = []
    for item in trip_activities:
        (valid if trip.contains(item.planned_date) else invalid).append(item)
    return valid, invalid


def _build_group(
    key: Tuple[date, str], items: List[TripActivity], overnight_compat: bool
) -> TimelineGroup:
    planned_date, zone = key
    entries = [
        TimelineEntry(
            trip_activity=item,
            conflict=check_conflict(item, overnight_compat=overnight_compat),
            duration_minutes=item.effective_duration,
        )
        for item in sorted(items, key=lambda ta: ta.start_time or "")
    ]
    return TimelineGroup(
        date=planned_date,
        timezone=zone,
        entries=entries,
        total_duration_minutes=sum(e.duration_minutes for e in entries),
        total_estimated_cost=sum(
            e.trip_activity.activity.estimated_cost or 0.0 for e in entries
        ),
    )


def group_valid(
    trip_activities: Iterable[TripActivity], overnight_compat: bool = False
) -> List[TimelineGroup]:
    buckets: Dict[Tuple[date, str], List[TripActivity]] = defaultdict(list)
    for item in trip_activities:
        buckets[(item.planned_date, item.zone)].append(item)
    return [_build_group(key, buckets[key], overnight_compat) for key in sorted(buckets)]


def group_invalid(trip_activities: Iterable[TripActivity]) -> Dict[date, List[TripActivity]]:
    buckets: Dict[date, List[TripActivity]] = defaultdict(list)
    for item in trip_activities:
        buckets[item.planned_date].append(item)
    return {day: buckets[day] for day in sorted(buckets)}


def build_timeline(
    trip: Trip, trip_activities: Iterable[TripActivity], overnight_compat: bool = False
) -> TimelineResult:
    """
    Group a trip's scheduled activities into a day-by-day timeline.

    Items without their activity record are reported in ``unrenderable``.
    The rest are split by the trip's inclusive date range: in-range items are
    grouped by (date, timezone), out-of-range ones by date only. Every
    renderable item gets a venue-hours annotation; out-of-range results live
    in ``invalid_conflicts``.
    """
    renderable: List[TripActivity] = []
    unrenderable: List[TripActivity] = []
    for item in trip_activities:
        (renderable if item.activity is not None else unrenderable).append(item)
    if unrenderable:
        logger.warning(
            "Trip %s has %d scheduled item(s) without activity data",
            trip.id,
            len(unrenderable),
        )

    valid, invalid = partition_by_range(trip, renderable)
    return TimelineResult(
        valid_groups=group_valid(valid, overnight_compat=overnight_compat),
        invalid_by_date=group_invalid(invalid),
        unrenderable=unrenderable,
        invalid_conflicts={
            item.id: check_conflict(item, overnight_compat=overnight_compat) for item in invalid
        },
    )
