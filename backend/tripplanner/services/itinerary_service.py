import logging
from dataclasses import replace

from fastapi import HTTPException

from tripplanner.core.config import settings
from tripplanner.itinerary.budget import summarize_budget
from tripplanner.itinerary.overlaps import describe_overlap, find_overlaps, overlaps_with
from tripplanner.itinerary.timeline import build_timeline
from tripplanner.itinerary.venue_hours import check_conflict
from tripplanner.models.domain import Trip, TripActivity
from tripplanner.models.schemas import (
    BudgetSummarySchema,
    ConflictSchema,
    ScheduleRequest,
    ScheduleResponse,
    ScheduleUpdateRequest,
    TimelineSchema,
    TripActivitySchema,
    TripRequest,
    TripSchema,
)
from tripplanner.storage.repository import InMemoryRepository

logger = logging.getLogger(__name__)


class ItineraryService:
    def __init__(self, repository: InMemoryRepository):
        self.repository = repository

    def _require_trip(self, trip_id: int) -> Trip:
        trip = self.repository.get_trip(trip_id)
        if not trip:
            raise HTTPException(status_code=404, detail="Trip not found")
        return trip

    def create_trip(self, request: TripRequest) -> TripSchema:
        trip = Trip(
            id=self.repository.next_id(self.repository.trips),
            name=request.name,
            start_date=request.start_date,
            end_date=request.end_date,
            budget=request.budget,
        )
        self.repository.save_trip(trip)
        logger.info("Created trip %s (%s to %s)", trip.id, trip.start_date, trip.end_date)
        return TripSchema.from_domain(trip)

    def schedule(self, trip_id: int, request: ScheduleRequest) -> ScheduleResponse:
        """
        Persist a schedule entry and report advisory problems with it.

        Entries outside the trip dates, at closed venues or overlapping other
        entries are still stored; the response carries the warnings.
        """
        trip = self._require_trip(trip_id)
        activity = self.repository.get_activity(request.activity_id)
        if not activity:
            raise HTTPException(status_code=404, detail="Activity not found")

        trip_activity = TripActivity(
            id=self.repository.next_id(self.repository.trip_activities),
            trip_id=trip.id,
            activity_id=activity.id,
            activity=activity,
            planned_date=request.planned_date,
            start_time=request.start_time,
            duration_minutes=request.duration_minutes,
            timezone=request.timezone or settings.default_timezone,
            notes=request.notes,
            actual_cost=request.actual_cost,
        )
        response = self._store_with_warnings(trip, trip_activity)
        logger.info(
            "Scheduled activity %s on trip %s for %s %s",
            activity.id,
            trip.id,
            trip_activity.planned_date,
            trip_activity.start_time,
        )
        return response

    def _store_with_warnings(self, trip: Trip, trip_activity: TripActivity) -> ScheduleResponse:
        clashing = overlaps_with(trip_activity, self.repository.list_trip_activities(trip.id))
        self.repository.save_trip_activity(trip_activity)
        conflict = check_conflict(trip_activity, overnight_compat=settings.overnight_hours_compat)
        return ScheduleResponse(
            scheduled=TripActivitySchema.from_domain(trip_activity),
            conflict=ConflictSchema.from_domain(conflict),
            overlaps=[describe_overlap(other) for other in clashing],
            in_trip_range=trip.contains(trip_activity.planned_date),
        )

    def update(self, trip_id: int, trip_activity_id: int, request: ScheduleUpdateRequest) -> ScheduleResponse:
        """Apply a partial edit to a schedule entry and re-check it like a new one."""
        trip = self._require_trip(trip_id)
        item = self._require_trip_activity(trip, trip_activity_id)
        changes = request.model_dump(exclude_unset=True)
        for required in ("planned_date", "start_time"):
            if changes.get(required, "") is None:
                del changes[required]
        if "timezone" in changes and changes["timezone"] is None:
            changes["timezone"] = settings.default_timezone

        activity = self.repository.get_activity(item.activity_id) if item.activity_id is not None else None
        updated = replace(item, activity=activity or item.activity, **changes)
        response = self._store_with_warnings(trip, updated)
        logger.info("Updated scheduled activity %s on trip %s: %s", updated.id, trip.id, sorted(changes))
        return response

    def _require_trip_activity(self, trip: Trip, trip_activity_id: int) -> TripActivity:
        item = self.repository.get_trip_activity(trip_activity_id)
        if not item or item.trip_id != trip.id:
            raise HTTPException(status_code=404, detail="Scheduled activity not found")
        return item

    def unschedule(self, trip_id: int, trip_activity_id: int) -> None:
        trip = self._require_trip(trip_id)
        self._require_trip_activity(trip, trip_activity_id)
        self.repository.delete_trip_activity(trip_activity_id)
        logger.info("Removed scheduled activity %s from trip %s", trip_activity_id, trip_id)

    def timeline(self, trip_id: int) -> TimelineSchema:
        trip = self._require_trip(trip_id)
        items = self.repository.list_trip_activities(trip.id)
        result = build_timeline(trip, items, overnight_compat=settings.overnight_hours_compat)
        in_range = [ta for group in result.valid_groups for ta in group.activities]
        overlaps = [
            f"{describe_overlap(o.first)} overlaps {describe_overlap(o.second)}"
            for o in find_overlaps(in_range)
        ]
        return TimelineSchema.from_domain(result, overlaps=overlaps)

    def budget(self, trip_id: int) -> BudgetSummarySchema:
        trip = self._require_trip(trip_id)
        summary = summarize_budget(trip, self.repository.list_trip_activities(trip.id))
        return BudgetSummarySchema.from_domain(summary)
