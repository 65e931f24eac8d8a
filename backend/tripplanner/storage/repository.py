from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Optional

from tripplanner.models.domain import Activity, Trip, TripActivity


class InMemoryRepository:
    def __init__(self) -> None:
        self.activities: Dict[int, Activity] = {}
        self.trips: Dict[int, Trip] = {}
        self.trip_activities: Dict[int, TripActivity] = {}

    def next_id(self, table: Dict[int, object]) -> int:
        return max(table, default=0) + 1

    def save_activity(self, activity: Activity) -> Activity:
        self.activities[activity.id] = activity
        return activity

    def get_activity(self, activity_id: int) -> Optional[Activity]:
        return self.activities.get(activity_id)

    def list_activities(self) -> List[Activity]:
        return list(self.activities.values())

    def save_trip(self, trip: Trip) -> Trip:
        self.trips[trip.id] = trip
        return trip

    def get_trip(self, trip_id: int) -> Optional[Trip]:
        return self.trips.get(trip_id)

    def save_trip_activity(self, trip_activity: TripActivity) -> TripActivity:
        self.trip_activities[trip_activity.id] = trip_activity
        return trip_activity

    def get_trip_activity(self, trip_activity_id: int) -> Optional[TripActivity]:
        return self.trip_activities.get(trip_activity_id)

    def delete_trip_activity(self, trip_activity_id: int) -> bool:
        return self.trip_activities.pop(trip_activity_id, None) is not None

    def list_trip_activities(self, trip_id: int) -> List[TripActivity]:
        """Scheduled items of a trip with their activity re-attached from the catalog."""
        items = []
        for ta in self.trip_activities.values():
            if ta.trip_id != trip_id:
                continue
            if ta.activity_id is not None:
                ta = replace(ta, activity=self.activities.get(ta.activity_id, ta.activity))
            items.append(ta)
        return items
