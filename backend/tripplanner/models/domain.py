from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence, Union

DEFAULT_TIMEZONE = "UTC"

# Raw opening hours as delivered by the fetch layer: a JSON-encoded list of
# seven weekday lines, or the already decoded list.
OpeningHours = Union[str, Sequence[str]]


@dataclass
class Activity:
    id: int
    name: str
    category: str
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    estimated_cost: Optional[float] = None
    duration_minutes: Optional[int] = None
    opening_hours: Optional[OpeningHours] = None
    address: Optional[str] = None
    place_id: Optional[str] = None
    description: Optional[str] = None
    photo_url: Optional[str] = None


@dataclass
class Trip:
    id: int
    name: str
    start_date: date
    end_date: date
    budget: float = 0.0

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass
class TripActivity:
    id: int
    trip_id: int
    activity_id: Optional[int]
    planned_date: date
    start_time: str
    activity: Optional[Activity] = None
    duration_minutes: Optional[int] = None
    timezone: Optional[str] = None
    notes: Optional[str] = None
    actual_cost: Optional[float] = None

    @property
    def zone(self) -> str:
        return self.timezone or DEFAULT_TIMEZONE

    @property
    def effective_duration(self) -> int:
        if self.duration_minutes is not None:
            return self.duration_minutes
        if self.activity is not None and self.activity.duration_minutes is not None:
            return self.activity.duration_minutes
        return 0

    @property
    def display_name(self) -> str:
        return self.activity.name if self.activity else f"Scheduled item {self.id}"


@dataclass
class RankedPage:
    items: List[Activity]
    total_count: int
    page: int
    page_size: int
    has_more: bool = False
    category: str = "all"
    query: str = ""


@dataclass(frozen=True)
class ConflictResult:
    in_conflict: bool
    reason: Optional[str] = None


NO_CONFLICT = ConflictResult(in_conflict=False)


@dataclass
class TimelineEntry:
    trip_activity: TripActivity
    conflict: ConflictResult
    duration_minutes: int


@dataclass
class TimelineGroup:
    date: date
    timezone: str
    entries: List[TimelineEntry] = field(default_factory=list)
    total_duration_minutes: int = 0
    total_estimated_cost: float = 0.0

    @property
    def activities(self) -> List[TripActivity]:
        return [entry.trip_activity for entry in self.entries]

    @property
    def count(self) -> int:
        return len(self.entries)


@dataclass
class TimelineResult:
    valid_groups: List[TimelineGroup]
    invalid_by_date: Dict[date, List[TripActivity]]
    unrenderable: List[TripActivity] = field(default_factory=list)
    # venue-hours result per out-of-range item, keyed by TripActivity.id
    invalid_conflicts: Dict[int, ConflictResult] = field(default_factory=dict)


@dataclass
class BudgetSummary:
    budget: float
    estimated_spend: float
    actual_spend: float
    remaining: float
    over_budget: bool
    used_percent: float
    activity_count: int


@dataclass
class Overlap:
    first: TripActivity
    second: TripActivity
