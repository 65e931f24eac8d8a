from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from tripplanner.itinerary.categories import format_cost, format_duration
from tripplanner.itinerary.overlaps import is_known_timezone
from tripplanner.itinerary.ranker import category_label, composite_score
from tripplanner.models.domain import (
    Activity,
    BudgetSummary,
    ConflictResult,
    RankedPage,
    TimelineEntry,
    TimelineGroup,
    TimelineResult,
    Trip,
    TripActivity,
)


class ActivitySchema(BaseModel):
    id: int
    name: str
    category: str
    category_label: str
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    estimated_cost: Optional[float] = None
    duration_minutes: Optional[int] = None
    address: Optional[str] = None
    place_id: Optional[str] = None
    description: Optional[str] = None
    photo_url: Optional[str] = None
    score: float

    @classmethod
    def from_domain(cls, obj: Activity) -> "ActivitySchema":
        return cls(
            id=obj.id,
            name=obj.name,
            category=obj.category,
            category_label=category_label(obj.category),
            rating=obj.rating,
            user_ratings_total=obj.user_ratings_total,
            estimated_cost=obj.estimated_cost,
            duration_minutes=obj.duration_minutes,
            address=obj.address,
            place_id=obj.place_id,
            description=obj.description,
            photo_url=obj.photo_url,
            score=round(composite_score(obj), 4),
        )


class CustomActivityRequest(BaseModel):
    name: str = Field(min_length=1)
    category: str = "custom"
    description: Optional[str] = None
    address: Optional[str] = None
    estimated_cost: Optional[float] = Field(None, ge=0)
    duration_minutes: Optional[int] = Field(None, gt=0)
    opening_hours: Optional[List[str]] = None


class RankedPageSchema(BaseModel):
    items: List[ActivitySchema]
    total_count: int
    page: int
    page_size: int
    has_more: bool
    category: str
    query: str

    @classmethod
    def from_domain(cls, obj: RankedPage) -> "RankedPageSchema":
        return cls(
            items=[ActivitySchema.from_domain(a) for a in obj.items],
            total_count=obj.total_count,
            page=obj.page,
            page_size=obj.page_size,
            has_more=obj.has_more,
            category=obj.category,
            query=obj.query,
        )


class TripRequest(BaseModel):
    name: str
    start_date: date
    end_date: date
    budget: float = Field(0.0, ge=0)

    @field_validator("end_date")
    @classmethod
    def end_not_before_start(cls, value: date, info) -> date:
        start = info.data.get("start_date")
        if start and value < start:
            raise ValueError("end_date must not be before start_date")
        return value


class TripSchema(BaseModel):
    id: int
    name: str
    start_date: date
    end_date: date
    budget: float

    @classmethod
    def from_domain(cls, obj: Trip) -> "TripSchema":
        return cls(
            id=obj.id,
            name=obj.name,
            start_date=obj.start_date,
            end_date=obj.end_date,
            budget=obj.budget,
        )


CLOCK_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


def _known_timezone(value: Optional[str]) -> Optional[str]:
    if value is not None and not is_known_timezone(value):
        raise ValueError(f"unknown timezone {value!r}")
    return value


class ScheduleRequest(BaseModel):
    activity_id: int
    planned_date: date
    start_time: str = Field(pattern=CLOCK_PATTERN)
    duration_minutes: Optional[int] = Field(None, ge=0)
    timezone: Optional[str] = None
    notes: Optional[str] = None
    actual_cost: Optional[float] = Field(None, ge=0)

    @field_validator("timezone")
    @classmethod
    def known_timezone(cls, value: Optional[str]) -> Optional[str]:
        return _known_timezone(value)


class ScheduleUpdateRequest(BaseModel):
    planned_date: Optional[date] = None
    start_time: Optional[str] = Field(None, pattern=CLOCK_PATTERN)
    duration_minutes: Optional[int] = Field(None, ge=0)
    timezone: Optional[str] = None
    notes: Optional[str] = None
    actual_cost: Optional[float] = Field(None, ge=0)

    @field_validator("timezone")
    @classmethod
    def known_timezone(cls, value: Optional[str]) -> Optional[str]:
        return _known_timezone(value)


class ConflictSchema(BaseModel):
    in_conflict: bool
    reason: Optional[str] = None

    @classmethod
    def from_domain(cls, obj: ConflictResult) -> "ConflictSchema":
        return cls(in_conflict=obj.in_conflict, reason=obj.reason)


class TripActivitySchema(BaseModel):
    id: int
    trip_id: int
    activity_id: Optional[int] = None
    activity_name: Optional[str] = None
    planned_date: date
    start_time: str
    duration_minutes: Optional[int] = None
    timezone: str
    notes: Optional[str] = None
    actual_cost: Optional[float] = None

    @classmethod
    def from_domain(cls, obj: TripActivity) -> "TripActivitySchema":
        return cls(
            id=obj.id,
            trip_id=obj.trip_id,
            activity_id=obj.activity_id,
            activity_name=obj.activity.name if obj.activity else None,
            planned_date=obj.planned_date,
            start_time=obj.start_time,
            duration_minutes=obj.duration_minutes,
            timezone=obj.zone,
            notes=obj.notes,
            actual_cost=obj.actual_cost,
        )


class ScheduleResponse(BaseModel):
    scheduled: TripActivitySchema
    conflict: ConflictSchema
    overlaps: List[str] = Field(default_factory=list)
    in_trip_range: bool


class TimelineEntrySchema(BaseModel):
    trip_activity: TripActivitySchema
    conflict: ConflictSchema
    duration_minutes: int
    duration_label: str
    estimated_cost: Optional[float] = None

    @classmethod
    def from_domain(cls, obj: TimelineEntry) -> "TimelineEntrySchema":
        activity = obj.trip_activity.activity
        return cls(
            trip_activity=TripActivitySchema.from_domain(obj.trip_activity),
            conflict=ConflictSchema.from_domain(obj.conflict),
            duration_minutes=obj.duration_minutes,
            duration_label=format_duration(obj.duration_minutes),
            estimated_cost=activity.estimated_cost if activity else None,
        )


class TimelineGroupSchema(BaseModel):
    date: date
    timezone: str
    entries: List[TimelineEntrySchema]
    count: int
    total_duration_minutes: int
    total_duration_label: str
    total_estimated_cost: float
    total_estimated_cost_label: str

    @classmethod
    def from_domain(cls, obj: TimelineGroup) -> "TimelineGroupSchema":
        return cls(
            date=obj.date,
            timezone=obj.timezone,
            entries=[TimelineEntrySchema.from_domain(e) for e in obj.entries],
            count=obj.count,
            total_duration_minutes=obj.total_duration_minutes,
            total_duration_label=format_duration(obj.total_duration_minutes),
            total_estimated_cost=obj.total_estimated_cost,
            total_estimated_cost_label=format_cost(obj.total_estimated_cost),
        )


class TimelineSchema(BaseModel):
    valid_groups: List[TimelineGroupSchema]
    invalid_by_date: Dict[date, List[TripActivitySchema]]
    unrenderable: List[TripActivitySchema]
    invalid_conflicts: Dict[int, ConflictSchema] = Field(default_factory=dict)
    overlaps: List[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, obj: TimelineResult, overlaps: Optional[List[str]] = None) -> "TimelineSchema":
        return cls(
            valid_groups=[TimelineGroupSchema.from_domain(g) for g in obj.valid_groups],
            invalid_by_date={
                day: [TripActivitySchema.from_domain(ta) for ta in items]
                for day, items in obj.invalid_by_date.items()
            },
            unrenderable=[TripActivitySchema.from_domain(ta) for ta in obj.unrenderable],
            invalid_conflicts={
                ta_id: ConflictSchema.from_domain(result) for ta_id, result in obj.invalid_conflicts.items()
            },
            overlaps=overlaps or [],
        )


class BudgetSummarySchema(BaseModel):
    budget: float
    estimated_spend: float
    actual_spend: float
    remaining: float
    over_budget: bool
    used_percent: float
    activity_count: int

    @classmethod
    def from_domain(cls, obj: BudgetSummary) -> "BudgetSummarySchema":
        return cls(
            budget=obj.budget,
            estimated_spend=obj.estimated_spend,
            actual_spend=obj.actual_spend,
            remaining=obj.remaining,
            over_budget=obj.over_budget,
            used_percent=obj.used_percent,
            activity_count=obj.activity_count,
        )
