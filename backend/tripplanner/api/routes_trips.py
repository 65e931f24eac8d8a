from fastapi import APIRouter, Depends, Response

from tripplanner.api import get_repository
from tripplanner.models.schemas import (
    BudgetSummarySchema,
    ScheduleRequest,
    ScheduleResponse,
    ScheduleUpdateRequest,
    TimelineSchema,
    TripRequest,
    TripSchema,
)
from tripplanner.services.itinerary_service import ItineraryService
from tripplanner.storage.repository import InMemoryRepository

router = APIRouter()


def get_itinerary_service(
    repository: InMemoryRepository = Depends(get_repository),
) -> ItineraryService:
    return ItineraryService(repository=repository)


@router.post("/", response_model=TripSchema, status_code=201)
def create_trip(
    request: TripRequest,
    service: ItineraryService = Depends(get_itinerary_service),
) -> TripSchema:
    return service.create_trip(request)


@router.post("/{trip_id}/activities", response_model=ScheduleResponse, status_code=201)
def schedule_activity(
    trip_id: int,
    request: ScheduleRequest,
    service: ItineraryService = Depends(get_itinerary_service),
) -> ScheduleResponse:
    return service.schedule(trip_id=trip_id, request=request)


@router.patch("/{trip_id}/activities/{trip_activity_id}", response_model=ScheduleResponse)
def update_scheduled_activity(
    trip_id: int,
    trip_activity_id: int,
    request: ScheduleUpdateRequest,
    service: ItineraryService = Depends(get_itinerary_service),
) -> ScheduleResponse:
    return service.update(trip_id=trip_id, trip_activity_id=trip_activity_id, request=request)


@router.delete("/{trip_id}/activities/{trip_activity_id}", status_code=204)
def unschedule_activity(
    trip_id: int,
    trip_activity_id: int,
    service: ItineraryService = Depends(get_itinerary_service),
) -> Response:
    service.unschedule(trip_id=trip_id, trip_activity_id=trip_activity_id)
    return Response(status_code=204)


@router.get("/{trip_id}/timeline", response_model=TimelineSchema)
def get_timeline(
    trip_id: int, service: ItineraryService = Depends(get_itinerary_service)
) -> TimelineSchema:
    return service.timeline(trip_id=trip_id)


@router.get("/{trip_id}/budget", response_model=BudgetSummarySchema)
def get_budget(
    trip_id: int, service: ItineraryService = Depends(get_itinerary_service)
) -> BudgetSummarySchema:
    return service.budget(trip_id=trip_id)
