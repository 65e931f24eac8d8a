from typing import List

from fastapi import APIRouter, Depends, Query

from tripplanner.api import get_repository
from tripplanner.itinerary.ranker import ALL_CATEGORIES
from tripplanner.models.schemas import ActivitySchema, CustomActivityRequest, RankedPageSchema
from tripplanner.services.activity_service import ActivityService
from tripplanner.storage.repository import InMemoryRepository

router = APIRouter()


def get_activity_service(
    repository: InMemoryRepository = Depends(get_repository),
) -> ActivityService:
    return ActivityService(repository=repository)


@router.get("/", response_model=RankedPageSchema)
def browse_activities(
    category: str = ALL_CATEGORIES,
    q: str = "",
    page: int = 1,
    page_size: int | None = Query(None, ge=1, le=100),
    service: ActivityService = Depends(get_activity_service),
) -> RankedPageSchema:
    return service.browse(category=category, search_query=q, page=page, page_size=page_size)


@router.get("/categories", response_model=List[str])
def list_categories(service: ActivityService = Depends(get_activity_service)) -> List[str]:
    return service.categories()


@router.post("/", response_model=ActivitySchema, status_code=201)
def create_activity(
    request: CustomActivityRequest,
    service: ActivityService = Depends(get_activity_service),
) -> ActivitySchema:
    return service.create_custom_activity(request)
