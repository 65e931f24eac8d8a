import json
import logging
from typing import List, Optional

from tripplanner.core.config import settings
from tripplanner.itinerary.categories import default_cost, default_duration
from tripplanner.itinerary.ranker import ALL_CATEGORIES, list_categories, rank
from tripplanner.models.domain import Activity
from tripplanner.models.schemas import ActivitySchema, CustomActivityRequest, RankedPageSchema
from tripplanner.storage.repository import InMemoryRepository

logger = logging.getLogger(__name__)


class ActivityService:
    def __init__(self, repository: InMemoryRepository):
        self.repository = repository

    def browse(
        self,
        category: str = ALL_CATEGORIES,
        search_query: str = "",
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> RankedPageSchema:
        result = rank(
            self.repository.list_activities(),
            category=category,
            search_query=search_query,
            page=page,
            page_size=page_size or settings.activity_page_size,
            min_search_length=settings.min_search_length,
        )
        logger.debug(
            "Ranked %d activities (category=%s, query=%r, page=%d)",
            result.total_count,
            result.category,
            result.query,
            result.page,
        )
        return RankedPageSchema.from_domain(result)

    def categories(self) -> List[str]:
        return list_categories(self.repository.list_activities())

    def create_custom_activity(self, request: CustomActivityRequest) -> ActivitySchema:
        """Store a user-defined activity, filling duration and cost from its category."""
        duration = request.duration_minutes
        if duration is None:
            duration = default_duration(request.category)
        cost = request.estimated_cost
        if cost is None:
            cost = default_cost(request.category)

        activity = Activity(
            id=self.repository.next_id(self.repository.activities),
            name=request.name,
            category=request.category,
            estimated_cost=cost,
            duration_minutes=duration,
            opening_hours=json.dumps(request.opening_hours) if request.opening_hours else None,
            address=request.address,
            description=request.description,
        )
        self.repository.save_activity(activity)
        logger.info("Created custom activity %s (%s)", activity.id, activity.category)
        return ActivitySchema.from_domain(activity)
