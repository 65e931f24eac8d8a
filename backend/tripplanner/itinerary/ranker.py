from __future__ import annotations

import math
import unicodedata
from typing import Iterable, List, Sequence, Tuple

from tripplanner.models.domain import Activity, RankedPage

ALL_CATEGORIES = "all"
DEFAULT_PAGE_SIZE = 20
MIN_SEARCH_LENGTH = 2


def composite_score(activity: Activity) -> float:
    """rating * ln(review count + 1); zero when the activity has no ratings."""
    rating = activity.rating or 0.0
    reviews = max(activity.user_ratings_total or 0, 0)
    return rating * math.log(reviews + 1)


def collation_key(name: str) -> Tuple[str, str]:
    folded = (name or "").casefold()
    decomposed = unicodedata.normalize("NFKD", folded)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base, folded


def _sort_key(activity: Activity) -> tuple:
    return (-composite_score(activity), collation_key(activity.name), activity.id)


def effective_query(search_query: str | None, min_length: int = MIN_SEARCH_LENGTH) -> str:
    query = (search_query or "").strip()
    return query if len(query) >= min_length else ""


def filter_activities(
    activities: Iterable[Activity],
    category: str = ALL_CATEGORIES,
    query: str = "",
) -> List[Activity]:
    needle = query.casefold()
    selected = []
    for activity in activities:
        if category != ALL_CATEGORIES and activity.category != category:
            continue
        if needle and needle not in (activity.name or "").casefold():
            continue
        selected.append(activity)
    return selected


def rank(
    activities: Sequence[Activity],
    category: str = ALL_CATEGORIES,
    search_query: str = "",
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    min_search_length: int = MIN_SEARCH_LENGTH,
) -> RankedPage:
    """
    Filter, order and slice activities into one page.

    Pages are 1-indexed. A page outside ``[1, ceil(total / page_size)]``
    comes back with no items rather than raising.
    """
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    category = category or ALL_CATEGORIES
    query = effective_query(search_query, min_search_length)

    ordered = sorted(filter_activities(activities, category, query), key=_sort_key)
    total = len(ordered)
    items: List[Activity] = []
    if page >= 1:
        start = (page - 1) * page_size
        items = ordered[start:start + page_size]
    has_more = page >= 1 and page * page_size < total

    return RankedPage(
        items=items,
        total_count=total,
        page=page,
        page_size=page_size,
        has_more=has_more,
        category=category,
        query=query,
    )


def list_categories(activities: Iterable[Activity]) -> List[str]:
    return sorted({a.category for a in activities if a.category})


def category_label(category: str) -> str:
    return category.replace("_", " ")
