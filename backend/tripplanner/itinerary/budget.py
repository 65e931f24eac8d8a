from __future__ import annotations

from typing import Iterable

from tripplanner.models.domain import BudgetSummary, Trip, TripActivity


def summarize_budget(trip: Trip, trip_activities: Iterable[TripActivity]) -> BudgetSummary:
    """Planned and actual spend over the in-range items that still have an activity."""
    counted = [
        ta for ta in trip_activities if ta.activity is not None and trip.contains(ta.planned_date)
    ]
    estimated = sum(ta.activity.estimated_cost or 0.0 for ta in counted)
    actual = sum(ta.actual_cost or 0.0 for ta in counted)
    budget = trip.budget or 0.0
    used_percent = min(estimated / budget * 100.0, 100.0) if budget > 0 else 0.0
    return BudgetSummary(
        budget=budget,
        estimated_spend=estimated,
        actual_spend=actual,
        remaining=budget - estimated,
        over_budget=estimated > budget,
        used_percent=round(used_percent, 2),
        activity_count=len(counted),
    )
