from datetime import date

from tripplanner.itinerary.budget import summarize_budget
from tripplanner.models.domain import Activity, Trip, TripActivity


def _item(id, planned_date, cost, actual=None, with_activity=True):
    activity = Activity(id=id, name=f"A{id}", category="museum", estimated_cost=cost) if with_activity else None
    return TripActivity(
        id=id,
        trip_id=1,
        activity_id=id,
        activity=activity,
        planned_date=planned_date,
        start_time="10:00",
        actual_cost=actual,
    )


def test_budget_counts_only_valid_items():
    trip = Trip(id=1, name="T", start_date=date(2025, 6, 1), end_date=date(2025, 6, 3), budget=100.0)
    items = [
        _item(1, date(2025, 6, 1), 30.0, actual=25.0),
        _item(2, date(2025, 6, 3), None),
        _item(3, date(2025, 6, 4), 500.0),
        _item(4, date(2025, 6, 2), 999.0, with_activity=False),
    ]
    summary = summarize_budget(trip, items)

    assert summary.estimated_spend == 30.0
    assert summary.actual_spend == 25.0
    assert summary.remaining == 70.0
    assert not summary.over_budget
    assert summary.used_percent == 30.0
    assert summary.activity_count == 2


def test_over_budget_caps_percentage():
    trip = Trip(id=1, name="T", start_date=date(2025, 6, 1), end_date=date(2025, 6, 1), budget=50.0)
    summary = summarize_budget(trip, [_item(1, date(2025, 6, 1), 80.0)])
    assert summary.over_budget
    assert summary.remaining == -30.0
    assert summary.used_percent == 100.0


def test_zero_budget_has_no_percentage():
    trip = Trip(id=1, name="T", start_date=date(2025, 6, 1), end_date=date(2025, 6, 1), budget=0.0)
    summary = summarize_budget(trip, [_item(1, date(2025, 6, 1), 0.0)])
    assert summary.used_percent == 0.0
    assert not summary.over_budget
