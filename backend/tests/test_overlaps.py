from datetime import date

from tripplanner.itinerary.overlaps import (
    describe_overlap,
    find_overlaps,
    is_known_timezone,
    overlaps_with,
    utc_window,
)
from tripplanner.models.domain import Activity, TripActivity


def _item(id, start, duration, timezone=None, planned_date=date(2025, 6, 3)):
    return TripActivity(
        id=id,
        trip_id=1,
        activity_id=id,
        activity=Activity(id=id, name=f"Stop {id}", category="museum"),
        planned_date=planned_date,
        start_time=start,
        duration_minutes=duration,
        timezone=timezone,
    )


def test_same_zone_overlap_is_half_open():
    morning = _item(1, "09:00", 60)
    touching = _item(2, "10:00", 30)
    clashing = _item(3, "09:30", 60)

    pairs = [(o.first.id, o.second.id) for o in find_overlaps([morning, touching, clashing])]
    assert pairs == [(1, 3), (2, 3)]


def test_overlap_is_compared_in_utc():
    # 15:00 in Paris (UTC+2 in June) is 09:00 in New York (UTC-4)
    paris = _item(1, "15:00", 60, "Europe/Paris")
    new_york = _item(2, "09:30", 30, "America/New_York")
    later = _item(3, "15:00", 60, "America/New_York")

    pairs = [(o.first.id, o.second.id) for o in find_overlaps([paris, new_york, later])]
    assert pairs == [(1, 2)]


def test_unusable_items_are_skipped():
    items = [
        _item(1, "09:00", 60, "Mars/Olympus_Mons"),
        _item(2, "09:00", 0),
        _item(3, "not a time", 60),
        _item(4, "09:00", 60),
    ]
    assert find_overlaps(items) == []


def test_overlaps_with_excludes_itself():
    candidate = _item(1, "09:00", 60)
    assert overlaps_with(candidate, [candidate, _item(2, "09:45", 15)])[0].id == 2


def test_describe_overlap():
    assert describe_overlap(_item(7, "09:00", 90, "Europe/Lisbon")) == "Stop 7 (2025-06-03 09:00-10:30 Europe/Lisbon)"
    assert describe_overlap(_item(8, "09:00", 0)) == "Stop 8 (time data incomplete)"


def test_zone_directories_are_not_zones():
    europe = _item(1, "09:00", 60, "Europe")
    america = _item(2, "09:15", 60, "America")
    assert utc_window(europe) is None
    assert find_overlaps([europe, america, _item(3, "09:30", 60)]) == []
    assert overlaps_with(_item(4, "09:00", 60), [europe]) == []
    assert describe_overlap(europe) == "Stop 1 (time data incomplete)"


def test_is_known_timezone():
    assert is_known_timezone("Europe/Lisbon")
    assert is_known_timezone("UTC")
    assert not is_known_timezone("Europe")
    assert not is_known_timezone("Mars/Olympus_Mons")
    assert not is_known_timezone("../etc/passwd")
