from tripplanner.itinerary.budget import summarize_budget
from tripplanner.itinerary.overlaps import find_overlaps
from tripplanner.itinerary.ranker import composite_score, rank
from tripplanner.itinerary.time_window import parse_clock_time, parse_day_range
from tripplanner.itinerary.timeline import build_timeline
from tripplanner.itinerary.venue_hours import check_conflict

__all__ = [
    "build_timeline",
    "check_conflict",
    "composite_score",
    "find_overlaps",
    "parse_clock_time",
    "parse_day_range",
    "rank",
    "summarize_budget",
]
