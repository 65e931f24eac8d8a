from typing import Dict, Optional

CUSTOM = "custom"

# Typical visit length in minutes.
CATEGORY_DURATIONS: Dict[str, int] = {
    "tourist_attraction": 120,
    "museum": 180,
    "restaurant": 90,
    "park": 60,
    "shopping_mall": 120,
    "amusement_park": 360,
    "zoo": 240,
    "aquarium": 150,
    "church": 45,
    "market": 90,
    "viewpoint": 30,
    "beach": 180,
    "hiking_trail": 240,
    "spa": 120,
    "nightclub": 180,
    "theater": 150,
    "stadium": 180,
    CUSTOM: 120,
}

# Per-person estimate in dollars; 0 means free.
CATEGORY_COSTS: Dict[str, float] = {
    "tourist_attraction": 20.0,
    "museum": 15.0,
    "restaurant": 30.0,
    "park": 0.0,
    "shopping_mall": 50.0,
    "amusement_park": 50.0,
    "zoo": 25.0,
    "aquarium": 20.0,
    "church": 0.0,
    "market": 10.0,
    "viewpoint": 0.0,
    "beach": 0.0,
    "hiking_trail": 0.0,
    "spa": 80.0,
    "nightclub": 40.0,
    "theater": 35.0,
    "stadium": 40.0,
    CUSTOM: 0.0,
}


def default_duration(category: Optional[str]) -> int:
    return CATEGORY_DURATIONS.get((category or CUSTOM).lower(), CATEGORY_DURATIONS[CUSTOM])


def default_cost(category: Optional[str]) -> float:
    return CATEGORY_COSTS.get((category or CUSTOM).lower(), CATEGORY_COSTS[CUSTOM])


def is_known_category(category: Optional[str]) -> bool:
    return bool(category) and category.lower() in CATEGORY_DURATIONS


def format_duration(minutes: Optional[int]) -> str:
    if not minutes or minutes <= 0:
        return "0m"
    hours, rest = divmod(minutes, 60)
    if hours == 0:
        return f"{rest}m"
    if rest == 0:
        return f"{hours}h"
    return f"{hours}h {rest}m"


def format_cost(cost: Optional[float]) -> str:
    if not cost:
        return "Free"
    return f"${cost:.2f}"
