import json
import logging
from datetime import date

from tripplanner.itinerary.venue_hours import WEEKDAYS
from tripplanner.models.domain import Activity, Trip, TripActivity
from tripplanner.storage.repository import InMemoryRepository

logger = logging.getLogger(__name__)


def _hours(open_text: str, close_text: str, closed_on: tuple = ()) -> str:
    return json.dumps(
        [
            f"{day}: Closed" if day in closed_on else f"{day}: {open_text} – {close_text}"
            for day in WEEKDAYS
        ]
    )


def seed_demo_data(repository: InMemoryRepository) -> None:
    """Load a small Lisbon catalog and one trip so the API has something to show."""
    catalog = [
        Activity(1, "Alfama walking tour", "tourist_attraction", 4.7, 1830, 20.0, 120,
                 _hours("9:00 AM", "6:00 PM"), "Largo do Chafariz de Dentro"),
        Activity(2, "Museu Calouste Gulbenkian", "museum", 4.8, 21450, 15.0, 180,
                 _hours("10:00 AM", "6:00 PM", closed_on=("Tuesday",)), "Av. de Berna 45A"),
        Activity(3, "Time Out Market", "restaurant", 4.5, 68210, 30.0, 90,
                 _hours("10:00 AM", "12:00 AM"), "Av. 24 de Julho 49"),
        Activity(4, "Pensão Amor", "nightclub", 4.3, 5120, 40.0, 180,
                 _hours("6:00 PM", "2:00 AM", closed_on=("Sunday", "Monday")), "R. do Alecrim 19"),
        Activity(5, "Jardim da Estrela", "park", 4.6, 15300, None, 60, None, "Praça da Estrela"),
    ]
    for activity in catalog:
        repository.save_activity(activity)

    trip = repository.save_trip(
        Trip(id=1, name="Lisbon long weekend", start_date=date(2025, 6, 5), end_date=date(2025, 6, 8), budget=250.0)
    )
    repository.save_trip_activity(
        TripActivity(1, trip.id, 1, date(2025, 6, 5), "10:00", timezone="Europe/Lisbon")
    )
    repository.save_trip_activity(
        TripActivity(2, trip.id, 2, date(2025, 6, 6), "11:00", timezone="Europe/Lisbon")
    )
    repository.save_trip_activity(
        TripActivity(3, trip.id, 4, date(2025, 6, 7), "23:00", duration_minutes=150, timezone="Europe/Lisbon")
    )
    logger.info("Seeded %d demo activities and trip %s", len(catalog), trip.id)
