import pytest
import sys
from datetime import datetime, timezone
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import encore_export
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from encore_export.common.airports import Airport, AirportDirectory
from encore_export.core.models import (
    CrewMember,
    Flight,
    GuestListEntry,
    Hotel,
    HotelGuest,
    HotelRoom,
    ItineraryItem,
    ItineraryItemType,
    Passenger,
    Show,
    Tour,
    TourAggregate,
)

POSTER_URL = "https://example.com/poster.png"
FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def utc(year, month, day, hour=0, minute=0):
    """Shorthand for an aware UTC datetime."""
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def make_aggregate(**overrides) -> TourAggregate:
    """
    Build the sample tour used across the suite.

    Days (UTC):
        06-18: Leeds show, bus call, hotel check-in
        06-19: catering only
        06-20: Manchester show (empty guest list)
        06-22: LHR -> JFK flight only
    """
    tour = Tour(
        id="tour-1",
        owner_id="user-1",
        tour_name="World Tour 2025",
        artist="The Band",
        start_date=utc(2025, 6, 17),
        end_date=utc(2025, 6, 25),
        poster_url=POSTER_URL,
    )
    shows = (
        Show(
            id="show-1",
            tour_id="tour-1",
            date=utc(2025, 6, 18, 19),
            city="Leeds",
            venue_name="O2 Academy",
            venue_address="55 Cookridge St",
            country="GB",
            contact_name="Pat Venue",
            contact_phone="+44 113 000 0000",
            load_in=utc(2025, 6, 18, 14),
            sound_check=utc(2025, 6, 18, 16, 30),
            doors_open=utc(2025, 6, 18, 18, 30),
            headliner_set_time=utc(2025, 6, 18, 21),
        ),
        Show(
            id="show-2",
            tour_id="tour-1",
            date=utc(2025, 6, 20, 19),
            city="Manchester",
            venue_name="Albert Hall",
        ),
    )
    crew = (
        CrewMember("crew-1", "tour-1", "Alex Smith", ("Tour Manager",), "alex@example.com"),
        CrewMember("crew-2", "tour-1", "Sam Lee", ("FOH", "Production")),
    )
    flights = (
        Flight(
            id="flight-1",
            tour_id="tour-1",
            origin="LHR",
            destination="JFK",
            departure_time=utc(2025, 6, 22, 10),
            arrival_time=utc(2025, 6, 22, 18),
            airline="British Airways",
            flight_number="BA117",
            passengers=(Passenger("crew-1", "23kg"), Passenger("crew-gone")),
        ),
    )
    hotels = (
        Hotel(
            id="hotel-1",
            tour_id="tour-1",
            name="Quebecs",
            address="9 Quebec St",
            city="Leeds",
            country="GB",
            check_in=utc(2025, 6, 18, 15),
            check_out=utc(2025, 6, 19, 10),
            booking_reference="QB-123",
            rooms=(HotelRoom("101", (HotelGuest("crew-1", "Alex Smith"),)),),
        ),
    )
    itinerary = (
        ItineraryItem(
            id="item-1",
            tour_id="tour-1",
            title="Bus Call",
            type=ItineraryItemType.TRAVEL,
            time=utc(2025, 6, 18, 10),
            show_id="show-1",
        ),
        ItineraryItem(
            id="item-2",
            tour_id="tour-1",
            title="Catering",
            type=ItineraryItemType.CATERING,
            time=utc(2025, 6, 19, 12),
            notes="Vegan options",
        ),
    )
    guest_lists = {
        "show-1": (
            GuestListEntry("g-1", "Jamie Doe", 2, "Photo pass"),
            GuestListEntry("g-2", "Robin Roe"),
        ),
        "show-2": (),
    }
    fields = dict(
        tour=tour,
        shows=shows,
        crew=crew,
        flights=flights,
        hotels=hotels,
        itinerary=itinerary,
        guest_lists=guest_lists,
    )
    fields.update(overrides)
    return TourAggregate(**fields)


# Common test fixtures
@pytest.fixture
def aggregate() -> TourAggregate:
    """Sample tour aggregate."""
    return make_aggregate()


@pytest.fixture
def airports() -> AirportDirectory:
    """Directory with the two airports used by the sample flight."""
    return AirportDirectory([
        Airport("LHR", "Heathrow", "London", "GB", "Europe/London", "EGLL"),
        Airport("JFK", "John F Kennedy", "New York", "US", "America/New_York", "KJFK"),
    ])


@pytest.fixture
def poster_image():
    """Small poster bitmap."""
    return Image.new("RGB", (60, 90), color=(120, 40, 160))


@pytest.fixture
def fixed_clock():
    """Clock returning a fixed 'now'."""
    return lambda: FIXED_NOW
