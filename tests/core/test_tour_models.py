"""
Unit tests for core tour models.
"""

import pytest
from datetime import datetime, timezone

from encore_export.core.models import (
    CrewMember,
    Flight,
    GuestListEntry,
    Hotel,
    ItineraryItem,
    ItineraryItemType,
    Show,
    Tour,
    UNKNOWN_CREW_NAME,
)

from conftest import make_aggregate, utc


class TestTour:
    """Tests for Tour."""

    def test_when_round_tripped_then_equal(self):
        tour = make_aggregate().tour

        assert Tour.from_dict(tour.to_dict()) == tour

    def test_when_poster_url_empty_then_none(self):
        data = make_aggregate().tour.to_dict()
        data["posterURL"] = ""

        assert Tour.from_dict(data).poster_url is None

    def test_when_stored_keys_then_camel_case(self):
        data = make_aggregate().tour.to_dict()

        assert data["tourName"] == "World Tour 2025"
        assert data["startDate"] == "2025-06-17T00:00:00Z"


class TestShow:
    """Tests for Show."""

    def test_when_timings_missing_then_none(self):
        show = Show.from_dict({
            "id": "s",
            "date": "2025-06-18T19:00:00Z",
            "city": "Leeds",
            "venueName": "O2 Academy",
        })

        assert show.load_in is None
        assert show.pack_out is None
        assert show.venue_address == ""

    def test_when_round_tripped_then_timings_preserved(self):
        show = make_aggregate().shows[0]

        restored = Show.from_dict(show.to_dict())

        assert restored == show
        assert restored.sound_check == utc(2025, 6, 18, 16, 30)

    def test_when_date_has_offset_then_normalized_to_utc(self):
        show = Show.from_dict({
            "id": "s",
            "date": "2025-06-18T21:00:00+02:00",
            "city": "Paris",
            "venueName": "Olympia",
        })

        assert show.date == datetime(2025, 6, 18, 19, tzinfo=timezone.utc)


class TestCrewMember:
    """Tests for CrewMember."""

    def test_when_multiple_roles_then_joined(self):
        member = CrewMember("c", "t", "Sam", ("FOH", "Production"))

        assert member.role_label == "FOH, Production"

    def test_when_no_roles_then_empty_label(self):
        assert CrewMember("c", "t", "Sam").role_label == ""


class TestFlight:
    """Tests for Flight."""

    def test_when_round_tripped_then_passengers_preserved(self):
        flight = make_aggregate().flights[0]

        restored = Flight.from_dict(flight.to_dict())

        assert restored == flight
        assert restored.passengers[0].baggage == "23kg"

    @pytest.mark.parametrize("number, code", [
        ("BA117", "BA"),
        ("U2 123", "U"),
        (None, ""),
    ])
    def test_airline_code(self, number, code):
        flight = Flight(
            "f", "t", "LHR", "JFK", utc(2025, 1, 1), utc(2025, 1, 1, 8), flight_number=number,
        )

        assert flight.airline_code == code


class TestHotel:
    """Tests for Hotel."""

    def test_when_round_tripped_then_rooms_preserved(self):
        hotel = make_aggregate().hotels[0]

        restored = Hotel.from_dict(hotel.to_dict())

        assert restored == hotel
        assert restored.rooms[0].guests[0].name == "Alex Smith"


class TestItineraryItemType:
    """Tests for ItineraryItemType."""

    def test_when_unknown_raw_value_then_custom(self):
        assert ItineraryItemType.parse("karaoke") == ItineraryItemType.CUSTOM
        assert ItineraryItemType.parse(None) == ItineraryItemType.CUSTOM

    def test_when_known_raw_value_then_parsed(self):
        assert ItineraryItemType.parse("soundcheck") == ItineraryItemType.SOUNDCHECK

    def test_every_type_has_display_name(self):
        for kind in ItineraryItemType:
            assert kind.display_name

    def test_travel_and_show_timing_flags(self):
        assert ItineraryItemType.TRAVEL.is_travel
        assert ItineraryItemType.ARRIVAL.is_travel
        assert not ItineraryItemType.CATERING.is_travel
        assert ItineraryItemType.LOAD_IN.is_show_timing
        assert not ItineraryItemType.MEETING.is_show_timing

    def test_when_item_round_tripped_then_type_preserved(self):
        item = make_aggregate().itinerary[0]

        restored = ItineraryItem.from_dict(item.to_dict())

        assert restored == item
        assert restored.to_dict()["type"] == "travel"


class TestGuestListEntry:
    """Tests for GuestListEntry."""

    def test_when_negative_count_then_raises(self):
        with pytest.raises(ValueError, match="negative"):
            GuestListEntry("g", "Jamie", -1)

    def test_plus_label(self):
        assert GuestListEntry("g", "Jamie", 2).plus_label == "+2"
        assert GuestListEntry("g", "Jamie").plus_label == ""

    @pytest.mark.parametrize("raw, expected", [
        (3, 3),
        ("2", 2),
        ("+1", 1),
        ("", 0),
        ("lots", 0),
        (None, 0),
        (-4, 0),
    ])
    def test_when_count_stored_loosely_then_parsed(self, raw, expected):
        entry = GuestListEntry.from_dict({"id": "g", "name": "Jamie", "additionalGuests": raw})

        assert entry.additional_guests == expected


class TestTourAggregate:
    """Tests for TourAggregate lookups."""

    def test_when_show_id_known_then_found(self):
        agg = make_aggregate()

        assert agg.show_by_id("show-2").city == "Manchester"

    def test_when_show_id_missing_then_none(self):
        agg = make_aggregate()

        assert agg.show_by_id("nope") is None
        assert agg.show_by_id(None) is None

    def test_when_crew_id_unknown_then_placeholder_name(self):
        agg = make_aggregate()

        assert agg.crew_name("crew-1") == "Alex Smith"
        assert agg.crew_name("crew-gone") == UNKNOWN_CREW_NAME

    def test_when_show_has_empty_list_then_empty_tuple_not_none(self):
        agg = make_aggregate()

        assert agg.guests_for("show-2") == ()
        assert agg.guests_for("show-3") is None
