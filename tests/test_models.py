"""
Tests for parsing backend records into candidates.
"""

from datetime import datetime, timedelta, timezone

import pytest

from models import (
    Coordinate,
    JobCandidate,
    OfferCandidate,
    OfferExtras,
    UserPreferences,
    parse_location,
    parse_timestamp,
)


class TestParseTimestamp:

    def test_zulu_suffix(self):
        assert parse_timestamp("2026-10-16T12:00:00Z") == datetime(2026, 10, 16, 12, tzinfo=timezone.utc)

    def test_offset_is_kept(self):
        parsed = parse_timestamp("2026-10-16T09:00:00-03:00")
        assert parsed.utcoffset() == timedelta(hours=-3)
        assert parsed == datetime(2026, 10, 16, 12, tzinfo=timezone.utc)

    def test_naive_is_utc(self):
        assert parse_timestamp("2026-10-16T12:00:00").tzinfo == timezone.utc

    def test_datetime_passthrough(self):
        value = datetime(2026, 1, 1, tzinfo=timezone.utc)
        assert parse_timestamp(value) is value

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_timestamp("ontem")


class TestParseLocation:

    def test_both_coordinates(self):
        assert parse_location({"latitude": "-3.5", "longitude": -53}) == Coordinate(-3.5, -53.0)

    def test_zero_is_a_valid_coordinate(self):
        assert parse_location({"latitude": 0, "longitude": 0}) == Coordinate(0.0, 0.0)

    @pytest.mark.parametrize("record", [
        {},
        {"latitude": -3.5},
        {"longitude": -53},
        {"latitude": None, "longitude": -53},
        {"latitude": "", "longitude": ""},
    ])
    def test_missing_coordinates(self, record):
        assert parse_location(record) is None


class TestJobCandidate:

    def test_from_dict(self):
        job = JobCandidate.from_dict({
            "id": 42,
            "producerId": "p1",
            "serviceTypeId": "poda",
            "offer": "1500.00",
            "quantity": 800,
            "locationText": "Uruara",
            "createdAt": "2026-10-16T12:00:00Z",
            "status": "open",
        })
        assert job.id == "42"
        assert job.offer_amount == 1500.0
        assert job.location is None
        assert job.quantity == 800

    @pytest.mark.parametrize("amount", [0, -10])
    def test_offer_must_be_positive(self, amount):
        with pytest.raises(ValueError, match="non-positive offer"):
            JobCandidate("j", "poda", amount, datetime.now(timezone.utc))

    def test_missing_required_field(self):
        with pytest.raises(KeyError):
            JobCandidate.from_dict({"id": "j", "offer": 10, "createdAt": "2026-10-16T12:00:00Z"})


class TestOfferCandidate:

    def test_from_dict(self):
        offer = OfferCandidate.from_dict({
            "id": "o1",
            "workerId": "w1",
            "serviceTypeIds": ["colheita", "poda"],
            "pricePerHour": "20",
            "pricePerUnit": "",
            "providesAccommodation": True,
            "latitude": -3.7,
            "longitude": -53.7,
            "createdAt": "2026-10-16T12:00:00Z",
        })
        assert offer.service_type_ids == ("colheita", "poda")
        assert offer.price_per_day is None
        assert offer.price_per_hour == 20.0
        assert offer.price_per_unit is None
        assert offer.extras.provides_accommodation
        assert not offer.extras.provides_food
        assert offer.location == Coordinate(-3.7, -53.7)
        assert offer.visibility == "public"
        assert offer.status == "active"


def test_preferences_from_dict():
    preferences = UserPreferences.from_dict({"userId": "u1", "preferredServiceTypes": None})
    assert preferences.preferred_service_types == frozenset()
    assert preferences.preferred_radius == 50


OFFER_RECORD = {
    "id": "o1",
    "workerId": "w1",
    "serviceTypeIds": ["colheita"],
    "createdAt": "2026-10-16T12:00:00Z",
}


class TestStrictFields:

    def test_single_preferred_service_type_string(self):
        preferences = UserPreferences.from_dict({"userId": "u1", "preferredServiceTypes": "colheita"})
        assert preferences.preferred_service_types == frozenset({"colheita"})

    def test_preferred_service_types_must_be_a_list(self):
        with pytest.raises(ValueError, match="preferredServiceTypes"):
            UserPreferences.from_dict({"userId": "u1", "preferredServiceTypes": {"colheita": True}})

    def test_single_offer_service_type_string(self):
        offer = OfferCandidate.from_dict(dict(OFFER_RECORD, serviceTypeIds="poda"))
        assert offer.service_type_ids == ("poda",)

    @pytest.mark.parametrize("value", ["false", "true", 0, 1])
    def test_extras_flags_must_be_booleans(self, value):
        with pytest.raises(ValueError, match="providesFood"):
            OfferCandidate.from_dict(dict(OFFER_RECORD, providesFood=value))

    def test_missing_or_null_flags_are_false(self):
        offer = OfferCandidate.from_dict(dict(OFFER_RECORD, providesTransport=None))
        assert offer.extras == OfferExtras()
