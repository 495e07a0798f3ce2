from unittest.mock import Mock

import pytest
from googlemaps.exceptions import ApiError

from business_finder.google_places import PlacesClient


def _stub(place_id, lat=41.0, lng=29.0, **extra):
    record = {"place_id": place_id, "geometry": {"location": {"lat": lat, "lng": lng}}}
    record.update(extra)
    return record


def _detail(place_id, lat=41.0, lng=29.0, **extra):
    record = _stub(place_id, lat, lng)
    record.update({
        "name": f"Business {place_id}",
        "formatted_address": "Istiklal Cd. No:1, Beyoğlu/İstanbul",
        "formatted_phone_number": "(0212) 555 00 00",
        "rating": 4.4,
        "user_ratings_total": 120,
        "types": ["cafe", "food"],
    })
    record.update(extra)
    return record


@pytest.fixture
def stub():
    return _stub


@pytest.fixture
def detail():
    return _detail


@pytest.fixture
def place_lookup():
    """Build a gmaps.place side effect that answers from a dict of records."""
    def build(records):
        def place(place_id, fields=None):
            if place_id not in records:
                raise ApiError("NOT_FOUND", "Place not found")
            return {"status": "OK", "result": records[place_id]}
        return place
    return build


@pytest.fixture
def gmaps():
    client = Mock()
    client.geocode.return_value = [{"geometry": {"location": {"lat": 41.0, "lng": 29.0}}}]
    return client


@pytest.fixture
def places_client(gmaps):
    return PlacesClient(gmaps)
