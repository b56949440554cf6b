import math

import pytest

from schemas.chatbot import Coordinate, PlaceRecord
from services.place_ranking import calculate_distance, format_distance, normalize_place, rank_by_distance

from conftest import COLOMBO, make_record, north_of


def test_distance_to_self_is_zero():
    assert calculate_distance(6.9271, 79.8612, 6.9271, 79.8612) == 0


def test_distance_is_symmetric():
    a = (6.9271, 79.8612)
    b = (7.2906, 80.6337)  # Kandy
    assert calculate_distance(*a, *b) == pytest.approx(calculate_distance(*b, *a))


def test_one_degree_of_latitude():
    assert calculate_distance(0.0, 0.0, 1.0, 0.0) == pytest.approx(111194.93, abs=0.1)


def test_antipodal_points_do_not_raise():
    assert calculate_distance(0.0, 0.0, 0.0, 180.0) == pytest.approx(math.pi * 6371e3)


def test_normalize_applies_defaults():
    place = normalize_place({"id": "p1", "name": "Viharamahadevi Park", "address": "Colombo 07", "category": "parks",
                             "latitude": 6.91, "longitude": 79.86}, "place")
    assert place.description == ""
    assert place.features == []
    assert place.images == []
    assert place.phone == ""
    assert place.website == ""
    assert place.opening_hours == {}
    assert place.verified is False
    assert place.type == "place"
    assert place.distance is None


def test_normalize_maps_accessibility_features_and_business_type():
    record = make_record("b1", "Ministry of Crab", features=["wheelchair_accessible"], verified=True,
                         status="approved", phone="0112342722")
    place = normalize_place(record, "business")
    assert place.features == ["wheelchair_accessible"]
    assert place.verified is True
    assert place.phone == "0112342722"
    assert place.type == "business"


def test_normalize_accepts_record_models():
    record = PlaceRecord(id=7, name="Lotus Tower", address="Colombo 10", category="entertainments",
                         latitude=6.9271, longitude=79.8587)
    place = normalize_place(record, "place")
    assert place.id == 7
    assert place.longitude == 79.8587


def test_numeric_string_coordinates_are_parsed():
    place = normalize_place(make_record("p1", "Galle Face", latitude="6.9271", longitude="79.8456"), "place")
    assert place.latitude == 6.9271
    assert place.longitude == 79.8456


def test_bad_or_missing_coordinates_become_nan():
    place = normalize_place(make_record("p1", "Nowhere", latitude="n/a", longitude=None), "place")
    assert math.isnan(place.latitude)
    assert math.isnan(place.longitude)


def test_rank_sets_distance_and_sorts_ascending():
    far = make_record("far", "Far", *north_of(COLOMBO, 900))
    near = make_record("near", "Near", *north_of(COLOMBO, 100))
    mid = make_record("mid", "Mid", *north_of(COLOMBO, 400))
    places = [normalize_place(r, "place") for r in (far, near, mid)]

    ranked = rank_by_distance(places, Coordinate(**COLOMBO))

    assert [p.id for p in ranked] == ["near", "mid", "far"]
    assert ranked[0].distance == pytest.approx(100, abs=0.5)
    # originals are untouched
    assert all(p.distance is None for p in places)


def test_ranking_is_idempotent():
    origin = Coordinate(**COLOMBO)
    places = [
        normalize_place(make_record(str(i), f"Place {i}", *north_of(COLOMBO, meters)), "place")
        for i, meters in enumerate([300, 100, 300, 50])
    ]
    once = rank_by_distance(places, origin)
    twice = rank_by_distance(once, origin)
    assert [p.id for p in twice] == [p.id for p in once]
    # equal distances keep source order
    assert [p.id for p in once] == ["3", "1", "0", "2"]


def test_nan_coordinates_rank_last_in_source_order():
    places = [
        normalize_place(make_record("bad1", "Bad 1", latitude="x"), "place"),
        normalize_place(make_record("ok", "Ok", *north_of(COLOMBO, 200)), "place"),
        normalize_place(make_record("bad2", "Bad 2", longitude="y"), "place"),
    ]
    ranked = rank_by_distance(places, Coordinate(**COLOMBO))
    assert [p.id for p in ranked] == ["ok", "bad1", "bad2"]
    assert math.isnan(ranked[1].distance)


@pytest.mark.parametrize(
    "meters, expected",
    [
        (0, "0m away"),
        (450.4, "450m away"),
        (450.5, "451m away"),
        (2345, "2.3km away"),
        (1000, "1.0km away"),
        (None, None),
        (math.nan, None),
    ],
)
def test_format_distance(meters, expected):
    assert format_distance(meters) == expected
