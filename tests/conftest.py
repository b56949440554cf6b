import sys
from pathlib import Path
from typing import List, Optional

import pytest

# Ensure the project root is on sys.path for direct pytest runs
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from schemas.chatbot import PlaceFilter  # noqa: E402

COLOMBO = {"latitude": 6.9271, "longitude": 79.8612}

# degrees of latitude per meter along a meridian (R = 6371 km)
DEG_PER_METER = 180 / (3.141592653589793 * 6371e3)


def north_of(origin: dict, meters: float) -> tuple:
    """Point `meters` due north of origin."""
    return origin["latitude"] + meters * DEG_PER_METER, origin["longitude"]


def make_record(
    id: str,
    name: str,
    latitude=6.9271,
    longitude=79.8612,
    category: Optional[str] = "restaurants",
    features: Optional[List[str]] = None,
    verified: Optional[bool] = None,
    **extra,
) -> dict:
    record = {
        "id": id,
        "name": name,
        "address": extra.pop("address", f"{name} Road, Colombo"),
        "category": category,
        "latitude": latitude,
        "longitude": longitude,
    }
    if features is not None:
        record["accessibility_features"] = features
    if verified is not None:
        record["verified"] = verified
    record.update(extra)
    return record


class FakePlaceDataSource:
    """In-memory data source that filters by category like the database does."""

    def __init__(self, places=None, businesses=None, error: Optional[Exception] = None):
        self.places = list(places or [])
        self.businesses = list(businesses or [])
        self.error = error
        self.calls = []

    def _select(self, records, place_filter: PlaceFilter):
        if place_filter.category:
            return [r for r in records if r.get("category") == place_filter.category]
        return list(records)

    async def list_places(self, place_filter: PlaceFilter):
        self.calls.append(("places", place_filter))
        if self.error:
            raise self.error
        return self._select(self.places, place_filter)

    async def list_businesses(self, place_filter: PlaceFilter):
        self.calls.append(("businesses", place_filter))
        if self.error:
            raise self.error
        return self._select(self.businesses, place_filter)


@pytest.fixture
def colombo():
    return dict(COLOMBO)
