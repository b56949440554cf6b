"""
Candidate normalization and distance ranking.

Records from the places and businesses collections are reshaped into
NormalizedPlace here, and only here, so the handlers never see missing fields.
"""

import math
from typing import Any, Iterable, List, Mapping, Optional, Union

from schemas.chatbot import BusinessRecord, Coordinate, NormalizedPlace, PlaceRecord

EARTH_RADIUS_METERS = 6371e3

SourceRecord = Union[PlaceRecord, BusinessRecord, Mapping[str, Any]]


def _to_float(value: Any) -> float:
    """Parse a numeric or numeric-string coordinate; anything else is NaN."""
    if value is None:
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def normalize_place(record: SourceRecord, source_type: str) -> NormalizedPlace:
    """
    Reshape a place or business record into the common candidate shape.

    Args:
        record: A PlaceRecord/BusinessRecord, or a raw mapping with the same keys.
        source_type: "place" or "business".
    """
    if not isinstance(record, PlaceRecord):
        model = BusinessRecord if source_type == "business" else PlaceRecord
        record = model.model_validate(record)

    return NormalizedPlace(
        id=record.id,
        name=record.name,
        address=record.address,
        category=record.category,
        description=record.description or "",
        latitude=_to_float(record.latitude),
        longitude=_to_float(record.longitude),
        features=list(record.accessibility_features or []),
        images=list(record.images or []),
        phone=record.phone or "",
        website=record.website or "",
        opening_hours=record.opening_hours or {},
        verified=bool(record.verified),
        type=source_type,
    )


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine great-circle distance in meters."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    # rounding can push a past 1 for antipodal points
    if a > 1.0:
        a = 1.0
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_METERS * c


def _distance_sort_key(place: NormalizedPlace):
    # NaN distances go last, keeping their relative order
    if place.distance is None or math.isnan(place.distance):
        return (1, 0.0)
    return (0, place.distance)


def rank_by_distance(places: Iterable[NormalizedPlace], origin: Coordinate) -> List[NormalizedPlace]:
    """Return copies of places with distance set, nearest first (stable)."""
    ranked = [
        place.model_copy(update={
            "distance": calculate_distance(
                origin.latitude,
                origin.longitude,
                place.latitude,
                place.longitude,
            )
        })
        for place in places
    ]
    return sorted(ranked, key=_distance_sort_key)


def format_distance(distance: Optional[float]) -> Optional[str]:
    """Human readable distance, e.g. '450m away' or '2.3km away'."""
    if distance is None or math.isnan(distance):
        return None
    if distance < 1000:
        return f"{int(math.floor(distance + 0.5))}m away"
    return f"{distance / 1000:.1f}km away"
