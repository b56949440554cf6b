"""
Chatbot schemas: intents, source records, normalized places and responses.
"""

import math
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


class IntentType(str, Enum):
    NEAREST = "nearest"
    ACCESSIBILITY = "accessibility"
    CATEGORY = "category"
    SPECIFIC_PLACE = "specific_place"
    RECOMMENDATION = "recommendation"
    FEATURES = "features"
    GREETING = "greeting"
    HELP = "help"
    GENERAL = "general"


class Intent(BaseModel):
    """Structured interpretation of a single chat message."""
    type: IntentType = IntentType.GENERAL
    category: Optional[str] = None
    accessibility_features: List[str] = Field(default_factory=list)
    place_name: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    query: str = ""


class Coordinate(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class PlaceFilter(BaseModel):
    """Listing options shared by the places and businesses collections."""
    category: Optional[str] = None
    verified: Optional[bool] = None
    limit: Optional[int] = Field(None, ge=1)
    offset: Optional[int] = Field(None, ge=0)

    @field_validator("category")
    @classmethod
    def blank_category_is_unset(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class PlaceRecord(BaseModel):
    """Row from the places collection. Everything past category may be missing."""
    id: Union[str, int]
    name: str
    address: str
    category: Optional[str] = None
    description: Optional[str] = None
    # numbers or numeric strings
    latitude: Optional[Union[float, str]] = None
    longitude: Optional[Union[float, str]] = None
    accessibility_features: Optional[List[str]] = None
    images: Optional[List[Any]] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    opening_hours: Optional[Union[Dict[str, Any], str]] = None
    verified: Optional[bool] = None

    model_config = ConfigDict(from_attributes=True, extra="ignore")


class BusinessRecord(PlaceRecord):
    """Row from the businesses collection."""
    status: Optional[str] = None


class NormalizedPlace(BaseModel):
    """Common candidate shape built from either source collection."""
    id: Union[str, int]
    name: str
    address: str
    category: Optional[str] = None
    description: str = ""
    latitude: float
    longitude: float
    features: List[str] = Field(default_factory=list)
    images: List[Any] = Field(default_factory=list)
    phone: str = ""
    website: str = ""
    opening_hours: Union[Dict[str, Any], str] = Field(default_factory=dict)
    verified: bool = False
    type: Literal["place", "business"]
    distance: Optional[float] = None

    model_config = ConfigDict(frozen=True)


class ChatbotResponse(BaseModel):
    message: str
    places: List[NormalizedPlace] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)


# ---- HTTP request/response shapes ----

class ChatbotMessageRequest(BaseModel):
    """Chat message request schema."""
    message: str = Field(..., description="User's message", min_length=1, max_length=1000)
    location: Optional[Coordinate] = Field(None, description="User's current location")


def _finite_or_none(value: Optional[float]) -> Optional[float]:
    if value is None or math.isnan(value):
        return None
    return value


class ChatbotPlaceResponse(BaseModel):
    """Place as returned to API clients."""
    id: Union[str, int]
    name: str
    address: str
    category: Optional[str] = None
    description: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    features: List[str] = Field(default_factory=list)
    images: List[Any] = Field(default_factory=list)
    phone: str = ""
    website: str = ""
    opening_hours: Union[Dict[str, Any], str] = Field(default_factory=dict)
    verified: bool = False
    type: Literal["place", "business"]
    distance: Optional[float] = None
    distance_text: Optional[str] = None

    @classmethod
    def from_place(cls, place: NormalizedPlace, distance_text: Optional[str] = None) -> "ChatbotPlaceResponse":
        data = place.model_dump()
        data["latitude"] = _finite_or_none(place.latitude)
        data["longitude"] = _finite_or_none(place.longitude)
        data["distance"] = _finite_or_none(place.distance)
        return cls(**data, distance_text=distance_text)


class ChatbotMessageResponse(BaseModel):
    message: str
    places: List[ChatbotPlaceResponse] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)


class SuggestionsResponse(BaseModel):
    suggestions: List[str]


class HealthCheckResponse(BaseModel):
    """Health check response schema."""
    status: str = Field(..., description="Service status")
    message: str = Field(..., description="Status message")
    services: Dict[str, bool] = Field(..., description="Service availability status")
