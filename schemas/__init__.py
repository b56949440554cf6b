"""
Pydantic schemas for the AccessLanka assistant backend.
"""

from .chatbot import (
    IntentType,
    Intent,
    Coordinate,
    PlaceFilter,
    PlaceRecord,
    BusinessRecord,
    NormalizedPlace,
    ChatbotResponse,
    ChatbotMessageRequest,
    ChatbotPlaceResponse,
    ChatbotMessageResponse,
    SuggestionsResponse,
    HealthCheckResponse,
)

__all__ = [
    "IntentType",
    "Intent",
    "Coordinate",
    "PlaceFilter",
    "PlaceRecord",
    "BusinessRecord",
    "NormalizedPlace",
    "ChatbotResponse",
    "ChatbotMessageRequest",
    "ChatbotPlaceResponse",
    "ChatbotMessageResponse",
    "SuggestionsResponse",
    "HealthCheckResponse",
]
