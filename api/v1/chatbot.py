"""
Chatbot API endpoints.

Answers free-text questions about accessible places near the user.
"""

from fastapi import APIRouter, Depends

from api.deps import get_chatbot_service
from core.logging import get_logger
from schemas.chatbot import (
    ChatbotMessageRequest,
    ChatbotMessageResponse,
    ChatbotPlaceResponse,
    HealthCheckResponse,
    SuggestionsResponse,
)
from services.chatbot_service import ChatbotService, get_default_suggestions
from services.place_ranking import format_distance

logger = get_logger(__name__)

router = APIRouter()


@router.post("/message", response_model=ChatbotMessageResponse)
async def send_message(
    request: ChatbotMessageRequest,
    service: ChatbotService = Depends(get_chatbot_service),
):
    """
    Send a message to the assistant.

    The location is optional; without it results are not ranked by distance
    and "nearest" questions ask the user to enable location services.
    """
    logger.info("Chatbot message received", message=request.message[:50], has_location=request.location is not None)

    response = await service.process_message(request.message, request.location)

    return ChatbotMessageResponse(
        message=response.message,
        places=[
            ChatbotPlaceResponse.from_place(place, distance_text=format_distance(place.distance))
            for place in response.places
        ],
        suggestions=response.suggestions,
    )


@router.get("/suggestions", response_model=SuggestionsResponse)
async def default_suggestions():
    """Starter questions shown before the first message."""
    return SuggestionsResponse(suggestions=get_default_suggestions())


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(service: ChatbotService = Depends(get_chatbot_service)):
    """
    Health check endpoint for the chatbot service.
    """
    ping = getattr(service.data_source, "ping", None)
    database_ok = bool(await ping()) if ping else True
    return HealthCheckResponse(
        status="healthy" if database_ok else "unhealthy",
        message="Chatbot service is operational" if database_ok else "Place data is unavailable",
        services={"database": database_ok},
    )
