"""
Dependency injection utilities for API endpoints.
"""

from services.chatbot_service import ChatbotService, chatbot_service


def get_chatbot_service() -> ChatbotService:
    """Get the shared chatbot service."""
    return chatbot_service
