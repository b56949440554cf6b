"""
Services module for the AccessLanka assistant backend.

Contains the chatbot engine and its data access.
"""

# Expose commonly used services for convenient imports
from .chatbot_service import chatbot_service  # noqa: F401
