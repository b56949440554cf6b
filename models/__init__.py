"""
SQLAlchemy ORM models for the AccessLanka assistant backend.
"""

from .place import Place, Business

__all__ = [
    "Place",
    "Business",
]
