"""
Place and Business models.

Both tables share the columns the assistant reads; businesses also carry a
submission status.
"""

import uuid
from sqlalchemy import Column, String, Text, Float, Boolean, DateTime, JSON
from sqlalchemy.sql import func

from core.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class Place(Base):
    """Community-curated place."""

    __tablename__ = "places"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False, index=True)
    address = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, index=True)
    description = Column(Text, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    accessibility_features = Column(JSON, nullable=True)  # list of feature tags
    images = Column(JSON, nullable=True)
    phone = Column(String(50), nullable=True)
    website = Column(String(255), nullable=True)
    opening_hours = Column(JSON, nullable=True)
    verified = Column(Boolean, nullable=False, default=False)
    created_by = Column(String(36), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Place(id={self.id}, name='{self.name}')>"


class Business(Base):
    """Owner-submitted business listing."""

    __tablename__ = "businesses"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False, index=True)
    address = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, index=True)
    description = Column(Text, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    accessibility_features = Column(JSON, nullable=True)
    images = Column(JSON, nullable=True)
    phone = Column(String(50), nullable=True)
    website = Column(String(255), nullable=True)
    opening_hours = Column(JSON, nullable=True)
    verified = Column(Boolean, nullable=False, default=False)
    status = Column(String(20), nullable=False, default="pending")  # pending/approved/rejected
    created_by = Column(String(36), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Business(id={self.id}, name='{self.name}')>"
