"""
Data access for the assistant.

PlaceDataSource is the contract the chatbot consumes; DatabasePlaceDataSource
serves it from the places and businesses tables.
"""

from typing import Callable, List, Protocol, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import AsyncSessionLocal
from core.logging import get_logger
from repositories.place import BusinessRepository, PlaceRepository
from schemas.chatbot import BusinessRecord, PlaceFilter, PlaceRecord

logger = get_logger(__name__)


class PlaceDataSource(Protocol):
    async def list_places(self, place_filter: PlaceFilter) -> Sequence[PlaceRecord]:
        ...

    async def list_businesses(self, place_filter: PlaceFilter) -> Sequence[BusinessRecord]:
        ...


class DatabasePlaceDataSource:
    """Reads candidates through the repositories, one session per call."""

    def __init__(self, session_factory: Callable[[], AsyncSession] = AsyncSessionLocal):
        self.session_factory = session_factory

    async def list_places(self, place_filter: PlaceFilter) -> List[PlaceRecord]:
        async with self.session_factory() as session:
            rows = await PlaceRepository(session).list_by_filter(place_filter)
            logger.debug("Fetched places", count=len(rows), category=place_filter.category)
            return [PlaceRecord.model_validate(row) for row in rows]

    async def list_businesses(self, place_filter: PlaceFilter) -> List[BusinessRecord]:
        async with self.session_factory() as session:
            rows = await BusinessRepository(session).list_by_filter(place_filter)
            logger.debug("Fetched businesses", count=len(rows), category=place_filter.category)
            return [BusinessRecord.model_validate(row) for row in rows]

    async def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        try:
            async with self.session_factory() as session:
                await session.execute(select(1))
            return True
        except Exception as e:
            logger.error("Database ping failed", error=str(e))
            return False
