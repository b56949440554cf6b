"""
Place and business repositories for the listing queries the assistant runs.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession

from models.place import Place, Business
from repositories.base import BaseRepository
from schemas.chatbot import PlaceFilter

# page size used when an offset is given without a limit
DEFAULT_PAGE_SIZE = 10


def _page(place_filter: PlaceFilter):
    skip = place_filter.offset or 0
    limit = place_filter.limit
    if skip and limit is None:
        limit = DEFAULT_PAGE_SIZE
    return skip, limit


class PlaceRepository(BaseRepository[Place]):
    """Place repository."""

    def __init__(self, db: AsyncSession):
        super().__init__(Place, db)

    async def list_by_filter(self, place_filter: PlaceFilter) -> List[Place]:
        """List places matching the filter, newest first."""
        skip, limit = _page(place_filter)
        return await self.get_multi(
            skip=skip,
            limit=limit,
            filters={"category": place_filter.category, "verified": place_filter.verified},
            newest_first=True,
        )


class BusinessRepository(BaseRepository[Business]):
    """Business repository."""

    def __init__(self, db: AsyncSession):
        super().__init__(Business, db)

    async def list_by_filter(self, place_filter: PlaceFilter) -> List[Business]:
        """List businesses matching the filter, newest first."""
        skip, limit = _page(place_filter)
        return await self.get_multi(
            skip=skip,
            limit=limit,
            filters={"category": place_filter.category, "verified": place_filter.verified},
            newest_first=True,
        )
