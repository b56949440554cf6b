"""
Base repository with common query operations.
"""

from typing import Generic, TypeVar, Type, Optional, List, Any, Dict
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from core.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with common query operations."""

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    async def get_multi(
        self,
        skip: int = 0,
        limit: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
        newest_first: bool = False,
    ) -> List[ModelType]:
        """Get multiple records with equality filters and optional pagination."""
        query = select(self.model)

        if filters:
            for field, value in filters.items():
                if value is None:
                    continue
                if hasattr(self.model, field):
                    query = query.where(getattr(self.model, field) == value)

        if newest_first and hasattr(self.model, "created_at"):
            query = query.order_by(self.model.created_at.desc())

        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)

        result = await self.db.execute(query)
        return list(result.scalars().all())
