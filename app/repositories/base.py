"""
Base repository.

Shared lookups, locking and inserts. Repositories flush but never commit;
the service method that called them owns the transaction.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Data access for one mapped table.

    Example:
        class VipPackageRepository(BaseRepository[VipPackage]):
            def __init__(self, session: AsyncSession) -> None:
                super().__init__(VipPackage, session)
    """

    def __init__(
        self, model: type[ModelType], session: AsyncSession
    ) -> None:
        self.model = model
        self.session = session

    def _locked(self, stmt: Select) -> Select:
        # Fresh attribute values: the row may have changed while we waited
        return stmt.with_for_update().execution_options(populate_existing=True)

    async def get_by_id(self, id: int) -> ModelType | None:
        """Primary key lookup (identity map first)."""
        return await self.session.get(self.model, id)

    async def get_for_update(self, id: int) -> ModelType | None:
        """
        Load a row and hold SELECT ... FOR UPDATE on it.

        The lock lasts until the surrounding transaction commits or
        rolls back.

        Args:
            id: Primary key

        Returns:
            Locked row or None
        """
        stmt = self._locked(select(self.model).where(self.model.id == id))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by(self, **filters: Any) -> ModelType | None:
        """First row matching equality filters, or None."""
        stmt = select(self.model).filter_by(**filters).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, **data: Any) -> ModelType:
        """
        Insert a row and flush so its ID and defaults are populated.

        Args:
            **data: Column values

        Returns:
            New row
        """
        entity = self.model(**data)
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def count(self, **filters: Any) -> int:
        stmt = select(func.count()).select_from(self.model)
        if filters:
            stmt = stmt.filter_by(**filters)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def exists(self, **filters: Any) -> bool:
        return await self.count(**filters) > 0
