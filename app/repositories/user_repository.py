"""
User repository.

Data access layer for User model.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """User repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize user repository."""
        super().__init__(User, session)

    async def lock_user(self, user_id: int) -> User | None:
        """
        Lock the user row to serialize money operations for this user.

        Args:
            user_id: User ID

        Returns:
            Locked user or None if not found
        """
        return await self.get_for_update(user_id)
