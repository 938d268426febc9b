"""
Referral tree resolver.

Walks the sponsor chain upward from a user.
"""

from dataclasses import dataclass

from loguru import logger
from sqlalchemy import literal, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.utils.exceptions import NotFoundError


@dataclass(frozen=True)
class UplineMember:
    """Ancestor of a user and its distance (1 = direct sponsor)."""

    user_id: int
    level: int


class UplineResolver:
    """Resolves the sponsor chain of a user."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize resolver."""
        self.session = session
        self.user_repo = UserRepository(session)

    async def resolve_upline(
        self, user_id: int, max_level: int
    ) -> list[UplineMember]:
        """
        Get the sponsor chain (recursive CTE, one round trip).

        The chain stops at max_level or at a user without sponsor. A
        missing sponsor truncates the chain; it is not an error.

        Args:
            user_id: User whose upline is resolved
            max_level: Deepest level to return

        Returns:
            Ancestors ordered by level, level 1 first

        Raises:
            NotFoundError: If the user itself does not exist
        """
        if not await self.user_repo.exists(id=user_id):
            raise NotFoundError("User", user_id)

        if max_level <= 0:
            return []

        chain = (
            select(
                User.id.label("user_id"),
                User.sponsor_id.label("sponsor_id"),
                literal(0).label("level"),
            )
            .where(User.id == user_id)
            .cte("upline", recursive=True)
        )
        ancestor = aliased(User)
        chain = chain.union_all(
            select(
                ancestor.id,
                ancestor.sponsor_id,
                chain.c.level + 1,
            )
            .join(chain, ancestor.id == chain.c.sponsor_id)
            .where(chain.c.level < max_level)
        )

        stmt = (
            select(chain.c.user_id, chain.c.level)
            .where(chain.c.level > 0)
            .order_by(chain.c.level)
        )
        result = await self.session.execute(stmt)
        upline = [
            UplineMember(user_id=row.user_id, level=row.level)
            for row in result.all()
        ]

        logger.debug(
            "Upline resolved",
            extra={
                "user_id": user_id,
                "max_level": max_level,
                "chain_length": len(upline),
            },
        )

        return upline
