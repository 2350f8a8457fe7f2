"""Read-only data access for the GraphQL resolvers.

A single `Repository` is shared by every request and handed to resolvers via
the GraphQL context. Each method opens its own short-lived session and runs
exactly one statement.
"""

from __future__ import annotations

from typing import TypeVar
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .dbmodels import MemberTypes, Posts, Profiles, SubscribersOnAuthors, Users

T = TypeVar("T")


class Repository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def _one_or_none(self, stmt: Select[tuple[T]]) -> T | None:
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return result.scalar_one_or_none()

    async def _all(self, stmt: Select[tuple[T]]) -> list[T]:
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    # Member types
    async def list_member_types(self) -> list[MemberTypes]:
        return await self._all(select(MemberTypes))

    async def get_member_type(self, member_type_id: str) -> MemberTypes | None:
        return await self._one_or_none(select(MemberTypes).where(MemberTypes.id == member_type_id))

    # Users
    async def list_users(self) -> list[Users]:
        return await self._all(select(Users))

    async def get_user(self, user_id: UUID) -> Users | None:
        return await self._one_or_none(select(Users).where(Users.id == user_id))

    async def list_subscribed_to(self, subscriber_id: UUID) -> list[Users]:
        """Users that `subscriber_id` is subscribed to."""
        stmt = (
            select(Users)
            .join(SubscribersOnAuthors, SubscribersOnAuthors.author_id == Users.id)
            .where(SubscribersOnAuthors.subscriber_id == subscriber_id)
        )
        return await self._all(stmt)

    async def list_subscribers(self, author_id: UUID) -> list[Users]:
        """Users subscribed to `author_id`."""
        stmt = (
            select(Users)
            .join(SubscribersOnAuthors, SubscribersOnAuthors.subscriber_id == Users.id)
            .where(SubscribersOnAuthors.author_id == author_id)
        )
        return await self._all(stmt)

    # Posts
    async def list_posts(self) -> list[Posts]:
        return await self._all(select(Posts))

    async def get_post(self, post_id: UUID) -> Posts | None:
        return await self._one_or_none(select(Posts).where(Posts.id == post_id))

    async def list_posts_by_author(self, author_id: UUID) -> list[Posts]:
        return await self._all(select(Posts).where(Posts.author_id == author_id))

    # Profiles
    async def list_profiles(self) -> list[Profiles]:
        return await self._all(select(Profiles))

    async def get_profile(self, profile_id: UUID) -> Profiles | None:
        return await self._one_or_none(select(Profiles).where(Profiles.id == profile_id))

    async def get_profile_by_user(self, user_id: UUID) -> Profiles | None:
        return await self._one_or_none(select(Profiles).where(Profiles.user_id == user_id))


_repository: Repository | None = None


def get_repository() -> Repository:
    """Return the process-wide repository bound to the shared session factory."""
    global _repository
    if _repository is None:
        from .database.connection import get_session_factory

        _repository = Repository(get_session_factory())
    return _repository


def reset_repository() -> None:
    """Forget the shared repository (for tests and re-initialization)."""
    global _repository
    _repository = None


__all__ = ["Repository", "get_repository", "reset_repository"]
