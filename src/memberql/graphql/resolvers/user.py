from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import strawberry

from ...logging import get_logger
from ..context import get_repository_from_info
from ..converters import (
    convert_db_to_graphql_post,
    convert_db_to_graphql_profile,
    convert_db_to_graphql_user,
)

if TYPE_CHECKING:
    from ..types.post import Post
    from ..types.profile import Profile
    from ..types.user import User

logger = get_logger(__name__)


# Query resolvers
async def resolve_users(info: strawberry.Info) -> list[User | None]:
    repository = get_repository_from_info(info)
    rows = await repository.list_users()
    return [convert_db_to_graphql_user(row) for row in rows]


async def resolve_user_by_id(info: strawberry.Info, id: UUID) -> User | None:
    repository = get_repository_from_info(info)
    row = await repository.get_user(id)
    if row is None:
        logger.debug("User not found", user_id=str(id))
        return None
    return convert_db_to_graphql_user(row)


# Field resolvers
async def resolve_user_profile(user: User, info: strawberry.Info) -> Profile | None:
    repository = get_repository_from_info(info)
    row = await repository.get_profile_by_user(user.id)
    if row is None:
        return None
    return convert_db_to_graphql_profile(row)


async def resolve_user_posts(user: User, info: strawberry.Info) -> list[Post]:
    """
    Resolve posts authored by a user.

    A parent without an id has no posts; the field is non-null, so an empty
    list is returned instead of null.
    """
    if not user.id:
        return []

    repository = get_repository_from_info(info)
    rows = await repository.list_posts_by_author(user.id)
    return [convert_db_to_graphql_post(row) for row in rows]


async def resolve_user_subscribed_to(user: User, info: strawberry.Info) -> list[User | None]:
    """Resolve the users that `user` subscribes to."""
    repository = get_repository_from_info(info)
    rows = await repository.list_subscribed_to(user.id)
    return [convert_db_to_graphql_user(row) for row in rows]


async def resolve_subscribed_to_user(user: User, info: strawberry.Info) -> list[User | None]:
    """Resolve the users subscribed to `user`."""
    repository = get_repository_from_info(info)
    rows = await repository.list_subscribers(user.id)
    return [convert_db_to_graphql_user(row) for row in rows]
