from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import strawberry

from ...logging import get_logger
from ..context import get_repository_from_info
from ..converters import convert_db_to_graphql_post

if TYPE_CHECKING:
    from ..types.post import Post

logger = get_logger(__name__)


async def resolve_posts(info: strawberry.Info) -> list[Post]:
    repository = get_repository_from_info(info)
    rows = await repository.list_posts()
    return [convert_db_to_graphql_post(row) for row in rows]


async def resolve_post_by_id(info: strawberry.Info, id: UUID) -> Post | None:
    repository = get_repository_from_info(info)
    row = await repository.get_post(id)
    if row is None:
        logger.debug("Post not found", post_id=str(id))
        return None
    return convert_db_to_graphql_post(row)
