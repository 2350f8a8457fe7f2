from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...logging import get_logger
from ..context import get_repository_from_info
from ..converters import convert_db_to_graphql_member_type

if TYPE_CHECKING:
    from ..types.member_type import MemberType, MemberTypeId

logger = get_logger(__name__)


async def resolve_member_types(info: strawberry.Info) -> list[MemberType | None]:
    repository = get_repository_from_info(info)
    rows = await repository.list_member_types()
    return [convert_db_to_graphql_member_type(row) for row in rows]


async def resolve_member_type_by_id(info: strawberry.Info, id: MemberTypeId) -> MemberType | None:
    repository = get_repository_from_info(info)
    row = await repository.get_member_type(id.value)
    if row is None:
        logger.debug("Member type not found", member_type_id=id.value)
        return None
    return convert_db_to_graphql_member_type(row)
