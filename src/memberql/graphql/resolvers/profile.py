from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import strawberry

from ...logging import get_logger
from ..context import get_repository_from_info
from ..converters import convert_db_to_graphql_member_type, convert_db_to_graphql_profile

if TYPE_CHECKING:
    from ..types.member_type import MemberType
    from ..types.profile import Profile

logger = get_logger(__name__)


# Query resolvers
async def resolve_profiles(info: strawberry.Info) -> list[Profile | None]:
    repository = get_repository_from_info(info)
    rows = await repository.list_profiles()
    return [convert_db_to_graphql_profile(row) for row in rows]


async def resolve_profile_by_id(info: strawberry.Info, id: UUID) -> Profile | None:
    repository = get_repository_from_info(info)
    row = await repository.get_profile(id)
    if row is None:
        logger.debug("Profile not found", profile_id=str(id))
        return None
    return convert_db_to_graphql_profile(row)


# Field resolvers
async def resolve_profile_member_type(profile: Profile, info: strawberry.Info) -> MemberType:
    """
    Resolve the membership tier of a profile.

    The field is non-null, so a dangling reference surfaces as a GraphQL error
    on the enclosing profile rather than a silent null.
    """
    repository = get_repository_from_info(info)
    row = await repository.get_member_type(profile.member_type_id.value)
    if row is None:
        logger.warning(
            "Profile references unknown member type",
            profile_id=str(profile.id),
            member_type_id=profile.member_type_id.value,
        )
        raise ValueError(f"Member type {profile.member_type_id.value} not found")
    return convert_db_to_graphql_member_type(row)
