"""
Profile GraphQL type definitions
"""

import strawberry

from ..scalars import UUID
from .member_type import MemberType, MemberTypeId


@strawberry.type
class Profile:
    """Profile type for GraphQL API."""

    id: UUID
    is_male: bool
    year_of_birth: int
    user_id: UUID
    member_type_id: MemberTypeId

    @strawberry.field
    async def member_type(self, info: strawberry.Info) -> MemberType:
        """Get the membership tier referenced by this profile."""
        from ..resolvers.profile import resolve_profile_member_type

        return await resolve_profile_member_type(self, info)
