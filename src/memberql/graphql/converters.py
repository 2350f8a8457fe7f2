"""
Conversion from ORM rows to GraphQL output types
"""

from ..dbmodels import MemberTypes, Posts, Profiles, Users
from .types.member_type import MemberType, MemberTypeId
from .types.post import Post
from .types.profile import Profile
from .types.user import User


def convert_db_to_graphql_member_type(row: MemberTypes) -> MemberType:
    return MemberType(
        id=MemberTypeId(row.id),
        discount=row.discount,
        posts_limit_per_month=row.posts_limit_per_month,
    )


def convert_db_to_graphql_user(row: Users) -> User:
    return User(id=row.id, name=row.name, balance=row.balance)


def convert_db_to_graphql_post(row: Posts) -> Post:
    return Post(id=row.id, title=row.title, content=row.content, author_id=row.author_id)


def convert_db_to_graphql_profile(row: Profiles) -> Profile:
    return Profile(
        id=row.id,
        is_male=row.is_male,
        year_of_birth=row.year_of_birth,
        user_id=row.user_id,
        member_type_id=MemberTypeId(row.member_type_id),
    )
