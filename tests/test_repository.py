"""
Tests for the read-only repository against a SQLite database
"""

import uuid

import pytest

from memberql.database.connection import get_session_factory
from memberql.repository import Repository, get_repository, reset_repository

pytestmark = [pytest.mark.requires_db, pytest.mark.asyncio]


@pytest.fixture
def repository(db) -> Repository:
    return Repository(get_session_factory())


async def test_member_types_seeded(repository):
    tiers = {t.id: t for t in await repository.list_member_types()}

    assert set(tiers) == {"BASIC", "BUSINESS"}
    assert tiers["BASIC"].posts_limit_per_month == 20
    assert tiers["BUSINESS"].discount == 7.7


async def test_point_lookups(repository, seeded):
    assert (await repository.get_user(seeded.alice)).name == "Alice"
    assert (await repository.get_post(seeded.bob_post)).author_id == seeded.bob
    assert (await repository.get_profile(seeded.bob_profile)).member_type_id == "BUSINESS"
    assert (await repository.get_profile_by_user(seeded.alice)).id == seeded.alice_profile
    assert await repository.get_member_type("PREMIUM") is None


async def test_point_lookup_misses(repository, seeded):
    missing = uuid.uuid4()

    assert await repository.get_user(missing) is None
    assert await repository.get_post(missing) is None
    assert await repository.get_profile(missing) is None
    assert await repository.get_profile_by_user(seeded.carol) is None


async def test_posts_by_author(repository, seeded):
    alice_posts = await repository.list_posts_by_author(seeded.alice)

    assert {p.id for p in alice_posts} == {seeded.alice_post_1, seeded.alice_post_2}
    assert await repository.list_posts_by_author(seeded.carol) == []


async def test_subscriptions(repository, seeded):
    assert [u.id for u in await repository.list_subscribed_to(seeded.alice)] == [seeded.bob]
    assert {u.id for u in await repository.list_subscribers(seeded.bob)} == {
        seeded.alice,
        seeded.carol,
    }
    assert await repository.list_subscribers(seeded.carol) == []


async def test_rows_usable_after_session_closes(repository, seeded):
    users = await repository.list_users()

    # Attributes stay loaded once the per-call session is gone
    assert sorted(u.name for u in users) == ["Alice", "Bob", "Carol"]


async def test_shared_repository_is_cached(db):
    reset_repository()

    first = get_repository()

    assert get_repository() is first
