"""
Shared pytest fixtures and configuration for all tests.
"""

import os
import sys
from collections.abc import AsyncGenerator, Generator
from pathlib import Path
from types import SimpleNamespace
from typing import Any
from uuid import uuid4

import pytest
import pytest_asyncio

# Add src directory to path so imports work without an editable install
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture(scope="function")
def database_url(tmp_path: Path) -> str:
    """Return the URL of a throwaway SQLite database file."""
    return f"sqlite:///{tmp_path / 'memberql_test.db'}"


@pytest_asyncio.fixture(scope="function")
async def db(database_url: str) -> AsyncGenerator[None, None]:
    """Initialize the shared engine against a fresh database with all tables and tiers."""
    from memberql.database.connection import (
        create_all,
        dispose_database,
        get_async_session,
        init_database,
        reset_database,
    )
    from memberql.database.seed_data import ensure_member_types
    from memberql.repository import reset_repository

    reset_database()
    reset_repository()
    init_database(database_url, force_reinit=True)
    await create_all()

    async with get_async_session() as session:
        await ensure_member_types(session)

    yield

    reset_repository()
    await dispose_database()


@pytest_asyncio.fixture(scope="function")
async def seeded(db: None) -> SimpleNamespace:
    """Populate users, profiles, posts and subscriptions.

    alice (BASIC) subscribes to bob, bob (BUSINESS) subscribes to alice,
    carol has no profile and no posts and subscribes to bob.
    """
    from memberql.database.connection import get_async_session
    from memberql.dbmodels import Posts, Profiles, SubscribersOnAuthors, Users

    ids = SimpleNamespace(
        alice=uuid4(),
        bob=uuid4(),
        carol=uuid4(),
        alice_profile=uuid4(),
        bob_profile=uuid4(),
        alice_post_1=uuid4(),
        alice_post_2=uuid4(),
        bob_post=uuid4(),
    )

    async with get_async_session() as session:
        session.add_all(
            [
                Users(id=ids.alice, name="Alice", balance=120.5),
                Users(id=ids.bob, name="Bob", balance=0.0),
                Users(id=ids.carol, name="Carol", balance=42.0),
            ]
        )
        await session.flush()
        session.add_all(
            [
                Profiles(
                    id=ids.alice_profile,
                    is_male=False,
                    year_of_birth=1990,
                    user_id=ids.alice,
                    member_type_id="BASIC",
                ),
                Profiles(
                    id=ids.bob_profile,
                    is_male=True,
                    year_of_birth=1985,
                    user_id=ids.bob,
                    member_type_id="BUSINESS",
                ),
                Posts(id=ids.alice_post_1, title="Hello", content="First", author_id=ids.alice),
                Posts(id=ids.alice_post_2, title="Again", content="Second", author_id=ids.alice),
                Posts(id=ids.bob_post, title="Bob here", content="Hi", author_id=ids.bob),
                SubscribersOnAuthors(subscriber_id=ids.alice, author_id=ids.bob),
                SubscribersOnAuthors(subscriber_id=ids.bob, author_id=ids.alice),
                SubscribersOnAuthors(subscriber_id=ids.carol, author_id=ids.bob),
            ]
        )

    return ids


@pytest_asyncio.fixture(scope="function")
async def client(db: None) -> AsyncGenerator[Any, None]:
    """HTTP client bound to the ASGI app (no network, no lifespan)."""
    from httpx import ASGITransport, AsyncClient

    from memberql.api.app import create_app

    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line(  # type: ignore[reportUnknownMemberType]
        "markers", "requires_db: mark test as requiring database connection"
    )
    config.addinivalue_line("markers", "integration: mark test as integration test")  # type: ignore[reportUnknownMemberType]
    config.addinivalue_line("markers", "unit: mark test as unit test")  # type: ignore[reportUnknownMemberType]
