"""
Tests for application startup and the HTTP surface around the GraphQL router
"""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from memberql.api.app import create_app, lifespan
from memberql.config import settings
from memberql.database.connection import reset_database
from memberql.repository import reset_repository

pytestmark = pytest.mark.asyncio


@pytest.fixture
def unreachable_database(monkeypatch, tmp_path):
    """Point the service at a SQLite file inside a directory that does not exist."""
    reset_database()
    reset_repository()
    monkeypatch.setenv(
        "MEMBERQL_DATABASE_URL", f"sqlite:///{tmp_path / 'missing' / 'nowhere.db'}"
    )
    yield
    reset_database()
    reset_repository()


class TestLifespan:
    async def test_production_refuses_to_start_without_database(
        self, monkeypatch, unreachable_database
    ):
        monkeypatch.setattr(settings, "environment", "production")

        with pytest.raises(RuntimeError, match="Database unavailable"):
            async with lifespan(FastAPI()):
                pass

    async def test_development_starts_without_database(self, monkeypatch, unreachable_database):
        monkeypatch.setattr(settings, "environment", "development")
        entered = False

        async with lifespan(FastAPI()):
            entered = True

        assert entered

    @pytest.mark.requires_db
    async def test_starts_with_reachable_database(self, monkeypatch, database_url):
        reset_database()
        monkeypatch.setenv("MEMBERQL_DATABASE_URL", database_url)
        monkeypatch.setattr(settings, "environment", "production")

        async with lifespan(FastAPI()):
            pass


@pytest.mark.requires_db
class TestTransport:
    async def test_queries_via_get_are_not_executed(self, client):
        response = await client.get("/", params={"query": "{ memberTypes { id } }"})

        assert response.status_code >= 400
        assert "BASIC" not in response.text

    async def test_graphiql_disabled_by_default(self, db, monkeypatch):
        monkeypatch.setattr(settings, "graphiql", False)
        app = create_app()

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
            response = await c.get("/", headers={"Accept": "text/html"})

        assert response.status_code == 404

    async def test_graphiql_served_when_enabled(self, db, monkeypatch):
        monkeypatch.setattr(settings, "graphiql", True)
        app = create_app()

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
            response = await c.get("/", headers={"Accept": "text/html"})

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "graphiql" in response.text.lower()

    async def test_post_still_served_when_graphiql_enabled(self, db, monkeypatch):
        monkeypatch.setattr(settings, "graphiql", True)
        app = create_app()

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
            response = await c.post("/", json={"query": "{ memberTypes { id } }"})

        assert response.status_code == 200
        assert {t["id"] for t in response.json()["data"]["memberTypes"]} == {"BASIC", "BUSINESS"}
