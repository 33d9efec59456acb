# This project was developed with assistance from AI tools.
"""Tests for public reference data and health endpoints."""

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from db import get_db, get_db_service
from fastapi import FastAPI
from fastapi.testclient import TestClient

from portal.routes import health, public


def _session_returning(rows) -> AsyncMock:
    result = MagicMock()
    result.scalars.return_value.all.return_value = rows
    session = AsyncMock()
    session.execute = AsyncMock(return_value=result)
    return session


def _public_client(session: AsyncMock) -> TestClient:
    app = FastAPI()
    app.include_router(public.router, prefix="/api/public")

    async def fake_db():
        yield session

    app.dependency_overrides[get_db] = fake_db
    return TestClient(app)


def test_categories_hide_inactive_subcategories():
    category = SimpleNamespace(
        id=1,
        name="Merit Scholarship",
        description="For academic excellence",
        subcategories=[
            SimpleNamespace(id=1, name="Full Merit", description=None, amount=Decimal("20000.00"), is_active=True),
            SimpleNamespace(id=2, name="Retired Grant", description=None, amount=None, is_active=False),
        ],
    )
    resp = _public_client(_session_returning([category])).get("/api/public/categories")

    assert resp.status_code == 200
    body = resp.json()
    assert body[0]["name"] == "Merit Scholarship"
    assert [s["name"] for s in body[0]["subcategories"]] == ["Full Merit"]


def test_schools_listing():
    school = SimpleNamespace(
        id=1, name="University of Caloocan City", campus="Congressional", classification="public"
    )
    resp = _public_client(_session_returning([school])).get("/api/public/schools")

    assert resp.status_code == 200
    assert resp.json() == [
        {
            "id": 1,
            "name": "University of Caloocan City",
            "campus": "Congressional",
            "classification": "public",
        }
    ]


def _health_client(db_ok: bool) -> TestClient:
    app = FastAPI()
    app.include_router(health.router, prefix="/health")
    db_service = MagicMock()
    db_service.health_check = AsyncMock(return_value=db_ok)

    async def fake_db_service():
        return db_service

    app.dependency_overrides[get_db_service] = fake_db_service
    return TestClient(app)


def test_health_ok():
    resp = _health_client(True).get("/health/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_health_degraded_when_database_down():
    resp = _health_client(False).get("/health/")
    assert resp.status_code == 503
    assert resp.json()["database"] == "unavailable"
