# backend/tests/conftest.py
"""
Pytest configuration for the TaskMarket backend.

Tests run against an in-memory SQLite database. Every test gets its own
engine so commits made by the services never leak between tests.
"""

import os

# Settings are read at import time; point them at SQLite before any
# taskmarket import.
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("PROMETHEUS_DISABLE_CACHE", "1")

from datetime import datetime, timedelta, timezone
from itertools import count
from typing import Any, Optional

from fastapi.testclient import TestClient
import pytest
from sqlalchemy.orm import Session, sessionmaker

from taskmarket.api.dependencies.database import get_db
from taskmarket.database import Base, create_db_engine
from taskmarket.main import app
import taskmarket.models  # noqa: F401
from taskmarket.models.category import ServiceCategory
from taskmarket.models.location import Location
from taskmarket.models.service import Service
from taskmarket.models.task import Task
from taskmarket.models.tasker import Tasker, TaskerPortfolioItem, TaskerSkill
from taskmarket.models.user import User
from taskmarket.utils.slug import slugify


@pytest.fixture
def engine():
    test_engine = create_db_engine("sqlite://")
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


@pytest.fixture
def db(session_factory) -> Session:
    """Create a fresh database session for each test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db):
    """Create a test client that shares the test session."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class Seeder:
    """Insert rows directly, bypassing the service layer."""

    def __init__(self, db: Session):
        self.db = db
        self._seq = count(1)

    def _add(self, row: Any) -> Any:
        self.db.add(row)
        self.db.commit()
        return row

    def user(self, **overrides: Any) -> User:
        n = next(self._seq)
        values = {
            "email": f"user{n}@example.com",
            "first_name": "Ada",
            "last_name": f"Tester{n}",
        }
        values.update(overrides)
        return self._add(User(**values))

    def location(
        self,
        user: Optional[User] = None,
        latitude: Optional[float] = 6.5244,
        longitude: Optional[float] = 3.3792,
        **overrides: Any,
    ) -> Location:
        user = user or self.user()
        return self._add(
            Location(user_id=user.id, latitude=latitude, longitude=longitude, city="Lagos", **overrides)
        )

    def category(self, name: Optional[str] = None, **overrides: Any) -> ServiceCategory:
        name = name or f"Category {next(self._seq)}"
        values = {"name": name, "slug": slugify(name)}
        values.update(overrides)
        return self._add(ServiceCategory(**values))

    def service(
        self, name: Optional[str] = None, category: Optional[ServiceCategory] = None, **overrides: Any
    ) -> Service:
        name = name or f"Service {next(self._seq)}"
        values = {
            "name": name,
            "slug": slugify(name),
            "category_id": category.id if category is not None else None,
        }
        values.update(overrides)
        return self._add(Service(**values))

    def tasker(
        self,
        user: Optional[User] = None,
        location: Optional[Location] = None,
        **overrides: Any,
    ) -> Tasker:
        user = user or self.user(role="tasker")
        values = {
            "user_id": user.id,
            "location_id": location.id if location is not None else None,
            "headline": f"Reliable help from {user.first_name}",
        }
        values.update(overrides)
        return self._add(Tasker(**values))

    def skill(self, tasker: Tasker, service: Service, hourly_rate: int = 500000, **overrides: Any) -> TaskerSkill:
        return self._add(
            TaskerSkill(tasker_id=tasker.id, service_id=service.id, hourly_rate=hourly_rate, **overrides)
        )

    def portfolio_item(self, tasker: Tasker, display_order: int = 0, **overrides: Any) -> TaskerPortfolioItem:
        n = next(self._seq)
        values = {
            "tasker_id": tasker.id,
            "title": f"Job {n}",
            "image_url": f"https://img.example.com/{n}.jpg",
            "display_order": display_order,
        }
        values.update(overrides)
        return self._add(TaskerPortfolioItem(**values))

    def task(
        self,
        service: Service,
        user: Optional[User] = None,
        name: Optional[str] = None,
        **overrides: Any,
    ) -> Task:
        user = user or self.user()
        name = name or f"Task {next(self._seq)}"
        values = {"name": name, "slug": slugify(name), "user_id": user.id, "service_id": service.id}
        values.update(overrides)
        return self._add(Task(**values))


@pytest.fixture
def seed(db) -> Seeder:
    return Seeder(db)


@pytest.fixture
def booking_window():
    start = datetime(2030, 1, 6, 9, 0, tzinfo=timezone.utc)
    return start, start + timedelta(hours=2)
