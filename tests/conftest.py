"""Shared fixtures: in-memory SQLite database and a FastAPI test client."""

import os

# Settings are read on first import of app.*; keep tests off Postgres.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RUN_MIGRATIONS", "false")

import uuid
from collections.abc import Callable, Generator
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.database import get_session
from app.main import app
from app.models.product import Product, ProductDetail
from app.models.subscription import SubscriptionPlan  # noqa: F401


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Fresh in-memory database per test, shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine: Engine) -> Generator[TestClient, None, None]:
    """Test client whose get_session dependency uses the test database."""

    def override_get_session() -> Generator[Session, None, None]:
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_product() -> Callable[..., Product]:
    """Build an unsaved Product, with a detail row when `kind` is given.

    Each call gets a created_at one second after the previous one so that
    listing order is deterministic.
    """
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    counter = {"n": 0}

    def _make(
        name: str = "Widget",
        price: str = "19.99",
        description: str = "",
        kind: str | None = None,
        **detail_fields,
    ) -> Product:
        counter["n"] += 1
        stamp = base + timedelta(seconds=counter["n"])
        product = Product(
            id=uuid.uuid4(),
            name=name,
            description=description,
            price=Decimal(price),
            created_at=stamp,
            updated_at=stamp,
        )
        if kind is not None:
            product.kind = kind
            product.detail = ProductDetail(
                id=uuid.uuid4(),
                product_id=product.id,
                kind=kind,
                **detail_fields,
            )
        return product

    return _make
