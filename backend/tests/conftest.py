"""Root conftest for tests directory."""

from __future__ import annotations

from typing import Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from rateboard.core.db import Base


@pytest.fixture()
def db() -> Generator[Session, None, None]:
    """Provide an in-memory SQLite session."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    # Ensure models are imported
    import rateboard.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(tmp_path) -> Generator[sessionmaker, None, None]:
    """File-backed SQLite so concurrent threads get their own connections."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'concurrency.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    import rateboard.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        engine.dispose()


@pytest.fixture()
def rate_payload() -> dict:
    return {
        "gold_24k_sale": 72500.0,
        "gold_24k_purchase": 71000.0,
        "gold_22k_sale": 66500.0,
        "gold_22k_purchase": 65000.0,
        "gold_18k_sale": 54400.0,
        "gold_18k_purchase": 53000.0,
        "silver_per_kg_sale": 88000.0,
        "silver_per_kg_purchase": 86500.0,
    }
