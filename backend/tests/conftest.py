from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from bizcore.config import Settings
from bizcore.database import Base, build_session_factory
from bizcore.main import create_app
from bizcore.relations import build_relation_graph


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def relations():
    return build_relation_graph()


@pytest.fixture()
def settings() -> Settings:
    return Settings(DATABASE_URL="sqlite+pysqlite://", LOG_LEVEL="WARNING")


@pytest.fixture()
def client(settings, session_factory):
    app = create_app(settings, session_factory=session_factory)
    with TestClient(app) as test_client:
        yield test_client
