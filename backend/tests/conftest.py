import os

# Point the module-level app at an in-memory database before `app` is imported.
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from app.config import Settings
from app.database import build_engine, create_db_and_tables
from app.interceptors import InterceptorRegistry, LoggingInterceptor
from app.main import create_app


@pytest.fixture
def engine():
    """A fresh in-memory SQLite database per test."""
    eng = build_engine("sqlite://")
    create_db_and_tables(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture
def make_client(engine):
    """Build a TestClient, optionally with a custom interceptor registry."""
    def _make(interceptors=None, **kwargs):
        if interceptors is None:
            interceptors = InterceptorRegistry()
            interceptors.add(LoggingInterceptor())
        app = create_app(Settings(), engine=engine, interceptors=interceptors)
        return TestClient(app, **kwargs)
    return _make


@pytest.fixture
def client(make_client):
    return make_client()
