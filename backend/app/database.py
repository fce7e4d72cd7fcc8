"""Database engine and helpers.

This module builds the SQLModel/SQLAlchemy engine from a database URL
and provides the session dependency used by the HTTP layer. The engine
is created once per application by `app.main.create_app` and kept on
`app.state.engine`, so nothing here holds a module-level connection.
"""

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session


def build_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine for `url`.

    SQLite connections are shared across FastAPI's worker threads, and
    in-memory SQLite databases use a single static connection so every
    session sees the same tables.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, echo=echo)
    kwargs = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return create_engine(url, echo=echo, **kwargs)


def create_db_and_tables(engine: Engine):
    """Create database tables using SQLModel metadata.

    Intended for local development and tests; production deployments
    should rely on a proper migration tool (alembic) instead.
    """
    # register the table classes on SQLModel.metadata
    from . import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session(request: Request):
    """Yield a database `Session` bound to the application's engine.

    The generator yields a session and ensures it is closed when the
    request scope finishes.
    """
    with Session(request.app.state.engine) as session:
        yield session
