"""Database configuration and helper functions.

This module builds the SQLAlchemy engine and session factory used by
the request handlers and the liveness sweeper. The ``Base`` class is
imported by the models module to declare the two tables. A ``get_db``
dependency is provided for FastAPI routes to obtain a session scoped
to the request lifecycle.
"""

from __future__ import annotations

import time
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from fastapi import Request


class Base(DeclarativeBase):
    """Base class for declarative models.

    All ORM models should inherit from this class. It exposes the
    ``metadata`` attribute used by SQLAlchemy to create the tables.
    """


def make_engine(database_url: str, echo: bool = False) -> Engine:
    url = make_url(database_url)
    # only SQLite needs that arg
    opts = {"check_same_thread": False} if url.drivername.startswith("sqlite") else {}
    # The pool_pre_ping flag ensures broken connections are detected and
    # recycled automatically.
    return create_engine(database_url, echo=echo, pool_pre_ping=True, connect_args=opts)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def wait_for_db(engine: Engine, max_tries: int = 60, delay_seconds: float = 1.0):
    """Poll the DB until a trivial query works (or give up)."""
    last_err = None
    for attempt in range(1, max_tries + 1):
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return
        except Exception as e:
            last_err = e
            time.sleep(delay_seconds)
    raise RuntimeError(f"Database not ready after {max_tries} tries") from last_err


def get_db(request: Request):
    """FastAPI dependency that yields a database session.

    The session factory lives on ``app.state`` and the session is
    closed after the request is processed.
    """
    session = request.app.state.session_factory()
    try:
        yield session
    finally:
        session.close()
