from __future__ import annotations
import logging
import time
from contextlib import asynccontextmanager
from typing import Callable, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .config import Settings
from .db import Base, make_engine, make_session_factory, wait_for_db
# Import models so SQLAlchemy knows about all tables before create_all()
# (lint: F401 unused import on purpose)
from . import models  # noqa: F401
from .errors import StoreError
from .routes import messages, participants
from .sweeper import ParticipantSweeper

log = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    try:
        log.info("Waiting for database to be ready...")
        wait_for_db(app.state.engine, max_tries=settings.db_wait_tries, delay_seconds=1.0)
        log.info("Database is ready. Creating tables if they don't exist...")
        Base.metadata.create_all(bind=app.state.engine)
        log.info("Table creation complete.")
    except Exception as e:
        # Let Uvicorn crash early with a clear reason
        log.exception("Startup failed while preparing the database: %s", e)
        raise

    sweeper: ParticipantSweeper = app.state.sweeper
    sweeper.start()
    log.info(
        "Participant sweeper started (every %ss, timeout %ss)",
        sweeper.interval, sweeper.timeout,
    )
    try:
        yield
    finally:
        await sweeper.stop()
        app.state.engine.dispose()
        log.info("Participant sweeper stopped.")


async def store_error_handler(request: Request, exc: SQLAlchemyError):
    log.error("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
    err = StoreError()
    return JSONResponse(status_code=err.status_code, content={"detail": err.detail})


def create_app(settings: Optional[Settings] = None,
               clock: Callable[[], float] = time.time) -> FastAPI:
    """Build the API with its own engine, session factory and sweeper."""
    settings = settings or Settings.from_env()
    app = FastAPI(title="Bate-papo API", lifespan=lifespan)

    engine = make_engine(settings.database_url, echo=settings.sql_echo)
    app.state.settings = settings
    app.state.clock = clock
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)
    app.state.sweeper = ParticipantSweeper(
        app.state.session_factory,
        interval=settings.sweep_interval_seconds,
        timeout=settings.session_timeout_seconds,
        clock=clock,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins, allow_methods=["*"], allow_headers=["*"],
    )
    app.add_exception_handler(SQLAlchemyError, store_error_handler)

    # Routes
    app.include_router(participants.router)
    app.include_router(messages.router)
    return app


app = create_app()


def run() -> None:
    settings: Settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
