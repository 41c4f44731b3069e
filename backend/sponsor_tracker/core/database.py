# sponsor_tracker/core/database.py
from __future__ import annotations

import logging
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from sponsor_tracker.core.base import Base

logger = logging.getLogger(__name__)


class Database:
    """
    Owns the engine + session factory for one process.

    Built by the app lifespan and stored on `app.state.database`; scripts
    construct their own and call `close()` when done.
    """

    def __init__(self, url: str, **engine_kwargs) -> None:
        self.url = url
        engine_kwargs.setdefault("pool_pre_ping", True)
        self.engine: Engine = create_engine(url, **engine_kwargs)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self) -> Session:
        return self.session_factory()

    def create_all(self) -> None:
        # Import models so they register with the metadata.
        import sponsor_tracker.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Database engine disposed")


def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
