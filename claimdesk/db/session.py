import logging
from contextlib import contextmanager
from typing import Optional

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlmodel import create_engine, Session, SQLModel

from claimdesk.core.config import Settings

logger = logging.getLogger(__name__)


class Database:
    """
    Owns the engine (and with it the connection pool).
    Built once by the application lifespan and kept on `app.state.db`.
    """

    def __init__(self, settings: Settings, engine: Optional[Engine] = None):
        self.settings = settings
        self._engine = engine

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self.init()
        return self._engine

    def init(self) -> Engine:
        if self._engine is not None:
            return self._engine

        url = self.settings.DATABASE_URL
        kwargs = {"echo": self.settings.DB_ECHO, "pool_pre_ping": True}
        # Use connect_args={"check_same_thread": False} only for SQLite
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
        else:
            kwargs.update(
                pool_size=self.settings.DB_POOL_SIZE,
                max_overflow=self.settings.DB_MAX_OVERFLOW,
                pool_recycle=self.settings.DB_POOL_RECYCLE,
            )
        self._engine = create_engine(url, **kwargs)
        logger.info(f"Database engine created ({self._engine.dialect.name})")
        return self._engine

    def close(self):
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            logger.info("Database engine disposed")

    @contextmanager
    def session(self):
        with Session(self.engine) as session:
            yield session

    @contextmanager
    def transaction(self):
        with Session(self.engine) as session:
            with atomic(session):
                yield session


@contextmanager
def atomic(session: Session):
    """Commit on success, roll everything back on any failure."""
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise


def get_session(request: Request):
    with request.app.state.db.session() as session:
        yield session


def create_db_and_tables(engine: Engine):
    # Importing the models registers every table on the metadata
    from claimdesk.db import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
