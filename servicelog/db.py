"""Database engine, session factory, and the unit-of-work helper."""

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()


def make_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine; SQLite connections get foreign key enforcement."""
    engine = create_engine(url, echo=echo, pool_pre_ping=True)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create all tables that don't exist yet."""
    # Import models so they register on Base.metadata
    from . import car, reminder, service_record  # noqa: F401

    Base.metadata.create_all(engine)


@contextmanager
def transaction(session: Session) -> Iterator[Session]:
    """
    Run a block of writes as one unit of work.

    Commits when the block exits cleanly. Any exception rolls back every
    write made in the block and is re-raised.
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
