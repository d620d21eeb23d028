"""
Database engine and session factory
"""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from .config import settings

# Base class for models
Base = declarative_base()


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _is_memory_sqlite(url: str) -> bool:
    return _is_sqlite(url) and (url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url)


def create_db_engine(url: str, echo: bool = False) -> Engine:
    """
    Engine for the orders database. SQLite files run in WAL mode; an in-memory
    SQLite database is pinned to one connection so every session sees the same tables.
    """
    kwargs = {"echo": echo}
    if _is_sqlite(url):
        kwargs["connect_args"] = {"check_same_thread": False}
    if _is_memory_sqlite(url):
        kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    db_engine = create_engine(url, **kwargs)

    if _is_sqlite(url) and not _is_memory_sqlite(url):
        @event.listens_for(db_engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

    return db_engine


def create_session_factory(db_engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


engine = create_db_engine(settings.DATABASE_URL, echo=settings.DEBUG)
SessionLocal = create_session_factory(engine)
