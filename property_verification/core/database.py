"""Database engine, session management and table initialization.

The engine is created lazily so importing this module never touches
settings or opens a connection.
"""

import logging
from collections.abc import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from property_verification.core.settings import get_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all records."""


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create a SQLAlchemy engine.

    Args:
        database_url (str): SQLAlchemy database URL.
        echo (bool): Echo SQL statements.

    Returns:
        Engine: The engine instance.
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, echo=echo, connect_args=connect_args)


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    """
    Create a session factory bound to an engine.

    Args:
        engine (Engine): Engine to bind.

    Returns:
        sessionmaker[Session]: The session factory.
    """
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    """
    Return the application engine, creating it on first call.

    Returns:
        Engine: The application engine.
    """
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = build_engine(settings.database.url, echo=settings.database.echo)
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    """
    Return the application session factory, creating it on first call.

    Returns:
        sessionmaker[Session]: The session factory.
    """
    global _session_factory
    if _session_factory is None:
        _session_factory = build_session_factory(get_engine())
    return _session_factory


def get_db() -> Iterator[Session]:
    """
    FastAPI dependency that yields a database session per request.

    Yields:
        Session: A database session, closed after the request.
    """
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create all tables that don't exist yet."""
    # Registers the records with Base.metadata
    import property_verification.models.records  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
    logger.info("Database tables initialized")


def reset_engine() -> None:
    """Dispose the application engine and forget the session factory."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None
