from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker


def engine_url_for(database: str) -> str:
    """Accept either a SQLAlchemy URL or a bare SQLite file path."""
    if "://" in database:
        return database
    return f"sqlite:///{database}"


def get_engine(database: str):
    return create_engine(engine_url_for(database), future=True)


def get_session(database: str) -> Session:
    """Get a SQLAlchemy session (caller must close it)."""
    engine = get_engine(database)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)()


@contextmanager
def session_context(database: str) -> Generator[Session, None, None]:
    """
    Context manager for read-only report sessions.

    The report never writes, so the session is always rolled back and
    closed on exit, whether or not the body raised.

    Usage:
        with session_context(database_url) as session:
            rows = generate_accessions_report(session, params, repo_id=2)
    """
    session = get_session(database)
    try:
        yield session
    finally:
        session.rollback()
        session.close()
