"""Database configuration and session management."""

import logging
from collections.abc import Generator
from functools import lru_cache
from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from notebook.config import get_settings
from notebook.exceptions import InternalFailure, NotebookError

logger = logging.getLogger(__name__)

Base: Any = declarative_base()


@lru_cache
def get_engine() -> Engine:
    """Create the process-wide engine on first use."""
    database_url = get_settings().database_url
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


@lru_cache
def get_sessionmaker() -> sessionmaker:
    """Get the session factory bound to the process-wide engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = get_sessionmaker()()
    try:
        yield db
    finally:
        db.close()


def commit_or_fail(
    db: Session, operation: str, on_conflict: NotebookError | None = None
) -> None:
    """Commit the session, turning store failures into application errors.

    The session is rolled back on failure. A unique or foreign key violation
    raises ``on_conflict`` when one is given; everything else becomes an
    InternalFailure whose context names the operation.
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if on_conflict is None:
            logger.error(f"{operation} violated a constraint: {e}")
            raise InternalFailure(context={"operation": operation}) from e
        logger.info(f"{operation} rejected by a constraint: {on_conflict.message}")
        raise on_conflict from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"{operation} failed: {e}")
        raise InternalFailure(context={"operation": operation}) from e
