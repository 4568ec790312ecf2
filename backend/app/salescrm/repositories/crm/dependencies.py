"""Session helpers for request handlers and standalone scripts."""

from contextlib import contextmanager
from typing import Generator, Iterator

from sqlalchemy.orm import Session

from salescrm.repositories.crm.database import SessionLocal


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request, closed afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Commit on success, roll back on error and always close the session."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
