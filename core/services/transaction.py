"""Commit/rollback scope shared by the project and task services."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


@contextmanager
def committing(session: Session, action: str) -> Iterator[Session]:
    """Commit when the block finishes; on any error roll back and re-raise."""
    try:
        yield session
        session.commit()
    except Exception as exc:
        session.rollback()
        logger.warning("Rolled back %s: %s", action, exc)
        raise


__all__ = ["committing"]
