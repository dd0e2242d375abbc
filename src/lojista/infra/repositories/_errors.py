"""Translate driver failures into the domain error taxonomy."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError

from ...errors import RepositoryUnavailable
from ...logging_config import get_logger

logger = get_logger(__name__)


@contextmanager
def repository_errors(operation: str) -> Iterator[None]:
    """Re-raise SQLAlchemy errors as ``RepositoryUnavailable``; no retries."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error(
            "Repository operation failed",
            extra={"operation": operation, "error": exc.__class__.__name__},
        )
        raise RepositoryUnavailable(operation, str(exc.__class__.__name__)) from exc
