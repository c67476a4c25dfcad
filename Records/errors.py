# backend/Records/errors.py
import logging
from contextlib import contextmanager

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)


@contextmanager
def storage_call(action: str, conflict: str = "Record already exists"):
    """
    Wrap a record-store call at the route boundary.

    IntegrityError (duplicate badge/case number, email) → 409.
    Any other database failure is logged and surfaces as a generic 500.
    """
    try:
        yield
    except IntegrityError as exc:
        logger.warning("Conflict while trying to %s: %s", action, exc.orig)
        raise HTTPException(status.HTTP_409_CONFLICT, detail=conflict)
    except SQLAlchemyError:
        logger.exception("Error while trying to %s", action)
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to {action}")


def not_found(entity: str) -> HTTPException:
    return HTTPException(status.HTTP_404_NOT_FOUND, detail=f"{entity} not found")
