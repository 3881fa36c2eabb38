"""
PetClinic Backend — Service Helpers
=====================================

What:  The error boundary shared by every domain service, and a helper to
       drain lazy partition scans.
How:   `service_boundary` lets the application's own error kinds pass
       through untouched and wraps anything else into StorageError, so the
       API layer only ever sees the documented kinds.
"""

import functools
import logging
from typing import AsyncIterator, List, TypeVar

from petclinic.exceptions import PetClinicError, StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def service_boundary(func):
    """Wrap unexpected exceptions from a service coroutine into StorageError."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except PetClinicError:
            raise
        except Exception as e:
            logger.error("Unexpected error in %s: %s", func.__qualname__, str(e), exc_info=True)
            raise StorageError(
                operation=func.__name__,
                context={"error_type": type(e).__name__},
            ) from e

    return wrapper


async def collect(rows: AsyncIterator[T]) -> List[T]:
    return [row async for row in rows]
