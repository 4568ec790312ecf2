"""Map service exceptions to HTTP errors."""

from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException, status

from salescrm.services.exceptions import NotFoundError


@contextmanager
def service_errors() -> Iterator[None]:
    """Turn ``NotFoundError`` into 404 and any other ``ValueError`` into 400."""
    try:
        yield
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
