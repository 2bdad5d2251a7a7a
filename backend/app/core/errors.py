"""
Error taxonomy shared by the storage layer and the HTTP handlers.

Each error carries the HTTP status it maps to and a message that is safe to
return to the caller. Storage failures never expose driver detail.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from fastapi import status
from pymongo.errors import PyMongoError


class PortfolioError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, public_message: str | None = None):
        super().__init__(message)
        self.public_message = public_message or message


class ValidationError(PortfolioError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message)
        self.fields = list(fields or [])


class NotFoundError(PortfolioError):
    status_code = status.HTTP_404_NOT_FOUND


class StorageError(PortfolioError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message, public_message="Internal server error")


@contextmanager
def translate_storage_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except PyMongoError as exc:
        raise StorageError(f"{operation} failed: {exc}") from exc
