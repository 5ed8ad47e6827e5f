# backend/homelist/exceptions.py
"""Error types shared by the API services and the client."""
from __future__ import annotations

from typing import Optional


class HomelistError(Exception):
    """Base exception for all homelist errors."""


class ApartmentConflictError(HomelistError):
    """Raised when (project, unitNumber) already exists, ignoring case."""


class ApiError(HomelistError):
    """Raised by the client when the API answers with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ApartmentNotFoundError(ApiError):
    """Raised by the client when a detail lookup returns 404."""
