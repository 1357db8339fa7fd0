"""
Custom exception classes and HTTP error helpers for CineLog.
"""

from typing import Any, Optional

from fastapi import HTTPException, status


class CineLogException(Exception):
    """Base exception for CineLog application."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class MetadataProviderError(CineLogException):
    """Raised when the external content metadata provider fails or answers non-2xx."""

    pass


def raise_not_found(resource_type: str, identifier: Any = None, message: str = None) -> None:
    """
    Raise a 404 HTTPException with descriptive message.

    Args:
        resource_type: Type of resource (e.g., "Watch log entry", "Friend request")
        identifier: The ID/identifier that was not found
        message: Custom message (overrides default)
    """
    if message:
        detail = message
    elif identifier:
        detail = f"{resource_type} with id '{identifier}' not found"
    else:
        detail = f"{resource_type} not found"

    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


def raise_bad_request(message: str, field: str = None) -> None:
    """Raise a 400 HTTPException, optionally naming the offending field."""
    if field:
        detail = f"Invalid value for '{field}': {message}"
    else:
        detail = message

    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def raise_conflict(message: str, existing: Any = None) -> None:
    """
    Raise a 409 HTTPException for conflicts.

    Args:
        message: Description of the conflict
        existing: Description of existing conflicting resource
    """
    if existing:
        detail = f"{message} (existing: {existing})"
    else:
        detail = message

    raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail)


def raise_internal_error(operation: str) -> None:
    """Raise a 500 HTTPException for a failed operation."""
    detail = f"Failed to {operation}. Please try again or contact support."

    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=detail,
    )


def raise_bad_gateway(provider: str, error: Exception = None) -> None:
    """Raise a 502 HTTPException when an upstream provider fails."""
    detail = f"{provider} is unavailable"
    if error is not None and str(error):
        detail = f"{detail}: {error}"

    raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)
