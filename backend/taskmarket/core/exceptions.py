# backend/taskmarket/core/exceptions.py
"""
Domain-specific exceptions for the TaskMarket platform.

Every exception carries its HTTP status code so the API layer can map it
without knowing the business rule that raised it.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

HTTP_422_UNPROCESSABLE: int = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", 422)


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ValidationException(DomainException):
    """Raised when business validation fails."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictException(DomainException):
    """Raised when there's a conflict with existing data."""

    status_code = status.HTTP_409_CONFLICT


class BusinessRuleException(DomainException):
    """Raised when a business rule is violated."""

    status_code = HTTP_422_UNPROCESSABLE


class ServiceException(DomainException):
    """Raised when a service operation fails."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message or "An error occurred processing your request",
                "code": self.code,
                "details": self.details if self.details else {},
            },
        )


# Specific business exceptions


class SlugConflictException(ConflictException):
    """Raised when a new catalog entry slugifies to an existing slug."""

    def __init__(self, entity: str, slug: str):
        super().__init__(
            message=f"{entity} with this slug already exists",
            code="SLUG_CONFLICT",
            details={"entity": entity, "slug": slug},
        )


class InvalidStatusTransitionException(ConflictException):
    """Raised when a status change is not in the allowed-transitions table."""

    def __init__(self, current_status: str, new_status: str):
        super().__init__(
            message=f"Invalid status transition from {current_status} to {new_status}",
            code="INVALID_STATUS_TRANSITION",
            details={"from": current_status, "to": new_status},
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues, query failures, or
    constraint violations.
    """


def is_db_pool_exhaustion(exc: Exception) -> bool:
    """Check if an exception indicates DB connection pool exhaustion."""
    error_str = str(exc).lower()
    return "queuepool" in error_str or (
        "timeout" in error_str and ("connection" in error_str or "pool" in error_str)
    )


def raise_503_if_pool_exhaustion(exc: Exception) -> None:
    """
    Convert DB pool exhaustion errors to HTTP 503 (Service Unavailable).

    Raises:
        HTTPException: 503 if pool exhaustion detected
        Does not raise if not pool exhaustion (caller should re-raise original)
    """
    if is_db_pool_exhaustion(exc):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service temporarily overloaded. Please retry.",
            headers={"Retry-After": "2"},
        )
