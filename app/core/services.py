"""
Base service layer patterns for business logic encapsulation.

This module provides foundational patterns for the service layer:
- ServiceResult: Standard result wrapper for consistent success/failure handling
- BaseService: Base class with common service utilities
- ErrorCode / ERROR_STATUS: The shared failure taxonomy and its HTTP mapping

Service Layer Philosophy:
    Services encapsulate business logic separate from views and models.
    Views handle HTTP concerns, models handle data, services handle logic.

Pattern Comparison:
    - ServiceResult: Use for expected failures (missing records, membership,
      malformed input)
    - Exceptions: Use for unexpected failures (database errors, bugs)

Usage:
    from core.services import BaseService, ErrorCode, ServiceResult

    class ConversationService(BaseService):
        @classmethod
        def get_by_id(cls, conversation_id, caller) -> ServiceResult[Conversation]:
            conversation = Conversation.objects.filter(pk=conversation_id).first()
            if conversation is None:
                return ServiceResult.failure(
                    "Conversation not found",
                    error_code=ErrorCode.NOT_FOUND,
                )
            return ServiceResult.success(conversation)

    # In view
    result = ConversationService.get_by_id(pk, self.caller)
    if not result.success:
        return Response(result.to_response(), status=result.http_status)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from typing import Any

# Generic type for ServiceResult data
T = TypeVar("T")


class ErrorCode:
    """
    Machine-readable failure codes shared by every service.

    UNAUTHORIZED: No caller identity attached to the request
    PROFILE_NOT_FOUND: Identity resolved but no user record upserted yet
    NOT_FOUND: Referenced conversation, message or user is absent
    FORBIDDEN: Caller lacks membership or ownership for the action
    INVALID_ARGUMENT: Malformed input (empty text, disallowed emoji, ...)
    UNAVAILABLE: Best-effort write could not be stored (presence)
    """

    UNAUTHORIZED = "UNAUTHORIZED"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    UNAVAILABLE = "UNAVAILABLE"


# HTTP status for each error code; unknown codes fall back to 400
ERROR_STATUS: dict[str, int] = {
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.PROFILE_NOT_FOUND: 404,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.INVALID_ARGUMENT: 400,
    ErrorCode.UNAVAILABLE: 503,
}


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Provides consistent success/failure handling without exceptions.
    Use this for expected failures (validation errors, authorization).

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful (None if failed)
        error: Error message if failed (None if successful)
        error_code: Machine-readable error code (see ErrorCode)
        errors: Field-level errors for validation failures

    Usage:
        # Success case
        return ServiceResult.success(message)

        # Failure case
        return ServiceResult.failure("Message not found", ErrorCode.NOT_FOUND)

        # Check result
        result = MessageService.send(conversation_id, caller, text)
        if result:
            message = result.data
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    errors: dict[str, list[str]] | None = field(default=None)

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """
        Create a successful result.

        Args:
            data: The result data

        Returns:
            ServiceResult with success=True and data set
        """
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code for client handling
            errors: Field-level errors (for validation failures)

        Returns:
            ServiceResult with success=False and error details
        """
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            errors=errors,
        )

    @classmethod
    def from_failure(cls, other: ServiceResult) -> ServiceResult[T]:
        """
        Re-wrap another failed result, e.g. an authorization check.

        Example:
            membership = ChatAuthorizationService.assert_member(cid, caller)
            if not membership:
                return ServiceResult.from_failure(membership)
        """
        return cls(
            success=False,
            error=other.error,
            error_code=other.error_code,
            errors=other.errors,
        )

    @property
    def http_status(self) -> int:
        """HTTP status code matching this result's error code."""
        if self.success:
            return 200
        return ERROR_STATUS.get(self.error_code or "", 400)

    def to_response(self) -> dict[str, Any]:
        """
        Convert a failure to the API error body.

        Returns:
            Dict with error and error_code (and field errors if any)
        """
        response: dict[str, Any] = {
            "error": self.error,
            "error_code": self.error_code,
        }
        if self.errors:
            response["errors"] = self.errors
        return response

    def __bool__(self) -> bool:
        """
        Allow using result in boolean context.

        Example:
            if result:  # Same as: if result.success
                ...
        """
        return self.success


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Exception handling for best-effort operations

    Design Notes:
        - Use @classmethod (no instance state)
        - Services should be stateless
        - Use ServiceResult for expected failures
        - Raise exceptions for unexpected failures
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    def handle_exception(
        cls,
        exc: Exception,
        context: str = "",
        error_code: str | None = None,
    ) -> ServiceResult:
        """
        Convert exception to ServiceResult with logging.

        Only for operations whose failures must not reach the caller
        (presence updates). Logs the traceback and returns a failure.

        Args:
            exc: The caught exception
            context: Additional context for logging
            error_code: Error code for the failure result

        Returns:
            ServiceResult with error details
        """
        message = f"{context}: {exc}" if context else str(exc)
        cls.get_logger().exception(message)
        return ServiceResult.failure(
            message,
            error_code=error_code or exc.__class__.__name__.upper(),
        )
