"""
Identity resolution for externally issued tokens.

Token validation (signature, expiry, issuer, audience) is handled by
djangorestframework-simplejwt's JWTStatelessUserAuthentication, which
builds an ExternalIdentity from the validated token without touching the
database. This module maps that principal to a stable internal User.

Two steps:
    1. IdentityService.get_subject(): principal -> provider subject
       (fails with UNAUTHORIZED when no valid identity is attached)
    2. IdentityService.resolve_user(): subject -> User via the unique
       external_id index (fails with PROFILE_NOT_FOUND until the client
       has upserted its profile: "register on first login")

Views that operate on behalf of a registered user mix in CallerMixin,
which resolves the caller once per request and exposes it as self.caller.

Related files:
    - config/settings.py: SIMPLE_JWT (USER_ID_CLAIM="sub", TOKEN_USER_CLASS)
    - services.py: UserDirectoryService.upsert_user creates the record
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rest_framework import status
from rest_framework.exceptions import APIException, NotAuthenticated
from rest_framework_simplejwt.models import TokenUser
from rest_framework_simplejwt.settings import api_settings

from authentication.models import User
from core.services import BaseService, ErrorCode, ServiceResult

if TYPE_CHECKING:
    from typing import Any


class ExternalIdentity(TokenUser):
    """
    Request principal built from a validated identity-provider token.

    TokenUser.id already carries the subject claim; this class names it
    and exposes the optional profile claims some providers include.
    """

    @property
    def subject(self) -> str | None:
        """Provider subject ("sub" claim), or None when missing."""
        value = self.token.get(api_settings.USER_ID_CLAIM)
        return str(value) if value else None

    @property
    def email(self) -> str:
        return self.token.get("email", "") or ""

    @property
    def name(self) -> str:
        return self.token.get("name", "") or ""


class ProfileNotFound(APIException):
    """Raised by CallerMixin when the caller has not upserted a profile yet."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "User profile not found. Upsert your profile first."
    default_code = ErrorCode.PROFILE_NOT_FOUND


class IdentityService(BaseService):
    """
    Resolve request principals to subjects and User records.

    Methods:
        get_subject: Extract the provider subject from a principal
        resolve_user: Map a principal to its User record
    """

    @classmethod
    def get_subject(cls, principal: Any) -> ServiceResult[str]:
        """
        Extract the caller's external subject identifier.

        Args:
            principal: request.user (ExternalIdentity or AnonymousUser)

        Returns:
            ServiceResult with the subject string

        Error codes:
            UNAUTHORIZED: No valid identity attached to the request
        """
        subject = getattr(principal, "subject", None)
        if not getattr(principal, "is_authenticated", False) or not subject:
            return ServiceResult.failure(
                "Unauthorized",
                error_code=ErrorCode.UNAUTHORIZED,
            )
        return ServiceResult.success(subject)

    @classmethod
    def resolve_user(cls, principal: Any) -> ServiceResult[User]:
        """
        Map the caller's subject to the internal User record.

        Error codes:
            UNAUTHORIZED: No valid identity attached to the request
            PROFILE_NOT_FOUND: No user has been upserted for this subject
        """
        subject_result = cls.get_subject(principal)
        if not subject_result:
            return ServiceResult.from_failure(subject_result)

        user = User.objects.filter(external_id=subject_result.data).first()
        if user is None:
            return ServiceResult.failure(
                "User profile not found",
                error_code=ErrorCode.PROFILE_NOT_FOUND,
            )
        return ServiceResult.success(user)


class CallerMixin:
    """
    View mixin resolving the registered caller before any handler runs.

    Runs after DRF authentication and permission checks, so anonymous
    requests are already rejected with 401 by IsAuthenticated.

    Usage:
        class ConversationViewSet(CallerMixin, viewsets.ViewSet):
            def list(self, request):
                ConversationService.list_for_user(self.caller)
    """

    caller: User

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        result = IdentityService.resolve_user(request.user)
        if not result:
            if result.error_code == ErrorCode.UNAUTHORIZED:
                raise NotAuthenticated()
            raise ProfileNotFound(result.to_response())
        self.caller = result.data
