"""
User directory services.

This module provides the UserDirectoryService class: profile upsert keyed
by the identity provider's subject, "who am I", user search and lookups.

Related files:
    - models.py: User
    - identity.py: Subject extraction and caller resolution
    - views.py: UserViewSet exposing these operations

Usage:
    from authentication.services import UserDirectoryService

    result = UserDirectoryService.upsert_user(
        subject="user_2abc",
        email="ada@example.com",
        name="Ada Lovelace",
    )
    if result.success:
        user = result.data
"""

from __future__ import annotations

from django.contrib.auth.hashers import make_password
from django.db import IntegrityError, transaction
from django.utils import timezone

from authentication.models import User
from core.services import BaseService, ErrorCode, ServiceResult


class UserDirectoryService(BaseService):
    """
    Service for user profile operations.

    Methods:
        upsert_user: Create or update the profile for a subject
        get_me: Profile of the calling subject
        search_users: Case-insensitive name search excluding the caller
        list_users: Every user except the caller
        get_user: Lookup by internal id
        get_user_by_external_id: Lookup by provider subject
    """

    @classmethod
    def upsert_user(
        cls,
        subject: str,
        email: str,
        name: str,
        avatar_url: str | None = None,
    ) -> ServiceResult[User]:
        """
        Create or update the user keyed by the provider subject.

        Existing users get email, name and avatar overwritten; a missing
        avatar clears the stored one. external_id never changes.

        Args:
            subject: Provider subject of the caller
            email: Email to store
            name: Display name to store
            avatar_url: Optional avatar reference

        Returns:
            ServiceResult with the created or updated User

        Error codes:
            INVALID_ARGUMENT: Empty name or email
        """
        name = name.strip() if name else ""
        email = email.strip() if email else ""
        if not name or not email:
            return ServiceResult.failure(
                "Name and email are required",
                error_code=ErrorCode.INVALID_ARGUMENT,
            )

        defaults = {
            "email": User.objects.normalize_email(email),
            "name": name,
            "avatar_url": avatar_url or "",
        }

        try:
            with transaction.atomic():
                user, created = User.objects.update_or_create(
                    external_id=subject,
                    defaults=defaults,
                    create_defaults={**defaults, "password": make_password(None)},
                )
        except IntegrityError:
            # Concurrent first login for the same subject; the other insert won
            User.objects.filter(external_id=subject).update(
                **defaults, updated_at=timezone.now()
            )
            user, created = User.objects.get(external_id=subject), False

        if created:
            cls.get_logger().info(f"Registered user {user.id} for subject {subject}")
        else:
            cls.get_logger().debug(f"Updated profile of user {user.id}")

        return ServiceResult.success(user)

    @classmethod
    def get_me(cls, subject: str) -> ServiceResult[User]:
        """
        Return the caller's profile.

        Error codes:
            PROFILE_NOT_FOUND: The subject has not been upserted yet
        """
        user = User.objects.filter(external_id=subject).first()
        if user is None:
            return ServiceResult.failure(
                "User profile not found",
                error_code=ErrorCode.PROFILE_NOT_FOUND,
            )
        return ServiceResult.success(user)

    @classmethod
    def search_users(cls, caller_subject: str, query: str) -> ServiceResult[list[User]]:
        """
        Users other than the caller whose name contains the query.

        Matching is case-insensitive; results are ordered by creation time.
        An empty query matches every user.
        """
        queryset = User.objects.exclude(external_id=caller_subject)
        query = (query or "").strip()
        if query:
            queryset = queryset.filter(name__icontains=query)
        return ServiceResult.success(list(queryset.order_by("created_at", "id")))

    @classmethod
    def list_users(cls, caller_subject: str) -> ServiceResult[list[User]]:
        """All users except the caller, oldest first."""
        return cls.search_users(caller_subject, "")

    @classmethod
    def get_user(cls, user_id: int) -> ServiceResult[User]:
        """
        Lookup by internal id.

        Error codes:
            NOT_FOUND: No such user
        """
        user = User.objects.filter(pk=user_id).first()
        if user is None:
            return ServiceResult.failure("User not found", error_code=ErrorCode.NOT_FOUND)
        return ServiceResult.success(user)

    @classmethod
    def get_user_by_external_id(cls, external_id: str) -> ServiceResult[User]:
        """
        Lookup by provider subject.

        Error codes:
            NOT_FOUND: No such user
        """
        user = User.objects.filter(external_id=external_id).first()
        if user is None:
            return ServiceResult.failure("User not found", error_code=ErrorCode.NOT_FOUND)
        return ServiceResult.success(user)
