"""
Authentication models.

This module defines the User model. Users are owned by an external
identity provider: the provider issues the tokens, this service stores a
profile per provider subject and never handles passwords for API users.

Related files:
    - managers.py: Custom user manager keyed by external id
    - identity.py: Token principal and subject -> User resolution
    - services.py: UserDirectoryService business logic
"""

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models

from authentication.managers import UserManager


class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model keyed by the identity provider's subject.

    Fields:
        external_id: Provider subject ("sub" claim), unique and immutable
        email: Email reported by the client at upsert time
        name: Display name used for titles, typing labels and search
        avatar_url: Optional reference to an externally hosted avatar
        is_active: Whether the user account is active
        is_staff: Whether the user can access Django admin
        created_at: When the user record was first upserted
        updated_at: When the user record was last modified

    Usage:
        user = User.objects.create_user(
            external_id="user_2abc",
            email="ada@example.com",
            name="Ada Lovelace",
        )
    """

    external_id = models.CharField(
        max_length=255,
        unique=True,
        db_index=True,
        help_text="Identity provider subject (immutable)",
    )

    email = models.EmailField(
        max_length=254,
        help_text="User's email address as reported by the identity provider",
    )

    name = models.CharField(
        max_length=255,
        help_text="Display name",
    )

    avatar_url = models.URLField(
        max_length=1024,
        blank=True,
        default="",
        help_text="Externally hosted avatar image (optional)",
    )

    # Account status flags
    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    # Timestamps
    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="When the user record was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user record was last modified",
    )

    USERNAME_FIELD = "external_id"
    EMAIL_FIELD = "email"

    # Prompted for by createsuperuser in addition to external_id
    REQUIRED_FIELDS = ["email", "name"]

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["created_at", "id"]

    def __str__(self):
        """Return the display name, falling back to the email."""
        return self.name or self.email or self.external_id

    def get_full_name(self):
        """Return the display name."""
        return self.name

    def get_short_name(self):
        """Return the display name."""
        return self.name
