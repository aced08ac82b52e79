"""
Custom user manager for externally authenticated users.

This module provides the UserManager class that creates users keyed by
the identity provider's subject instead of a username.

Related files:
    - models.py: User model that uses this manager

Security:
    - API users never receive a usable password
    - Superusers (admin access) get a hashed password via set_password()
"""

from django.contrib.auth.models import BaseUserManager


class UserManager(BaseUserManager):
    """
    Custom manager for User model keyed by external_id.

    Usage:
        # API user (created by UserDirectoryService.upsert_user)
        user = User.objects.create_user(
            external_id="user_2abc",
            email="ada@example.com",
            name="Ada",
        )

        # Admin account
        admin = User.objects.create_superuser(
            external_id="admin",
            email="admin@example.com",
            name="Admin",
            password="adminpassword",
        )
    """

    def create_user(self, external_id, email="", name="", password=None, **extra_fields):
        """
        Create and save a user for the given identity-provider subject.

        Args:
            external_id: Provider subject (required)
            email: User's email address
            name: Display name
            password: Only set for admin accounts
            **extra_fields: Additional fields to set on the user

        Returns:
            User: The created user instance

        Raises:
            ValueError: If external_id is not provided
        """
        if not external_id:
            raise ValueError("The external_id field must be set")

        email = self.normalize_email(email)

        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)

        user = self.model(external_id=external_id, email=email, name=name, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_superuser(self, external_id, email="", name="", password=None, **extra_fields):
        """
        Create and save a superuser able to log into the admin site.

        Raises:
            ValueError: If is_staff or is_superuser is not True
        """
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(external_id, email, name, password, **extra_fields)
