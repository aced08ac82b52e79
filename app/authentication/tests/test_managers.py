"""
Tests for UserManager.

The UserManager provides:
- create_user(): Creates users keyed by provider subject, password unusable
  unless one is given
- create_superuser(): Creates admin users with elevated privileges

Related files:
    - managers.py: Implementation under test
    - models.py: User model that uses this manager
"""

import pytest

from authentication.models import User


class TestUserManagerCreateUser:
    """Tests for UserManager.create_user() method."""

    def test_creates_user_keyed_by_external_id(self, db):
        """
        Given a subject, email and name
        When create_user is called
        Then a user is stored under that subject
        """
        user = User.objects.create_user(
            external_id="user_2abc",
            email="ada@example.com",
            name="Ada",
        )

        assert user.pk is not None
        assert User.objects.get(external_id="user_2abc") == user
        assert user.name == "Ada"

    def test_user_without_password_cannot_log_in_locally(self, db):
        """
        Given no password
        When create_user is called
        Then the password is unusable

        Why it matters: API users authenticate with provider tokens only.
        """
        user = User.objects.create_user(external_id="user_nopass", email="np@example.com")

        assert user.has_usable_password() is False

    def test_normalizes_email_domain_to_lowercase(self, db):
        """
        Given an email with uppercase characters in domain
        When create_user is called
        Then the domain portion is normalized to lowercase
        """
        user = User.objects.create_user(external_id="user_case", email="Test.User@EXAMPLE.COM")

        assert user.email == "Test.User@example.com"

    def test_raises_valueerror_when_external_id_is_empty(self, db):
        """
        Given an empty subject
        When create_user is called
        Then a ValueError is raised with descriptive message
        """
        with pytest.raises(ValueError) as exc_info:
            User.objects.create_user(external_id="", email="x@example.com")

        assert "external_id field must be set" in str(exc_info.value)

    def test_regular_user_has_no_admin_flags(self, db):
        """Regular users are neither staff nor superusers by default."""
        user = User.objects.create_user(external_id="user_flags", email="f@example.com")

        assert user.is_staff is False
        assert user.is_superuser is False
        assert user.is_active is True


class TestUserManagerCreateSuperuser:
    """Tests for UserManager.create_superuser() method."""

    def test_creates_superuser_with_password(self, db):
        """
        Given a subject and password
        When create_superuser is called
        Then the user has admin flags and a usable password
        """
        admin = User.objects.create_superuser(
            external_id="admin",
            email="admin@example.com",
            name="Admin",
            password="AdminPass123!",
        )

        assert admin.is_staff is True
        assert admin.is_superuser is True
        assert admin.check_password("AdminPass123!") is True

    def test_raises_valueerror_when_is_staff_false(self, db):
        """Superusers must be staff."""
        with pytest.raises(ValueError) as exc_info:
            User.objects.create_superuser(
                external_id="admin2",
                email="a2@example.com",
                password="AdminPass123!",
                is_staff=False,
            )

        assert "is_staff=True" in str(exc_info.value)

    def test_raises_valueerror_when_is_superuser_false(self, db):
        """Superusers must have is_superuser set."""
        with pytest.raises(ValueError) as exc_info:
            User.objects.create_superuser(
                external_id="admin3",
                email="a3@example.com",
                password="AdminPass123!",
                is_superuser=False,
            )

        assert "is_superuser=True" in str(exc_info.value)
