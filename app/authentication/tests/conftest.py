"""
Test configuration and fixtures for authentication tests.

This module provides:
- User fixtures
- API client helpers for requests carrying identity-provider tokens

Tokens are minted with djangorestframework-simplejwt using the test
settings' signing key, so they pass the same validation as real ones.

Usage:
    def test_example(user, authenticated_client):
        response = authenticated_client.get('/api/v1/users/me/')
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from authentication.models import User
from authentication.tests.factories import UserFactory


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def user(db):
    """Create a basic registered user."""
    return UserFactory(name="Ada Lovelace", email="ada@example.com")


@pytest.fixture
def other_user(db):
    """Create a second registered user."""
    return UserFactory(name="Grace Hopper", email="grace@example.com")


@pytest.fixture
def superuser(db):
    """Create a superuser with admin privileges."""
    return User.objects.create_superuser(
        external_id="admin",
        email="admin@example.com",
        name="Admin",
        password="AdminPass123!",
    )


# =============================================================================
# API Client Fixtures
# =============================================================================


def make_token(subject, **claims):
    """Access token for an arbitrary subject (registered or not)."""
    token = AccessToken()
    token["sub"] = subject
    for key, value in claims.items():
        token[key] = value
    return token


@pytest.fixture
def api_client():
    """Unauthenticated API client."""
    return APIClient()


@pytest.fixture
def authenticated_client(user):
    """
    API client carrying a token for the default user fixture.

    Use this for tests that need a registered caller.
    """
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(user)}")
    return client


@pytest.fixture
def authenticated_client_factory(db):
    """
    Factory to create authenticated clients for any user.

    Usage:
        def test_example(authenticated_client_factory, some_user):
            client = authenticated_client_factory(some_user)
            response = client.get('/api/v1/users/me/')
    """

    def _make_client(user):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(user)}")
        return client

    return _make_client


@pytest.fixture
def subject_client_factory(db):
    """
    Factory for clients whose token names a subject with no user record.

    Models the first login, before the client has upserted its profile.
    """

    def _make_client(subject, **claims):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {make_token(subject, **claims)}")
        return client

    return _make_client
