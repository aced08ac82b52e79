"""
Tests for identity resolution.

This module tests:
- ExternalIdentity: token principal exposing the provider subject
- IdentityService.get_subject / resolve_user
- CallerMixin: caller resolution before view handlers run

Related files:
    - identity.py: Implementation under test
"""

from datetime import timedelta

import jwt
from django.conf import settings
from django.contrib.auth.models import AnonymousUser
from django.utils import timezone

from authentication.identity import ExternalIdentity, IdentityService
from authentication.tests.conftest import make_token
from core.services import ErrorCode


class TestExternalIdentity:
    """Tests for the token principal."""

    def test_exposes_subject_and_profile_claims(self, db):
        identity = ExternalIdentity(make_token("user_abc", email="a@example.com", name="A"))

        assert identity.subject == "user_abc"
        assert identity.email == "a@example.com"
        assert identity.name == "A"
        assert identity.is_authenticated is True

    def test_missing_profile_claims_default_to_empty(self, db):
        identity = ExternalIdentity(make_token("user_abc"))

        assert identity.email == ""
        assert identity.name == ""


class TestGetSubject:
    """Tests for IdentityService.get_subject."""

    def test_returns_subject_for_token_principal(self, db):
        result = IdentityService.get_subject(ExternalIdentity(make_token("user_xyz")))

        assert result.success is True
        assert result.data == "user_xyz"

    def test_anonymous_is_unauthorized(self):
        """
        Requests without a valid token have no subject.

        Why it matters: Every operation needs a caller identity.
        """
        result = IdentityService.get_subject(AnonymousUser())

        assert result.success is False
        assert result.error_code == ErrorCode.UNAUTHORIZED

    def test_none_is_unauthorized(self):
        result = IdentityService.get_subject(None)

        assert result.error_code == ErrorCode.UNAUTHORIZED


class TestResolveUser:
    """Tests for IdentityService.resolve_user."""

    def test_maps_subject_to_user(self, user):
        result = IdentityService.resolve_user(ExternalIdentity(make_token(user.external_id)))

        assert result.success is True
        assert result.data == user

    def test_unregistered_subject_is_profile_not_found(self, db):
        """
        A valid identity with no upserted profile is PROFILE_NOT_FOUND.

        Why it matters: Distinguishes "log in again" (UNAUTHORIZED) from
        "finish registration" (PROFILE_NOT_FOUND) for clients.
        """
        result = IdentityService.resolve_user(ExternalIdentity(make_token("user_unregistered")))

        assert result.success is False
        assert result.error_code == ErrorCode.PROFILE_NOT_FOUND

    def test_anonymous_is_unauthorized(self, db):
        result = IdentityService.resolve_user(AnonymousUser())

        assert result.error_code == ErrorCode.UNAUTHORIZED


class TestCallerMixin:
    """Caller resolution through a real view (conversation list)."""

    URL = "/api/v1/chat/conversations/"

    def test_registered_caller_passes(self, authenticated_client):
        response = authenticated_client.get(self.URL)

        assert response.status_code == 200

    def test_unregistered_caller_gets_profile_not_found(self, subject_client_factory):
        """
        Chat endpoints reject identities without a user record with 404.

        Why it matters: The error body tells the client to upsert first.
        """
        client = subject_client_factory("user_fresh")

        response = client.get(self.URL)

        assert response.status_code == 404
        assert response.data["error_code"] == ErrorCode.PROFILE_NOT_FOUND

    def test_missing_token_is_401(self, api_client):
        response = api_client.get(self.URL)

        assert response.status_code == 401

    def test_invalid_token_is_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-jwt")

        response = api_client.get(self.URL)

        assert response.status_code == 401


class TestProviderIssuedTokens:
    """Tokens minted by the identity provider rather than by simplejwt."""

    ME_URL = "/api/v1/users/me/"

    def _provider_token(self, subject):
        now = timezone.now()
        return jwt.encode(
            {"sub": subject, "iat": now, "exp": now + timedelta(minutes=5)},
            settings.SIMPLE_JWT["SIGNING_KEY"],
            algorithm=settings.SIMPLE_JWT["ALGORITHM"],
        )

    def test_token_with_only_standard_claims_resolves(self, api_client, user):
        """
        A token carrying just sub/iat/exp authenticates the caller.

        Why it matters: Provider tokens have no jti or token_type claim,
        so requiring them would lock every real caller out.
        """
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {self._provider_token(user.external_id)}")

        response = api_client.get(self.ME_URL)

        assert response.status_code == 200
        assert response.data["external_id"] == user.external_id

    def test_expired_provider_token_is_401(self, api_client, user):
        now = timezone.now()
        token = jwt.encode(
            {"sub": user.external_id, "iat": now - timedelta(hours=2), "exp": now - timedelta(hours=1)},
            settings.SIMPLE_JWT["SIGNING_KEY"],
            algorithm=settings.SIMPLE_JWT["ALGORITHM"],
        )
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

        response = api_client.get(self.ME_URL)

        assert response.status_code == 401
