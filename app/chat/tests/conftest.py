"""
Test configuration and fixtures for chat tests.

This module provides:
- Three registered users (alice, bob, carol) and an outsider
- Conversation fixtures (direct alice/bob, group of all three)
- API client helpers for authenticated requests

Usage:
    def test_example(direct_conversation, alice_client):
        response = alice_client.get(f'/api/v1/chat/conversations/{direct_conversation.id}/')
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from authentication.tests.factories import UserFactory
from chat.tests.factories import DirectConversationFactory, GroupConversationFactory


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def alice(db):
    return UserFactory(name="Alice", email="alice@example.com")


@pytest.fixture
def bob(db):
    return UserFactory(name="Bob", email="bob@example.com")


@pytest.fixture
def carol(db):
    return UserFactory(name="Carol", email="carol@example.com")


@pytest.fixture
def outsider(db):
    """A registered user who is not a participant in any test conversation."""
    return UserFactory(name="Mallory", email="mallory@example.com")


# =============================================================================
# Conversation Fixtures
# =============================================================================


@pytest.fixture
def direct_conversation(alice, bob):
    """Direct conversation between alice and bob, created by alice."""
    return DirectConversationFactory(user1=alice, user2=bob, created_by=alice)


@pytest.fixture
def group_conversation(alice, bob, carol):
    """Group conversation 'Team' created by alice with bob and carol."""
    return GroupConversationFactory(
        created_by=alice,
        group_name="Team",
        members=[bob, carol],
    )


# =============================================================================
# API Client Fixtures
# =============================================================================


def _client_for(user):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(user)}")
    return client


@pytest.fixture
def client_factory(db):
    """
    Factory to create authenticated clients for any user.

    Usage:
        def test_example(client_factory, some_user):
            client = client_factory(some_user)
    """
    return _client_for


@pytest.fixture
def alice_client(alice):
    return _client_for(alice)


@pytest.fixture
def bob_client(bob):
    return _client_for(bob)


@pytest.fixture
def outsider_client(outsider):
    return _client_for(outsider)


@pytest.fixture
def api_client():
    """Unauthenticated API client."""
    return APIClient()
