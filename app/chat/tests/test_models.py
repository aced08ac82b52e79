"""
Tests for chat model constraints and computed properties.

This module tests:
- Conversation: Type properties, canonical participant ids
- DirectConversationPair: Uniqueness constraint, canonical ordering
- Participant / MessageReaction / ReadReceipt: Uniqueness constraints
- Message: Soft delete display content

Testing Philosophy:
    Database constraints are the last line against races in the service
    layer, so they are exercised directly here.
"""

import pytest
from django.db import IntegrityError, transaction

from authentication.tests.factories import UserFactory
from chat.models import (
    Conversation,
    ConversationType,
    DirectConversationPair,
    Participant,
    ReadReceipt,
)
from chat.tests.factories import (
    ConversationFactory,
    MessageFactory,
    MessageReactionFactory,
    ReadReceiptFactory,
)


class TestConversation:
    def test_direct_properties(self, direct_conversation, alice, bob):
        assert direct_conversation.is_direct is True
        assert direct_conversation.is_group is False
        assert direct_conversation.participant_ids == sorted([alice.pk, bob.pk])

    def test_group_properties(self, group_conversation):
        assert group_conversation.is_group is True
        assert len(group_conversation.participant_ids) == 3

    def test_participant_ids_sorted(self, db):
        conversation = ConversationFactory()
        users = [UserFactory() for _ in range(3)]
        for user in reversed(users):
            Participant.objects.create(conversation=conversation, user=user)

        assert conversation.participant_ids == sorted(user.pk for user in users)

    def test_str(self, direct_conversation, group_conversation):
        assert str(direct_conversation) == f"Direct({direct_conversation.pk})"
        assert str(group_conversation) == "Group: Team"


class TestDirectConversationPair:
    def test_unique_constraint_prevents_duplicate_pairs(self, direct_conversation):
        """
        Cannot create two DirectConversationPairs for the same user pair.

        Why it matters: This is the core uniqueness guarantee for direct
        conversations. Concurrent creators rely on it to detect the race.
        """
        pair = DirectConversationPair.objects.get(conversation=direct_conversation)
        new_conversation = Conversation.objects.create(conversation_type=ConversationType.DIRECT)

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                DirectConversationPair.objects.create(
                    conversation=new_conversation,
                    user_lower=pair.user_lower,
                    user_higher=pair.user_higher,
                )

    def test_check_constraint_enforces_canonical_order(self, db):
        """
        Cannot store the higher user id in user_lower.

        Why it matters: Without canonical order (a, b) and (b, a) would
        both pass the unique constraint.
        """
        user1, user2 = sorted((UserFactory(), UserFactory()), key=lambda user: user.pk)
        conversation = Conversation.objects.create(conversation_type=ConversationType.DIRECT)

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                DirectConversationPair.objects.create(
                    conversation=conversation,
                    user_lower=user2,
                    user_higher=user1,
                )


class TestUniqueConstraints:
    def test_participant_once_per_conversation(self, direct_conversation, alice):
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                Participant.objects.create(conversation=direct_conversation, user=alice)

    def test_reaction_once_per_user_and_emoji(self, direct_conversation, alice, bob):
        message = MessageFactory(conversation=direct_conversation, sender=alice)
        MessageReactionFactory(message=message, user=bob, emoji="👍")

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                MessageReactionFactory(message=message, user=bob, emoji="👍")

    def test_read_receipt_once_per_user(self, direct_conversation, alice, bob):
        message = MessageFactory(conversation=direct_conversation, sender=alice)
        ReadReceiptFactory(last_read_message=message, user=bob)

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                ReadReceipt.objects.create(
                    conversation=direct_conversation,
                    user=bob,
                    last_read_message=message,
                )

    def test_deleting_read_message_keeps_receipt(self, direct_conversation, alice, bob):
        message = MessageFactory(conversation=direct_conversation, sender=alice)
        receipt = ReadReceiptFactory(last_read_message=message, user=bob)

        message.delete()

        receipt.refresh_from_db()
        assert receipt.last_read_message_id is None


class TestMessage:
    def test_display_content_hidden_after_soft_delete(self, direct_conversation, alice):
        message = MessageFactory(conversation=direct_conversation, sender=alice, content="secret")
        assert message.display_content == "secret"

        message.soft_delete()
        message.refresh_from_db()

        assert message.is_deleted is True
        assert message.deleted_at is not None
        assert message.display_content is None
        assert message.content == "secret"

    def test_str_truncates_long_content(self, direct_conversation, alice):
        message = MessageFactory(conversation=direct_conversation, sender=alice, content="x" * 80)

        assert str(message) == f"User {alice.pk}: {'x' * 50}..."
