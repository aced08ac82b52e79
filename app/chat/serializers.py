"""
Serializers for chat API.

This module provides serializers for the chat system:
- Conversation serializers (plain record, composed view, create payloads)
- Message serializers (read, read with reactions, create)
- Reaction, read receipt, typing and presence serializers

Serializer Hierarchy:
    ConversationSerializer: Stored conversation fields
    ConversationViewSerializer: Composed list entry (title, last message, unread)
    DirectConversationCreateSerializer: Other participant id
    GroupConversationCreateSerializer: Participant ids and group name

    MessageSerializer: Message with soft-delete handling
    MessageWithReactionsSerializer: Message plus aggregated reactions
    MessageCreateSerializer: Send new message

Design Decisions:
    - Read and write serializers are separate for clarity
    - Soft-deleted message content is serialized as null, never the original
"""

from __future__ import annotations

from rest_framework import serializers

from authentication.serializers import UserSerializer
from chat.models import Conversation, Message, MessageReaction, ReadReceipt, UserPresence


# =============================================================================
# Message Serializers
# =============================================================================


class MessageSerializer(serializers.ModelSerializer):
    """
    Full message serializer for message lists.

    Deleted messages keep their place in the list with is_deleted=true
    and content=null.
    """

    sender = UserSerializer(read_only=True)
    sender_id = serializers.IntegerField(read_only=True)
    conversation_id = serializers.IntegerField(read_only=True)
    content = serializers.SerializerMethodField(
        help_text="Message text (null if deleted)"
    )

    class Meta:
        model = Message
        fields = [
            "id",
            "conversation_id",
            "sender_id",
            "sender",
            "content",
            "is_deleted",
            "deleted_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_content(self, obj: Message) -> str | None:
        return obj.display_content


class ReactionGroupSerializer(serializers.Serializer):
    """One emoji's aggregated reactions on a message."""

    emoji = serializers.CharField()
    count = serializers.IntegerField()
    user_ids = serializers.ListField(child=serializers.IntegerField())


class MessageWithReactionsSerializer(MessageSerializer):
    """Message with its reactions grouped by emoji."""

    reactions = ReactionGroupSerializer(
        source="reaction_summary",
        many=True,
        read_only=True,
    )

    class Meta(MessageSerializer.Meta):
        fields = MessageSerializer.Meta.fields + ["reactions"]
        read_only_fields = fields


class MessageCreateSerializer(serializers.Serializer):
    """
    Serializer for sending a new message.

    Blank or over-long text is rejected by the service after stripping.
    """

    text = serializers.CharField(
        trim_whitespace=False,
        help_text="Message text",
    )


# =============================================================================
# Reaction Serializers
# =============================================================================


class ReactionToggleSerializer(serializers.Serializer):
    """Payload for toggling a reaction; allow-list checks happen in the service."""

    emoji = serializers.CharField(max_length=16)


class MessageReactionSerializer(serializers.ModelSerializer):
    class Meta:
        model = MessageReaction
        fields = ["id", "message_id", "user_id", "emoji", "created_at"]
        read_only_fields = fields


class ReactionToggleResultSerializer(serializers.Serializer):
    """Outcome of a toggle: added=false means the reaction was removed."""

    added = serializers.BooleanField()
    reaction = MessageReactionSerializer(allow_null=True)


# =============================================================================
# Conversation Serializers
# =============================================================================


class ConversationSerializer(serializers.ModelSerializer):
    """
    Stored conversation fields.

    participant_ids is the canonical participant set (sorted, no duplicates).
    """

    is_group = serializers.BooleanField(read_only=True)
    participant_ids = serializers.ListField(
        child=serializers.IntegerField(),
        read_only=True,
    )
    created_by_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = Conversation
        fields = [
            "id",
            "conversation_type",
            "is_group",
            "group_name",
            "participant_ids",
            "created_by_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ConversationViewSerializer(serializers.Serializer):
    """
    Composed conversation entry (see ConversationViewService).

    Reads from a ConversationView: stored fields come through the wrapped
    conversation, the rest are computed at request time.
    """

    id = serializers.IntegerField(source="conversation.id")
    conversation_type = serializers.CharField(source="conversation.conversation_type")
    is_group = serializers.BooleanField(source="conversation.is_group")
    group_name = serializers.CharField(source="conversation.group_name")
    title = serializers.CharField()
    participant_ids = serializers.SerializerMethodField()
    participants = UserSerializer(many=True)
    last_message = MessageSerializer(allow_null=True)
    unread_count = serializers.IntegerField()
    created_at = serializers.DateTimeField(source="conversation.created_at")
    updated_at = serializers.DateTimeField(source="conversation.updated_at")

    def get_participant_ids(self, obj) -> list[int]:
        return sorted(user.pk for user in obj.participants)


class DirectConversationCreateSerializer(serializers.Serializer):
    other_user_id = serializers.IntegerField(min_value=1)


class GroupConversationCreateSerializer(serializers.Serializer):
    """
    Payload for creating a group.

    The caller is added automatically and may be omitted from participant_ids.
    """

    participant_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=True,
    )
    group_name = serializers.CharField(max_length=255, trim_whitespace=False)


# =============================================================================
# Read State Serializers
# =============================================================================


class MarkReadSerializer(serializers.Serializer):
    last_read_message_id = serializers.IntegerField(min_value=1)


class ReadReceiptSerializer(serializers.ModelSerializer):
    class Meta:
        model = ReadReceipt
        fields = [
            "conversation_id",
            "user_id",
            "last_read_message_id",
            "last_read_at",
        ]
        read_only_fields = fields


class UnreadCountSerializer(serializers.Serializer):
    conversation_id = serializers.IntegerField()
    unread_count = serializers.IntegerField()


# =============================================================================
# Typing & Presence Serializers
# =============================================================================


class TypingEntrySerializer(serializers.Serializer):
    """A live typing indicator; name falls back to a placeholder."""

    user_id = serializers.IntegerField()
    name = serializers.CharField()
    expires_at = serializers.DateTimeField()


class PresenceUpdateSerializer(serializers.Serializer):
    is_online = serializers.BooleanField()


class UserPresenceSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = UserPresence
        fields = ["user_id", "is_online", "last_seen"]
        read_only_fields = fields
