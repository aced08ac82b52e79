"""
Chat system models.

This module defines the data models for the messaging core:
- Direct (1:1) conversations, deduplicated per participant pair
- Group conversations, never deduplicated
- Messages in a total order per conversation
- Emoji reactions, read receipts, typing indicators and presence

Models:
    Conversation: Container for messages between participants
    DirectConversationPair: Enforces one direct conversation per user pair
    Participant: User membership in a conversation
    Message: Individual message within a conversation
    MessageReaction: One emoji reaction by one user on one message
    ReadReceipt: Per-user high-water mark in a conversation
    TypingIndicator: Per-user "is typing" record with an expiry
    UserPresence: Per-user online flag and last-seen time

Design Decisions:
    - Membership is fixed at creation; there is no join or leave
    - Message order is (created_at, id); id breaks timestamp ties
    - Soft delete keeps a message in its position but hides its content
    - Unread counts are derived from the message log, never stored
    - Typing expiry is data (expires_at) evaluated at read time
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import F, Q

from core.model_mixins import SoftDeleteMixin
from core.models import BaseModel


class ConversationType(models.TextChoices):
    """
    Type of conversation.

    DIRECT: Exactly two participants, one conversation per pair
    GROUP: Any number of participants, a new conversation on every create
    """

    DIRECT = "direct", "Direct Message"
    GROUP = "group", "Group"


class Conversation(BaseModel):
    """
    A conversation between two or more users.

    updated_at doubles as "last activity": it is bumped on every new
    message and whenever a direct conversation is created or reused, and
    conversation lists are ordered by it.

    Fields:
        conversation_type: Type of conversation (direct or group)
        group_name: Name for group conversations (empty for direct)
        created_by: User who created the conversation
        participant_count: Number of participants (cached)

    Relationships:
        participants: All Participant records for this conversation
        messages: All Message records for this conversation
        direct_pair: DirectConversationPair if type is DIRECT
    """

    conversation_type = models.CharField(
        max_length=10,
        choices=ConversationType.choices,
        default=ConversationType.GROUP,
        db_index=True,
        help_text="Type of conversation (direct or group)",
    )

    group_name = models.CharField(
        max_length=255,
        blank=True,
        default="",
        help_text="Name for group conversations (empty for direct)",
    )

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_conversations",
        help_text="User who created this conversation",
    )

    participant_count = models.PositiveIntegerField(
        default=0,
        help_text="Number of participants (cached for performance)",
    )

    class Meta:
        db_table = "chat_conversation"
        ordering = ["-updated_at", "-id"]
        indexes = [
            # Conversation lists sorted by last activity
            models.Index(
                fields=["-updated_at", "-id"],
                name="chat_conv_activity_idx",
            ),
        ]

    def __str__(self) -> str:
        """Return human-readable representation."""
        if self.conversation_type == ConversationType.DIRECT:
            return f"Direct({self.pk})"
        if self.group_name:
            return f"Group: {self.group_name}"
        return f"Group({self.pk})"

    @property
    def is_direct(self) -> bool:
        """Check if this is a direct (1:1) conversation."""
        return self.conversation_type == ConversationType.DIRECT

    @property
    def is_group(self) -> bool:
        """Check if this is a group conversation."""
        return self.conversation_type == ConversationType.GROUP

    @property
    def participant_ids(self) -> list[int]:
        """Canonical participant set: user ids sorted ascending, no duplicates."""
        return sorted(set(self.participants.values_list("user_id", flat=True)))


class DirectConversationPair(models.Model):
    """
    Enforces uniqueness of direct conversations between two users.

    Pairs are stored in canonical order (lower user id first) so that
    regardless of who initiates, there is only one row per pair. The
    unique constraint is what closes the create race in
    ConversationService.create_or_get_direct.

    Constraints:
        - UniqueConstraint(user_lower, user_higher): One conversation per pair
        - CheckConstraint(user_lower_id < user_higher_id): Canonical order
    """

    conversation = models.OneToOneField(
        Conversation,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="direct_pair",
        help_text="The direct conversation this pair represents",
    )

    user_lower = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",  # No reverse accessor needed
        help_text="User with lower ID in this conversation pair",
    )

    user_higher = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",  # No reverse accessor needed
        help_text="User with higher ID in this conversation pair",
    )

    class Meta:
        db_table = "chat_direct_conversation_pair"
        constraints = [
            models.UniqueConstraint(
                fields=["user_lower", "user_higher"],
                name="unique_direct_conversation_pair",
            ),
            models.CheckConstraint(
                condition=Q(user_lower_id__lt=F("user_higher_id")),
                name="user_lower_less_than_higher",
            ),
        ]

    def __str__(self) -> str:
        """Return human-readable representation."""
        return f"DirectPair({self.user_lower_id}, {self.user_higher_id})"


class Participant(BaseModel):
    """
    Membership of a user in a conversation.

    One row per (conversation, user); rows are written once when the
    conversation is created.
    """

    conversation = models.ForeignKey(
        Conversation,
        on_delete=models.CASCADE,
        related_name="participants",
        help_text="Conversation this participation belongs to",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="conversation_participations",
        help_text="User participating in the conversation",
    )

    class Meta:
        db_table = "chat_participant"
        ordering = ["user_id"]
        constraints = [
            models.UniqueConstraint(
                fields=["conversation", "user"],
                name="unique_conversation_participant",
            ),
        ]
        indexes = [
            # User's conversations
            models.Index(
                fields=["user", "conversation"],
                name="chat_part_user_conv_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"Participant: {self.user_id} in {self.conversation_id}"


class Message(SoftDeleteMixin, BaseModel):
    """
    A message within a conversation.

    Ordering:
        Messages in a conversation are totally ordered by (created_at, id).
        The auto-increment id is the insertion sequence and breaks ties
        between messages created in the same instant.

    Soft Delete Behavior:
        When is_deleted=True:
        - Content is preserved in the database
        - API returns the message in place with content null
        - Message still counts toward unread count

    Fields:
        conversation: Conversation this message belongs to (immutable)
        sender: User who sent the message
        content: Message text
    """

    conversation = models.ForeignKey(
        Conversation,
        on_delete=models.CASCADE,
        related_name="messages",
        help_text="Conversation this message belongs to",
    )

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
        help_text="User who sent this message",
    )

    content = models.TextField(
        blank=True,
        default="",
        help_text="Message text",
    )

    class Meta:
        db_table = "chat_message"
        ordering = ["created_at", "id"]
        indexes = [
            # Ordered messages in a conversation
            models.Index(
                fields=["conversation", "created_at", "id"],
                name="chat_msg_conv_order_idx",
            ),
            # User's messages
            models.Index(
                fields=["sender", "-created_at"],
                name="chat_msg_sender_idx",
            ),
        ]

    def __str__(self) -> str:
        """Return human-readable representation."""
        content_preview = self.content[:50] + "..." if len(self.content) > 50 else self.content
        deleted_str = " [deleted]" if self.is_deleted else ""
        return f"User {self.sender_id}: {content_preview}{deleted_str}"

    @property
    def display_content(self) -> str | None:
        """Content suitable for clients: None once soft deleted."""
        if self.is_deleted:
            return None
        return self.content


class MessageReaction(BaseModel):
    """
    A single emoji reaction by one user on one message.

    A user may react with several different emojis, but never twice with
    the same one: the unique constraint makes concurrent toggles converge.
    """

    message = models.ForeignKey(
        Message,
        on_delete=models.CASCADE,
        related_name="reactions",
        help_text="Message this reaction belongs to",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="message_reactions",
        help_text="User who added this reaction",
    )

    emoji = models.CharField(
        max_length=8,
        help_text="Emoji character(s) used for this reaction",
    )

    class Meta:
        db_table = "chat_message_reaction"
        ordering = ["created_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["message", "user", "emoji"],
                name="unique_user_message_emoji_reaction",
            ),
        ]
        indexes = [
            models.Index(
                fields=["message", "user"],
                name="chat_reaction_msg_user_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.emoji} by {self.user_id} on {self.message_id}"


class ReadReceipt(BaseModel):
    """
    Per-user read pointer (high-water mark) in a conversation.

    Absence of a row means nothing has been read yet. If the referenced
    message disappears the pointer becomes null and every message counts
    as unread again.
    """

    conversation = models.ForeignKey(
        Conversation,
        on_delete=models.CASCADE,
        related_name="read_receipts",
        help_text="Conversation this receipt belongs to",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="read_receipts",
        help_text="User whose read state this is",
    )

    last_read_message = models.ForeignKey(
        Message,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        help_text="Last message the user acknowledged",
    )

    last_read_at = models.DateTimeField(
        help_text="When the pointer was last moved",
    )

    class Meta:
        db_table = "chat_read_receipt"
        constraints = [
            models.UniqueConstraint(
                fields=["conversation", "user"],
                name="unique_conversation_read_receipt",
            ),
        ]

    def __str__(self) -> str:
        return f"ReadReceipt: {self.user_id} in {self.conversation_id} at {self.last_read_message_id}"


class TypingIndicator(BaseModel):
    """
    "User is typing" record for a conversation.

    Each set_typing call overwrites expires_at. Records whose expires_at
    has passed are ignored by readers and purged by a periodic task.
    """

    conversation = models.ForeignKey(
        Conversation,
        on_delete=models.CASCADE,
        related_name="typing_indicators",
        help_text="Conversation the user is typing in",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="typing_indicators",
        help_text="User who is typing",
    )

    expires_at = models.DateTimeField(
        db_index=True,
        help_text="When this indicator stops being shown",
    )

    class Meta:
        db_table = "chat_typing_indicator"
        constraints = [
            models.UniqueConstraint(
                fields=["conversation", "user"],
                name="unique_conversation_typing_indicator",
            ),
        ]

    def __str__(self) -> str:
        return f"Typing: {self.user_id} in {self.conversation_id} until {self.expires_at}"


class UserPresence(models.Model):
    """Online flag and last-seen time, one row per user, overwritten on change."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="presence",
        help_text="User this presence belongs to",
    )

    is_online = models.BooleanField(
        default=False,
        db_index=True,
        help_text="Whether the user is currently online",
    )

    last_seen = models.DateTimeField(
        help_text="When the status was last reported",
    )

    class Meta:
        db_table = "chat_user_presence"

    def __str__(self) -> str:
        status = "online" if self.is_online else "offline"
        return f"Presence: {self.user_id} {status}"
