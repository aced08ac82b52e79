"""
Django admin configuration for chat models.

Provides admin interfaces for:
- Conversation management
- Participant viewing
- Message moderation
- Reactions, read receipts, typing indicators and presence (read-mostly)
"""

from django.contrib import admin

from chat.models import (
    Conversation,
    DirectConversationPair,
    Message,
    MessageReaction,
    Participant,
    ReadReceipt,
    TypingIndicator,
    UserPresence,
)


class ParticipantInline(admin.TabularInline):
    """Inline display of participants in conversation admin."""

    model = Participant
    extra = 0
    readonly_fields = ["created_at"]
    raw_id_fields = ["user"]


@admin.register(Conversation)
class ConversationAdmin(admin.ModelAdmin):
    """Admin interface for Conversation model."""

    list_display = [
        "id",
        "conversation_type",
        "group_name",
        "participant_count",
        "created_at",
        "updated_at",
    ]
    list_filter = ["conversation_type", "created_at"]
    search_fields = ["group_name", "id"]
    readonly_fields = ["created_at", "updated_at", "participant_count"]
    raw_id_fields = ["created_by"]
    inlines = [ParticipantInline]
    ordering = ["-updated_at"]


@admin.register(DirectConversationPair)
class DirectConversationPairAdmin(admin.ModelAdmin):
    """Admin interface for DirectConversationPair model."""

    list_display = ["conversation", "user_lower", "user_higher"]
    raw_id_fields = ["conversation", "user_lower", "user_higher"]


@admin.register(Participant)
class ParticipantAdmin(admin.ModelAdmin):
    """Admin interface for Participant model."""

    list_display = ["id", "conversation", "user", "created_at"]
    search_fields = ["user__email", "user__name", "conversation__group_name"]
    readonly_fields = ["created_at", "updated_at"]
    raw_id_fields = ["conversation", "user"]
    ordering = ["-created_at"]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    """Admin interface for Message model."""

    list_display = [
        "id",
        "conversation",
        "sender",
        "content_preview",
        "is_deleted",
        "created_at",
    ]
    list_filter = ["is_deleted", "created_at"]
    search_fields = ["content", "sender__email"]
    readonly_fields = ["created_at", "updated_at", "deleted_at"]
    raw_id_fields = ["conversation", "sender"]
    ordering = ["-created_at"]

    @admin.display(description="Content Preview")
    def content_preview(self, obj: Message) -> str:
        """Return truncated content for list display."""
        max_length = 50
        if len(obj.content) > max_length:
            return obj.content[:max_length] + "..."
        return obj.content


@admin.register(MessageReaction)
class MessageReactionAdmin(admin.ModelAdmin):
    list_display = ["id", "message", "user", "emoji", "created_at"]
    list_filter = ["emoji"]
    raw_id_fields = ["message", "user"]


@admin.register(ReadReceipt)
class ReadReceiptAdmin(admin.ModelAdmin):
    list_display = ["conversation", "user", "last_read_message", "last_read_at"]
    raw_id_fields = ["conversation", "user", "last_read_message"]


@admin.register(TypingIndicator)
class TypingIndicatorAdmin(admin.ModelAdmin):
    list_display = ["conversation", "user", "expires_at"]
    raw_id_fields = ["conversation", "user"]


@admin.register(UserPresence)
class UserPresenceAdmin(admin.ModelAdmin):
    list_display = ["user", "is_online", "last_seen"]
    list_filter = ["is_online"]
    raw_id_fields = ["user"]
