"""
Chat application configuration.

This app provides the messaging core with:
- Direct (1:1, deduplicated) and group conversations
- Ordered messages with soft deletion
- Emoji reactions, read tracking and unread counts
- Typing indicators and presence
"""

from django.apps import AppConfig


class ChatConfig(AppConfig):
    """Configuration for the chat application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "chat"
    verbose_name = "Chat"
