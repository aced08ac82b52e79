"""
Constants and configuration for chat module features.

This module centralizes configuration values for:
- Message content
- Reaction management (emoji allow-list)
- Typing indicators
- Conversation titles

Import example:
    from chat.constants import REACTION_CONFIG, TYPING_CONFIG
"""

from typing import Final


# =============================================================================
# Message Configuration
# =============================================================================


class MESSAGE_CONFIG:
    """Configuration for message operations."""

    MAX_CONTENT_LENGTH: Final[int] = 10000  # Characters


# =============================================================================
# Reaction Configuration
# =============================================================================


class REACTION_CONFIG:
    """Configuration for message reactions."""

    # Max characters for a single emoji (handles compound emojis)
    MAX_EMOJI_LENGTH: Final[int] = 8

    # Anything outside this set is rejected
    ALLOWED_EMOJIS: Final[tuple] = ("👍", "❤️", "😂", "😮", "😢")


# =============================================================================
# Typing Configuration
# =============================================================================


class TYPING_CONFIG:
    """Configuration for typing indicators."""

    # How long one set_typing call keeps the indicator visible
    TIMEOUT_MS: Final[int] = 3000

    # Label used when the typing user has no display name
    FALLBACK_NAME: Final[str] = "Someone"


# =============================================================================
# Conversation View Configuration
# =============================================================================


class CONVERSATION_VIEW_CONFIG:
    """Title fallbacks for composed conversation views."""

    GROUP_TITLE_FALLBACK: Final[str] = "Group"
    DIRECT_TITLE_FALLBACK: Final[str] = "Direct Message"
