"""
Chat app for conversations and messaging.

This app handles:
- Conversations (direct and group)
- Message sending and history
- Reactions, read receipts and unread counts
- Typing indicators and presence

Related apps:
    - authentication: User model for participants, caller resolution

Usage:
    from chat.services import ConversationService, MessageService

    # Create (or reuse) a direct conversation
    result = ConversationService.create_or_get_direct(caller, other_user.id)

    # Send message
    result = MessageService.send(result.data.id, caller, "Hello!")
"""
