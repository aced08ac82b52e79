"""
Service-level authorization for chat operations.

Every conversation-scoped operation goes through assert_member before it
reads or writes anything, so a non-participant learns nothing beyond
NOT_FOUND / FORBIDDEN.

Key Components:
    ChatAuthorizationService: Stateless service class with authorization methods
    require_conversation_member: Decorator applying assert_member to a service method

Error Codes:
    NOT_FOUND: Conversation does not exist
    FORBIDDEN: Caller is not a participant in the conversation

Usage:
    # Direct method call
    result = ChatAuthorizationService.assert_member(conversation_id, caller)
    if not result.success:
        return ServiceResult.from_failure(result)
    conversation = result.data

    # Decorator usage
    class TypingService(BaseService):
        @classmethod
        @require_conversation_member()
        def set_typing(cls, conversation_id, caller, _conversation=None):
            ...
"""

from __future__ import annotations

import inspect
from functools import wraps
from typing import TYPE_CHECKING, Callable, TypeVar

from core.services import BaseService, ErrorCode, ServiceResult

if TYPE_CHECKING:
    from authentication.models import User
    from chat.models import Conversation


T = TypeVar("T")


class ChatAuthorizationService(BaseService):
    """
    Stateless service providing authorization checks for chat operations.

    All methods are classmethods and can be called directly without instantiation.
    Results are not cached; every call reads the participant table.
    """

    @classmethod
    def is_conversation_participant(
        cls,
        user: "User",
        conversation_id: int,
    ) -> bool:
        """
        Check if user is a participant in the conversation.

        Args:
            user: User to check
            conversation_id: ID of the conversation

        Returns:
            True if user is a participant, False otherwise
        """
        from chat.models import Participant

        return Participant.objects.filter(
            conversation_id=conversation_id,
            user=user,
        ).exists()

    @classmethod
    def assert_member(
        cls,
        conversation_id: int,
        caller: "User",
    ) -> ServiceResult["Conversation"]:
        """
        Load a conversation the caller participates in.

        Args:
            conversation_id: ID of the conversation
            caller: Requesting user

        Returns:
            ServiceResult with the Conversation

        Error codes:
            NOT_FOUND: Conversation does not exist
            FORBIDDEN: Caller is not a participant
        """
        from chat.models import Conversation

        conversation = Conversation.objects.filter(pk=conversation_id).first()
        if conversation is None:
            return ServiceResult.failure(
                "Conversation not found",
                error_code=ErrorCode.NOT_FOUND,
            )

        if not cls.is_conversation_participant(caller, conversation.pk):
            cls.get_logger().debug(
                f"User {caller.pk} denied access to conversation {conversation.pk}"
            )
            return ServiceResult.failure(
                "User is not a participant in this conversation",
                error_code=ErrorCode.FORBIDDEN,
            )

        return ServiceResult.success(conversation)


def require_conversation_member(
    conversation_id_param: str = "conversation_id",
    caller_param: str = "caller",
) -> Callable:
    """
    Decorator that requires the caller to be a conversation participant.

    Resolves the conversation and caller from the call arguments (positional
    or keyword), runs assert_member and passes its failure straight back.
    On success the loaded conversation is injected as the _conversation
    kwarg to avoid a second query.

    Args:
        conversation_id_param: Name of the parameter holding the conversation ID
        caller_param: Name of the parameter holding the calling user

    Example:
        class MessageService(BaseService):
            @classmethod
            @require_conversation_member()
            def send(cls, conversation_id, caller, text, _conversation=None):
                # Only called if caller is a participant
                ...
    """

    def decorator(
        func: Callable[..., ServiceResult[T]],
    ) -> Callable[..., ServiceResult[T]]:
        signature = inspect.signature(func)

        @wraps(func)
        def wrapper(*args, **kwargs) -> ServiceResult[T]:
            bound = signature.bind_partial(*args, **kwargs)
            conversation_id = bound.arguments.get(conversation_id_param)
            caller = bound.arguments.get(caller_param)

            if conversation_id is None or caller is None:
                return ServiceResult.failure(
                    "Missing required parameters",
                    error_code=ErrorCode.INVALID_ARGUMENT,
                )

            result = ChatAuthorizationService.assert_member(conversation_id, caller)
            if not result.success:
                return ServiceResult.from_failure(result)

            kwargs["_conversation"] = result.data
            return func(*args, **kwargs)

        return wrapper

    return decorator
