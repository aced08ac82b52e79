"""
Chat system service layer.

This module provides the business logic for the chat system, encapsulating
all operations on conversations, messages, reactions, read state, typing
and presence.

Services:
    ConversationService: Direct/group creation, listing and lookup
    MessageService: Send, soft delete and ordered listing
    ReactionService: Emoji reaction toggle and per-message aggregation
    ReadReceiptService: Read pointer upsert and unread derivations
    TypingService: Typing indicators with read-time expiry
    PresenceService: Online flag and last-seen time
    ConversationViewService: Composed conversation list entries

Design Principles:
    - Services are stateless (use class methods)
    - The calling user is passed explicitly as `caller`
    - Membership is checked before any read or write
    - Expected failures return ServiceResult.failure()
    - Unexpected failures raise exceptions
    - Unique constraints plus transaction.atomic() close every race; there
      are no application-level locks

Usage:
    from chat.services import ConversationService, MessageService

    # Create (or reuse) a direct conversation
    result = ConversationService.create_or_get_direct(caller, other_user_id)
    if result.success:
        conversation = result.data

    # Send a message
    result = MessageService.send(conversation.id, caller, "Hello!")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Prefetch, QuerySet
from django.utils import timezone

from authentication.models import User
from core.services import BaseService, ErrorCode, ServiceResult

from chat.authorization import ChatAuthorizationService, require_conversation_member
from chat.constants import (
    CONVERSATION_VIEW_CONFIG,
    MESSAGE_CONFIG,
    REACTION_CONFIG,
    TYPING_CONFIG,
)
from chat.models import (
    Conversation,
    ConversationType,
    DirectConversationPair,
    Message,
    MessageReaction,
    Participant,
    ReadReceipt,
    TypingIndicator,
    UserPresence,
)
from chat.reactions import aggregate, aggregate_by_message
from chat.unread import count_unread, messages_after_receipt

if TYPE_CHECKING:
    from datetime import datetime


# =============================================================================
# Conversation Registry
# =============================================================================


class ConversationService(BaseService):
    """
    Service for conversation lifecycle operations.

    Methods:
        create_or_get_direct: Create or reuse the direct conversation with a user
        create_group: Create a new group conversation
        list_for_user: The user's conversations, most recently active first
        get_by_id: A conversation the caller participates in
        touch: Bump a conversation's last-activity time
    """

    @classmethod
    def touch(cls, conversation: Conversation) -> None:
        """
        Mark the conversation as just active.

        Uses a queryset update so concurrent senders never overwrite other
        columns; the in-memory instance is refreshed to match.
        """
        now = timezone.now()
        Conversation.objects.filter(pk=conversation.pk).update(updated_at=now)
        conversation.updated_at = now

    @classmethod
    def create_or_get_direct(
        cls,
        caller: User,
        other_user_id: int,
    ) -> ServiceResult[Conversation]:
        """
        Create or retrieve the direct conversation between caller and another user.

        Direct conversations are unique per user pair. Calling this with the
        two users in either role returns the same conversation, and its
        last-activity time is bumped on every call.

        Implementation:
            1. Validate the other user exists and differs from the caller
            2. Canonicalize order (lower user id first)
            3. Look up existing DirectConversationPair
            4. If found, touch and return existing conversation
            5. If not found, create conversation, pair and participants in
               one transaction; if a concurrent request created the pair
               first, the unique constraint fails and the winner is returned

        Args:
            caller: Requesting user
            other_user_id: ID of the other participant

        Returns:
            ServiceResult with Conversation (existing or new)

        Error codes:
            INVALID_ARGUMENT: Cannot create a direct conversation with yourself
            NOT_FOUND: Other user does not exist
        """
        if other_user_id == caller.pk:
            return ServiceResult.failure(
                "Cannot create a direct conversation with yourself",
                error_code=ErrorCode.INVALID_ARGUMENT,
            )

        if not User.objects.filter(pk=other_user_id).exists():
            return ServiceResult.failure(
                "User not found",
                error_code=ErrorCode.NOT_FOUND,
            )

        user_lower_id, user_higher_id = sorted((caller.pk, other_user_id))

        existing = cls._find_direct(user_lower_id, user_higher_id)
        if existing is not None:
            cls.touch(existing)
            cls.get_logger().debug(
                f"Reusing direct conversation {existing.pk} "
                f"between users {user_lower_id} and {user_higher_id}"
            )
            return ServiceResult.success(existing)

        try:
            with transaction.atomic():
                conversation = Conversation.objects.create(
                    conversation_type=ConversationType.DIRECT,
                    group_name="",
                    created_by=caller,
                    participant_count=2,
                )

                # Unique (user_lower, user_higher) rejects a concurrent duplicate
                DirectConversationPair.objects.create(
                    conversation=conversation,
                    user_lower_id=user_lower_id,
                    user_higher_id=user_higher_id,
                )

                Participant.objects.bulk_create(
                    [
                        Participant(conversation=conversation, user_id=user_lower_id),
                        Participant(conversation=conversation, user_id=user_higher_id),
                    ]
                )
        except IntegrityError:
            winner = cls._find_direct(user_lower_id, user_higher_id)
            if winner is None:
                raise
            cls.get_logger().warning(
                f"Lost direct conversation race for users {user_lower_id} and "
                f"{user_higher_id}; using conversation {winner.pk}"
            )
            cls.touch(winner)
            return ServiceResult.success(winner)

        cls.get_logger().info(
            f"Created direct conversation {conversation.pk} "
            f"between users {user_lower_id} and {user_higher_id}"
        )

        return ServiceResult.success(conversation)

    @classmethod
    def _find_direct(cls, user_lower_id: int, user_higher_id: int) -> Conversation | None:
        pair = (
            DirectConversationPair.objects.select_related("conversation")
            .filter(user_lower_id=user_lower_id, user_higher_id=user_higher_id)
            .first()
        )
        return pair.conversation if pair else None

    @classmethod
    def create_group(
        cls,
        caller: User,
        participant_ids: list[int],
        group_name: str,
    ) -> ServiceResult[Conversation]:
        """
        Create a new group conversation.

        The caller is always a participant. Duplicate ids are collapsed.
        Groups are never deduplicated: the same call twice creates two
        conversations.

        Args:
            caller: User creating the group
            participant_ids: IDs of the other members
            group_name: Required group name (cannot be blank)

        Returns:
            ServiceResult with new Conversation

        Error codes:
            INVALID_ARGUMENT: Group name is blank
            NOT_FOUND: One or more participant ids do not exist
        """
        group_name = group_name.strip() if group_name else ""
        if not group_name:
            return ServiceResult.failure(
                "Group name is required",
                error_code=ErrorCode.INVALID_ARGUMENT,
            )

        member_ids = sorted(set(participant_ids or []) | {caller.pk})

        found_ids = set(User.objects.filter(pk__in=member_ids).values_list("pk", flat=True))
        missing = [user_id for user_id in member_ids if user_id not in found_ids]
        if missing:
            return ServiceResult.failure(
                f"Users not found: {', '.join(str(user_id) for user_id in missing)}",
                error_code=ErrorCode.NOT_FOUND,
            )

        with transaction.atomic():
            conversation = Conversation.objects.create(
                conversation_type=ConversationType.GROUP,
                group_name=group_name,
                created_by=caller,
                participant_count=len(member_ids),
            )

            Participant.objects.bulk_create(
                [Participant(conversation=conversation, user_id=user_id) for user_id in member_ids]
            )

        cls.get_logger().info(
            f"Created group conversation {conversation.pk} "
            f"named '{group_name}' with {len(member_ids)} participants"
        )

        return ServiceResult.success(conversation)

    @classmethod
    def user_conversations(cls, user: User) -> QuerySet[Conversation]:
        """Queryset of the user's conversations ordered by recent activity, then id."""
        return (
            Conversation.objects.filter(participants__user=user)
            .distinct()
            .order_by("-updated_at", "-id")
        )

    @classmethod
    def list_for_user(cls, user: User) -> ServiceResult[list[Conversation]]:
        """
        List the user's conversations, most recently active first.

        Ties on updated_at are broken by id, newest first.
        """
        return ServiceResult.success(list(cls.user_conversations(user)))

    @classmethod
    def get_by_id(cls, conversation_id: int, caller: User) -> ServiceResult[Conversation]:
        """
        Fetch a conversation the caller participates in.

        Error codes:
            NOT_FOUND: Conversation does not exist
            FORBIDDEN: Caller is not a participant
        """
        return ChatAuthorizationService.assert_member(conversation_id, caller)


# =============================================================================
# Message Store
# =============================================================================


class MessageService(BaseService):
    """
    Service for message operations.

    Methods:
        send: Send a text message
        soft_delete: Hide a message's content, keeping its position
        list_for_conversation: All messages in order
        list_with_reactions: All messages in order with aggregated reactions
    """

    @classmethod
    def _ordered_messages(cls, conversation: Conversation):
        return (
            Message.objects.filter(conversation=conversation)
            .select_related("sender")
            .order_by("created_at", "id")
        )

    @classmethod
    @require_conversation_member()
    def send(
        cls,
        conversation_id: int,
        caller: User,
        text: str,
        _conversation: Conversation | None = None,
    ) -> ServiceResult[Message]:
        """
        Send a text message to a conversation.

        The message insert and the conversation's activity bump commit
        together.

        Args:
            conversation_id: Target conversation
            caller: User sending the message
            text: Message text (surrounding whitespace is stripped)

        Returns:
            ServiceResult with new Message

        Error codes:
            NOT_FOUND: Conversation does not exist
            FORBIDDEN: Caller is not a participant
            INVALID_ARGUMENT: Text is empty or too long
        """
        text = text.strip() if text else ""
        if not text:
            return ServiceResult.failure(
                "Message content cannot be empty",
                error_code=ErrorCode.INVALID_ARGUMENT,
            )
        if len(text) > MESSAGE_CONFIG.MAX_CONTENT_LENGTH:
            return ServiceResult.failure(
                f"Message content exceeds {MESSAGE_CONFIG.MAX_CONTENT_LENGTH} characters",
                error_code=ErrorCode.INVALID_ARGUMENT,
            )

        with transaction.atomic():
            message = Message.objects.create(
                conversation=_conversation,
                sender=caller,
                content=text,
            )
            ConversationService.touch(_conversation)

        cls.get_logger().debug(
            f"User {caller.pk} sent message {message.pk} to conversation {_conversation.pk}"
        )

        return ServiceResult.success(message)

    @classmethod
    def soft_delete(
        cls,
        message_id: int,
        caller: User,
        conversation_id: int | None = None,
    ) -> ServiceResult[Message]:
        """
        Soft delete a message sent by the caller.

        Deleting an already deleted message succeeds without changes.

        Args:
            message_id: Message to delete
            caller: Requesting user (must be the sender)
            conversation_id: When given, the message must belong to it

        Returns:
            ServiceResult with the (deleted) Message

        Error codes:
            NOT_FOUND: Message does not exist (or is not in conversation_id)
            FORBIDDEN: Caller is not a participant or not the sender
        """
        message = Message.objects.filter(pk=message_id).first()
        if message is None or (
            conversation_id is not None and message.conversation_id != conversation_id
        ):
            return ServiceResult.failure("Message not found", error_code=ErrorCode.NOT_FOUND)

        membership = ChatAuthorizationService.assert_member(message.conversation_id, caller)
        if not membership:
            return ServiceResult.from_failure(membership)

        if message.sender_id != caller.pk:
            return ServiceResult.failure(
                "Only the sender can delete this message",
                error_code=ErrorCode.FORBIDDEN,
            )

        if message.is_deleted:
            return ServiceResult.success(message)

        message.soft_delete()

        cls.get_logger().info(f"User {caller.pk} deleted message {message.pk}")

        return ServiceResult.success(message)

    @classmethod
    @require_conversation_member()
    def list_for_conversation(
        cls,
        conversation_id: int,
        caller: User,
        _conversation: Conversation | None = None,
    ) -> ServiceResult[list[Message]]:
        """All messages of the conversation ordered by (created_at, id)."""
        return ServiceResult.success(list(cls._ordered_messages(_conversation)))

    @classmethod
    @require_conversation_member()
    def list_with_reactions(
        cls,
        conversation_id: int,
        caller: User,
        _conversation: Conversation | None = None,
    ) -> ServiceResult[list[Message]]:
        """
        All messages in order, each with its aggregated reactions.

        Reactions for the whole conversation are read in one query and
        attached to each message as `reaction_summary`.
        """
        messages = list(cls._ordered_messages(_conversation))

        reactions = MessageReaction.objects.filter(
            message__conversation=_conversation,
        ).order_by("created_at", "id")
        grouped = aggregate_by_message(reactions)

        for message in messages:
            message.reaction_summary = grouped.get(message.pk, [])

        return ServiceResult.success(messages)


# =============================================================================
# Reaction Index
# =============================================================================


class ReactionService(BaseService):
    """
    Service for managing message reactions.

    Handles:
    - Toggle reaction (add/remove)
    - Getting aggregated reactions for a message
    """

    @classmethod
    def _validate_emoji(cls, emoji: str) -> bool:
        """
        Validate that emoji is an allowed reaction.

        Args:
            emoji: The emoji string to validate

        Returns:
            True if valid, False otherwise
        """
        if not emoji or len(emoji) > REACTION_CONFIG.MAX_EMOJI_LENGTH:
            return False
        return emoji in REACTION_CONFIG.ALLOWED_EMOJIS

    @classmethod
    def _load_message(
        cls,
        message_id: int,
        caller: User,
        conversation_id: int | None,
    ) -> ServiceResult[Message]:
        message = Message.objects.filter(pk=message_id).first()
        if message is None or (
            conversation_id is not None and message.conversation_id != conversation_id
        ):
            return ServiceResult.failure("Message not found", error_code=ErrorCode.NOT_FOUND)

        membership = ChatAuthorizationService.assert_member(message.conversation_id, caller)
        if not membership:
            return ServiceResult.from_failure(membership)

        return ServiceResult.success(message)

    @classmethod
    def toggle(
        cls,
        message_id: int,
        caller: User,
        emoji: str,
        conversation_id: int | None = None,
    ) -> ServiceResult[tuple[bool, MessageReaction | None]]:
        """
        Toggle a reaction on a message.

        If the caller's reaction with this emoji exists it is removed,
        otherwise it is added. Reacting to a soft-deleted message is allowed.

        Concurrency:
            The insert runs in a savepoint. If a concurrent toggle inserted
            the same (message, user, emoji) first, the unique constraint
            fails and the existing row is returned: the end state has the
            reaction exactly once.

        Args:
            message_id: ID of message
            caller: User toggling the reaction
            emoji: Emoji to toggle
            conversation_id: When given, the message must belong to it

        Returns:
            ServiceResult containing tuple (added: bool, reaction: MessageReaction | None)
            - added=True, reaction=MessageReaction if reaction was added
            - added=False, reaction=None if reaction was removed

        Error codes:
            INVALID_ARGUMENT: Emoji is not in the allowed set
            NOT_FOUND: Message does not exist
            FORBIDDEN: Caller is not a participant
        """
        if not cls._validate_emoji(emoji):
            return ServiceResult.failure(
                "Invalid emoji",
                error_code=ErrorCode.INVALID_ARGUMENT,
            )

        loaded = cls._load_message(message_id, caller, conversation_id)
        if not loaded:
            return ServiceResult.from_failure(loaded)
        message = loaded.data

        with transaction.atomic():
            deleted, _ = MessageReaction.objects.filter(
                message=message,
                user=caller,
                emoji=emoji,
            ).delete()
            if deleted:
                cls.get_logger().debug(
                    f"User {caller.pk} removed {emoji} from message {message.pk}"
                )
                return ServiceResult.success((False, None))

            try:
                with transaction.atomic():
                    reaction = MessageReaction.objects.create(
                        message=message,
                        user=caller,
                        emoji=emoji,
                    )
            except IntegrityError:
                reaction = MessageReaction.objects.get(
                    message=message,
                    user=caller,
                    emoji=emoji,
                )

        cls.get_logger().debug(f"User {caller.pk} added {emoji} to message {message.pk}")

        return ServiceResult.success((True, reaction))

    @classmethod
    def get_for_message(
        cls,
        message_id: int,
        caller: User,
        conversation_id: int | None = None,
    ) -> ServiceResult[list[dict]]:
        """
        Get all reactions for a message grouped by emoji.

        Returns:
            ServiceResult containing [{emoji, count, user_ids}, ...] in
            first-seen emoji order

        Error codes:
            NOT_FOUND: Message does not exist
            FORBIDDEN: Caller is not a participant
        """
        loaded = cls._load_message(message_id, caller, conversation_id)
        if not loaded:
            return ServiceResult.from_failure(loaded)

        reactions = MessageReaction.objects.filter(message=loaded.data).order_by("created_at", "id")
        return ServiceResult.success(aggregate(reactions))


# =============================================================================
# Read/Unread Tracker
# =============================================================================


class ReadReceiptService(BaseService):
    """
    Service for read pointers and unread derivations.

    Unread state is never stored: it is computed from the ordered message
    list and the caller's receipt on every call (see chat.unread).

    Methods:
        mark_read: Move the caller's read pointer to a message
        unread_count: Messages after the pointer not sent by the caller
        unread_messages: Messages after the pointer
    """

    @classmethod
    @require_conversation_member()
    def mark_read(
        cls,
        conversation_id: int,
        caller: User,
        last_read_message_id: int,
        _conversation: Conversation | None = None,
    ) -> ServiceResult[ReadReceipt]:
        """
        Upsert the caller's read receipt for the conversation.

        The pointer may move backward; the last call wins.

        Error codes:
            NOT_FOUND: Conversation or message does not exist
            FORBIDDEN: Caller is not a participant
            INVALID_ARGUMENT: Message belongs to another conversation
        """
        message = Message.objects.filter(pk=last_read_message_id).first()
        if message is None:
            return ServiceResult.failure("Message not found", error_code=ErrorCode.NOT_FOUND)
        if message.conversation_id != _conversation.pk:
            return ServiceResult.failure(
                "Message does not belong to this conversation",
                error_code=ErrorCode.INVALID_ARGUMENT,
            )

        receipt, _ = ReadReceipt.objects.update_or_create(
            conversation=_conversation,
            user=caller,
            defaults={
                "last_read_message": message,
                "last_read_at": timezone.now(),
            },
        )

        cls.get_logger().debug(
            f"User {caller.pk} read conversation {_conversation.pk} up to message {message.pk}"
        )

        return ServiceResult.success(receipt)

    @classmethod
    def _pointer(cls, conversation: Conversation, user: User) -> int | None:
        return (
            ReadReceipt.objects.filter(conversation=conversation, user=user)
            .values_list("last_read_message_id", flat=True)
            .first()
        )

    @classmethod
    def count_for(cls, conversation: Conversation, user: User) -> int:
        """Unread count without a membership check (caller already authorized)."""
        messages = list(
            Message.objects.filter(conversation=conversation)
            .only("id", "sender_id", "created_at")
            .order_by("created_at", "id")
        )
        return count_unread(messages, cls._pointer(conversation, user), user.pk)

    @classmethod
    @require_conversation_member()
    def unread_count(
        cls,
        conversation_id: int,
        caller: User,
        _conversation: Conversation | None = None,
    ) -> ServiceResult[int]:
        """
        Count messages after the caller's read pointer, excluding their own.

        Without a receipt every message from others is unread. If the
        receipt's message is no longer in the conversation, the whole
        conversation counts as unread.
        """
        return ServiceResult.success(cls.count_for(_conversation, caller))

    @classmethod
    @require_conversation_member()
    def unread_messages(
        cls,
        conversation_id: int,
        caller: User,
        _conversation: Conversation | None = None,
    ) -> ServiceResult[list[Message]]:
        """Messages after the caller's read pointer, in order."""
        messages = list(MessageService._ordered_messages(_conversation))
        return ServiceResult.success(
            messages_after_receipt(messages, cls._pointer(_conversation, caller))
        )


# =============================================================================
# Presence & Typing Tracker
# =============================================================================


@dataclass
class TypingEntry:
    """A live typing indicator as shown to clients."""

    user_id: int
    name: str
    expires_at: datetime


class TypingService(BaseService):
    """
    Service for typing indicators.

    Methods:
        set_typing: Mark the caller as typing for the next few seconds
        list_typing: Live indicators for a conversation
        purge_expired: Delete rows whose expiry has passed
    """

    @classmethod
    @require_conversation_member()
    def set_typing(
        cls,
        conversation_id: int,
        caller: User,
        _conversation: Conversation | None = None,
    ) -> ServiceResult[TypingIndicator]:
        """
        Upsert the caller's indicator with a fresh expiry.

        Concurrent calls converge on one row per (conversation, user);
        the last write wins.
        """
        expires_at = timezone.now() + timedelta(milliseconds=TYPING_CONFIG.TIMEOUT_MS)
        indicator, _ = TypingIndicator.objects.update_or_create(
            conversation=_conversation,
            user=caller,
            defaults={"expires_at": expires_at},
        )
        return ServiceResult.success(indicator)

    @classmethod
    @require_conversation_member()
    def list_typing(
        cls,
        conversation_id: int,
        caller: User,
        _conversation: Conversation | None = None,
    ) -> ServiceResult[list[TypingEntry]]:
        """
        Live typing indicators, the caller's own included.

        Expired rows are skipped here whether or not housekeeping has
        removed them yet.
        """
        indicators = (
            TypingIndicator.objects.filter(
                conversation=_conversation,
                expires_at__gt=timezone.now(),
            )
            .select_related("user")
            .order_by("user_id")
        )
        return ServiceResult.success(
            [
                TypingEntry(
                    user_id=indicator.user_id,
                    name=indicator.user.name or TYPING_CONFIG.FALLBACK_NAME,
                    expires_at=indicator.expires_at,
                )
                for indicator in indicators
            ]
        )

    @classmethod
    def purge_expired(cls, now: datetime | None = None) -> int:
        """Delete expired indicators; returns the number of rows removed."""
        deleted, _ = TypingIndicator.objects.filter(
            expires_at__lte=now or timezone.now(),
        ).delete()
        return deleted


class PresenceService(BaseService):
    """
    Service for online status.

    Presence is best effort: a failed write is logged and reported, and
    never interrupts the caller (sign-out must go through regardless).

    Methods:
        set_status: Record the caller as online or offline
        get_status: Presence of one user (None if never reported)
        list_online: Everyone currently online
    """

    @classmethod
    def set_status(cls, caller: User, is_online: bool) -> ServiceResult[UserPresence]:
        """
        Upsert the caller's presence with last_seen = now.

        Error codes:
            UNAVAILABLE: The write failed (logged, not raised)
        """
        try:
            with transaction.atomic():
                presence, _ = UserPresence.objects.update_or_create(
                    user=caller,
                    defaults={
                        "is_online": is_online,
                        "last_seen": timezone.now(),
                    },
                )
        except DatabaseError as exc:
            return cls.handle_exception(
                exc,
                context=f"Failed to set presence for user {caller.pk}",
                error_code=ErrorCode.UNAVAILABLE,
            )

        return ServiceResult.success(presence)

    @classmethod
    def get_status(cls, user_id: int) -> ServiceResult[UserPresence | None]:
        """
        Presence of a user.

        Error codes:
            NOT_FOUND: User does not exist
        """
        if not User.objects.filter(pk=user_id).exists():
            return ServiceResult.failure("User not found", error_code=ErrorCode.NOT_FOUND)
        return ServiceResult.success(UserPresence.objects.filter(user_id=user_id).first())

    @classmethod
    def list_online(cls) -> ServiceResult[list[UserPresence]]:
        """All online users, most recently seen first."""
        presences = (
            UserPresence.objects.filter(is_online=True)
            .select_related("user")
            .order_by("-last_seen", "user_id")
        )
        return ServiceResult.success(list(presences))


# =============================================================================
# Conversation View Composer
# =============================================================================


@dataclass
class ConversationView:
    """
    Conversation list entry composed at read time.

    Nothing here is stored; every field is recomputed on each call.
    """

    conversation: Conversation
    title: str
    participants: list[User] = field(default_factory=list)
    last_message: Message | None = None
    unread_count: int = 0


class ConversationViewService(BaseService):
    """
    Compose conversation list entries for a caller.

    Methods:
        compose: Views for all the caller's conversations
        compose_one: View for a single conversation
    """

    @classmethod
    def _with_participants(cls, queryset):
        return queryset.prefetch_related(
            Prefetch(
                "participants",
                queryset=Participant.objects.select_related("user").order_by("user_id"),
            )
        )

    @classmethod
    def _title(cls, conversation: Conversation, participants: list[User], caller: User) -> str:
        if conversation.is_group:
            return conversation.group_name or CONVERSATION_VIEW_CONFIG.GROUP_TITLE_FALLBACK

        other = next((user for user in participants if user.pk != caller.pk), None)
        if other is None:
            return CONVERSATION_VIEW_CONFIG.DIRECT_TITLE_FALLBACK
        return other.name or other.email or CONVERSATION_VIEW_CONFIG.DIRECT_TITLE_FALLBACK

    @classmethod
    def _compose(cls, conversation: Conversation, caller: User) -> ConversationView:
        participants = [participant.user for participant in conversation.participants.all()]
        last_message = (
            Message.objects.filter(conversation=conversation)
            .select_related("sender")
            .order_by("-created_at", "-id")
            .first()
        )
        return ConversationView(
            conversation=conversation,
            title=cls._title(conversation, participants, caller),
            participants=participants,
            last_message=last_message,
            unread_count=ReadReceiptService.count_for(conversation, caller),
        )

    @classmethod
    def compose(cls, caller: User) -> ServiceResult[list[ConversationView]]:
        """Views for all of the caller's conversations, most recently active first."""
        conversations = cls._with_participants(ConversationService.user_conversations(caller))
        return ServiceResult.success(
            [cls._compose(conversation, caller) for conversation in conversations]
        )

    @classmethod
    def compose_one(cls, conversation_id: int, caller: User) -> ServiceResult[ConversationView]:
        """
        View for one conversation.

        Error codes:
            NOT_FOUND: Conversation does not exist
            FORBIDDEN: Caller is not a participant
        """
        result = ConversationService.get_by_id(conversation_id, caller)
        if not result:
            return ServiceResult.from_failure(result)

        conversation = cls._with_participants(
            Conversation.objects.filter(pk=result.data.pk)
        ).get()
        return ServiceResult.success(cls._compose(conversation, caller))
