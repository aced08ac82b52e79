"""
ViewSets for chat API.

This module provides REST API endpoints for the chat system:
- ConversationViewSet: Conversations, read state and typing
- MessageViewSet: Message operations and reactions (nested under conversation)
- Presence views: Online status

URL Structure:
    /api/v1/chat/conversations/                                   GET
    /api/v1/chat/conversations/direct/                            POST
    /api/v1/chat/conversations/group/                             POST
    /api/v1/chat/conversations/{id}/                              GET
    /api/v1/chat/conversations/{id}/read/                         POST
    /api/v1/chat/conversations/{id}/unread/                       GET
    /api/v1/chat/conversations/{id}/unread/messages/              GET
    /api/v1/chat/conversations/{id}/typing/                       GET, POST
    /api/v1/chat/conversations/{id}/messages/                     GET, POST
    /api/v1/chat/conversations/{id}/messages/with-reactions/      GET
    /api/v1/chat/conversations/{id}/messages/{pk}/                DELETE
    /api/v1/chat/conversations/{id}/messages/{pk}/reactions/      GET
    /api/v1/chat/conversations/{id}/messages/{pk}/reactions/toggle/  POST
    /api/v1/chat/presence/                                        POST
    /api/v1/chat/presence/online/                                 GET
    /api/v1/chat/presence/{user_id}/                              GET

Design Decisions:
    - Every view resolves the registered caller first (CallerMixin)
    - All operations use the service layer; views only translate HTTP
    - Membership is enforced in the services, never in the views
"""

from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
    extend_schema_view,
)
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.identity import CallerMixin
from chat.serializers import (
    ConversationSerializer,
    ConversationViewSerializer,
    DirectConversationCreateSerializer,
    GroupConversationCreateSerializer,
    MarkReadSerializer,
    MessageCreateSerializer,
    MessageSerializer,
    MessageWithReactionsSerializer,
    PresenceUpdateSerializer,
    ReactionGroupSerializer,
    ReactionToggleResultSerializer,
    ReactionToggleSerializer,
    ReadReceiptSerializer,
    TypingEntrySerializer,
    UnreadCountSerializer,
    UserPresenceSerializer,
)
from chat.services import (
    ConversationService,
    ConversationViewService,
    MessageService,
    PresenceService,
    ReactionService,
    ReadReceiptService,
    TypingService,
)
from core.views import service_error_response


@extend_schema_view(
    list=extend_schema(
        operation_id="list_conversations",
        summary="List conversations",
        description=(
            "The caller's conversations, most recently active first, each with "
            "a display title, participants, last message and unread count."
        ),
        responses={200: ConversationViewSerializer(many=True)},
        tags=["Chat - Conversations"],
    ),
    retrieve=extend_schema(
        operation_id="get_conversation",
        summary="Get conversation",
        responses={
            200: ConversationViewSerializer,
            403: OpenApiResponse(description="Not a participant"),
            404: OpenApiResponse(description="Conversation not found"),
        },
        tags=["Chat - Conversations"],
    ),
)
class ConversationViewSet(CallerMixin, viewsets.ViewSet):
    """
    ViewSet for conversation operations.

    list:
        Composed views of the caller's conversations.

    retrieve:
        Composed view of one conversation.

    direct:
        Create the direct conversation with another user, or reuse it.

    group:
        Create a new group conversation.

    read:
        Move the caller's read pointer.

    unread / unread_messages:
        Unread count and unread messages for the caller.

    typing:
        GET lists live typing indicators; POST marks the caller as typing.
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    def list(self, request):
        """List the caller's conversations."""
        result = ConversationViewService.compose(self.caller)
        return Response(ConversationViewSerializer(result.data, many=True).data)

    def retrieve(self, request, pk=None):
        """Get a composed conversation view."""
        result = ConversationViewService.compose_one(int(pk), self.caller)
        if not result.success:
            return service_error_response(result)
        return Response(ConversationViewSerializer(result.data).data)

    @extend_schema(
        operation_id="create_or_get_direct_conversation",
        summary="Create or get direct conversation",
        description=(
            "Returns the single direct conversation between the caller and "
            "`other_user_id`, creating it if needed. Calling it again (from "
            "either side) returns the same conversation."
        ),
        request=DirectConversationCreateSerializer,
        responses={
            200: ConversationSerializer,
            400: OpenApiResponse(description="Direct conversation with yourself"),
            404: OpenApiResponse(description="User not found"),
        },
        tags=["Chat - Conversations"],
    )
    @action(detail=False, methods=["post"])
    def direct(self, request):
        """Create or reuse a direct conversation."""
        serializer = DirectConversationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ConversationService.create_or_get_direct(
            self.caller,
            serializer.validated_data["other_user_id"],
        )
        if not result.success:
            return service_error_response(result)

        return Response(ConversationSerializer(result.data).data)

    @extend_schema(
        operation_id="create_group_conversation",
        summary="Create group conversation",
        request=GroupConversationCreateSerializer,
        responses={
            201: ConversationSerializer,
            400: OpenApiResponse(description="Blank group name"),
            404: OpenApiResponse(description="Unknown participant id"),
        },
        tags=["Chat - Conversations"],
    )
    @action(detail=False, methods=["post"])
    def group(self, request):
        """Create a group conversation."""
        serializer = GroupConversationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ConversationService.create_group(
            self.caller,
            serializer.validated_data["participant_ids"],
            serializer.validated_data["group_name"],
        )
        if not result.success:
            return service_error_response(result)

        return Response(ConversationSerializer(result.data).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="mark_conversation_read",
        summary="Mark conversation as read",
        description="Move the caller's read pointer to `last_read_message_id`.",
        request=MarkReadSerializer,
        responses={
            200: ReadReceiptSerializer,
            400: OpenApiResponse(description="Message belongs to another conversation"),
            403: OpenApiResponse(description="Not a participant"),
            404: OpenApiResponse(description="Conversation or message not found"),
        },
        tags=["Chat - Read State"],
    )
    @action(detail=True, methods=["post"])
    def read(self, request, pk=None):
        """Mark conversation as read up to a message."""
        serializer = MarkReadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ReadReceiptService.mark_read(
            int(pk),
            self.caller,
            serializer.validated_data["last_read_message_id"],
        )
        if not result.success:
            return service_error_response(result)

        return Response(ReadReceiptSerializer(result.data).data)

    @extend_schema(
        operation_id="get_unread_count",
        summary="Get unread count",
        description="Messages after the caller's read pointer, excluding their own.",
        responses={200: UnreadCountSerializer},
        tags=["Chat - Read State"],
    )
    @action(detail=True, methods=["get"])
    def unread(self, request, pk=None):
        """Unread count for the caller."""
        result = ReadReceiptService.unread_count(int(pk), self.caller)
        if not result.success:
            return service_error_response(result)

        return Response({"conversation_id": int(pk), "unread_count": result.data})

    @extend_schema(
        operation_id="get_unread_messages",
        summary="Get unread messages",
        responses={200: MessageSerializer(many=True)},
        tags=["Chat - Read State"],
    )
    @action(detail=True, methods=["get"], url_path="unread/messages", url_name="unread-messages")
    def unread_messages(self, request, pk=None):
        """Messages after the caller's read pointer."""
        result = ReadReceiptService.unread_messages(int(pk), self.caller)
        if not result.success:
            return service_error_response(result)

        return Response(MessageSerializer(result.data, many=True).data)

    @extend_schema(
        methods=["GET"],
        operation_id="list_typing",
        summary="List typing users",
        description="Live typing indicators, including the caller's own.",
        responses={200: TypingEntrySerializer(many=True)},
        tags=["Chat - Typing"],
    )
    @extend_schema(
        methods=["POST"],
        operation_id="set_typing",
        summary="Set typing",
        description="Mark the caller as typing for the next few seconds.",
        request=None,
        responses={204: OpenApiResponse(description="Typing indicator refreshed")},
        tags=["Chat - Typing"],
    )
    @action(detail=True, methods=["get", "post"])
    def typing(self, request, pk=None):
        """List or refresh typing indicators."""
        if request.method == "POST":
            result = TypingService.set_typing(int(pk), self.caller)
            if not result.success:
                return service_error_response(result)
            return Response(status=status.HTTP_204_NO_CONTENT)

        result = TypingService.list_typing(int(pk), self.caller)
        if not result.success:
            return service_error_response(result)

        return Response(TypingEntrySerializer(result.data, many=True).data)


class MessageViewSet(CallerMixin, viewsets.ViewSet):
    """
    ViewSet for messages within a conversation.

    list:
        All messages in order (deleted ones with content null).

    create:
        Send a text message.

    destroy:
        Soft delete one of the caller's messages.

    with_reactions:
        All messages in order with aggregated reactions.

    reactions:
        Aggregated reactions for one message.

    toggle_reaction:
        Add or remove the caller's reaction with an emoji.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="list_messages",
        summary="List messages",
        responses={
            200: MessageSerializer(many=True),
            403: OpenApiResponse(description="Not a participant"),
            404: OpenApiResponse(description="Conversation not found"),
        },
        tags=["Chat - Messages"],
    )
    def list(self, request, conversation_pk=None):
        """List messages in a conversation."""
        result = MessageService.list_for_conversation(int(conversation_pk), self.caller)
        if not result.success:
            return service_error_response(result)

        return Response(MessageSerializer(result.data, many=True).data)

    @extend_schema(
        operation_id="send_message",
        summary="Send message",
        request=MessageCreateSerializer,
        responses={
            201: MessageSerializer,
            400: OpenApiResponse(description="Empty text"),
            403: OpenApiResponse(description="Not a participant"),
            404: OpenApiResponse(description="Conversation not found"),
        },
        tags=["Chat - Messages"],
    )
    def create(self, request, conversation_pk=None):
        """Send a message."""
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = MessageService.send(
            int(conversation_pk),
            self.caller,
            serializer.validated_data["text"],
        )
        if not result.success:
            return service_error_response(result)

        return Response(MessageSerializer(result.data).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="delete_message",
        summary="Delete message",
        description="Soft delete: the message keeps its position with content null.",
        responses={
            204: OpenApiResponse(description="Message deleted"),
            403: OpenApiResponse(description="Not the sender"),
            404: OpenApiResponse(description="Message not found"),
        },
        tags=["Chat - Messages"],
    )
    def destroy(self, request, conversation_pk=None, pk=None):
        """Soft delete a message."""
        result = MessageService.soft_delete(
            int(pk),
            self.caller,
            conversation_id=int(conversation_pk),
        )
        if not result.success:
            return service_error_response(result)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="list_messages_with_reactions",
        summary="List messages with reactions",
        responses={200: MessageWithReactionsSerializer(many=True)},
        tags=["Chat - Messages"],
    )
    def with_reactions(self, request, conversation_pk=None):
        """List messages with aggregated reactions."""
        result = MessageService.list_with_reactions(int(conversation_pk), self.caller)
        if not result.success:
            return service_error_response(result)

        return Response(MessageWithReactionsSerializer(result.data, many=True).data)

    @extend_schema(
        operation_id="get_message_reactions",
        summary="Get reactions for a message",
        responses={
            200: ReactionGroupSerializer(many=True),
            403: OpenApiResponse(description="Not a participant"),
            404: OpenApiResponse(description="Message not found"),
        },
        tags=["Chat - Reactions"],
    )
    def reactions(self, request, conversation_pk=None, pk=None):
        """Aggregated reactions for a message."""
        result = ReactionService.get_for_message(
            int(pk),
            self.caller,
            conversation_id=int(conversation_pk),
        )
        if not result.success:
            return service_error_response(result)

        return Response(ReactionGroupSerializer(result.data, many=True).data)

    @extend_schema(
        operation_id="toggle_reaction",
        summary="Toggle reaction",
        description=(
            "Add the caller's reaction with `emoji` if absent, remove it if "
            "present. Allowed emojis: 👍 ❤️ 😂 😮 😢."
        ),
        request=ReactionToggleSerializer,
        responses={
            200: ReactionToggleResultSerializer,
            400: OpenApiResponse(description="Emoji not allowed"),
            403: OpenApiResponse(description="Not a participant"),
            404: OpenApiResponse(description="Message not found"),
        },
        tags=["Chat - Reactions"],
    )
    def toggle_reaction(self, request, conversation_pk=None, pk=None):
        """Toggle a reaction."""
        serializer = ReactionToggleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ReactionService.toggle(
            int(pk),
            self.caller,
            serializer.validated_data["emoji"],
            conversation_id=int(conversation_pk),
        )
        if not result.success:
            return service_error_response(result)

        added, reaction = result.data
        return Response(ReactionToggleResultSerializer({"added": added, "reaction": reaction}).data)


class PresenceView(CallerMixin, APIView):
    """
    Manage current user's presence.

    POST /api/v1/chat/presence/
        Set online or offline.

    Payload:
        is_online: true | false
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="set_presence",
        summary="Set presence status",
        description=(
            "Best effort: if the status cannot be stored the request still "
            "completes with 503 UNAVAILABLE instead of failing the client flow."
        ),
        request=PresenceUpdateSerializer,
        responses={
            200: UserPresenceSerializer,
            503: OpenApiResponse(description="Presence could not be stored"),
        },
        tags=["Chat - Presence"],
    )
    def post(self, request):
        """Set current user's presence status."""
        serializer = PresenceUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = PresenceService.set_status(self.caller, serializer.validated_data["is_online"])
        if not result.success:
            return service_error_response(result)

        return Response(UserPresenceSerializer(result.data).data)


class OnlinePresenceView(CallerMixin, APIView):
    """
    GET /api/v1/chat/presence/online/
        Everyone currently online.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="list_online_presence",
        summary="List online users",
        responses={200: UserPresenceSerializer(many=True)},
        tags=["Chat - Presence"],
    )
    def get(self, request):
        result = PresenceService.list_online()
        return Response(UserPresenceSerializer(result.data, many=True).data)


class UserPresenceView(CallerMixin, APIView):
    """
    Get presence status for a specific user.

    GET /api/v1/chat/presence/{user_id}/
        Users who never reported presence are shown offline with no last_seen.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="get_user_presence",
        summary="Get user presence",
        parameters=[
            OpenApiParameter(
                name="user_id",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.PATH,
                description="ID of the user to query",
            ),
        ],
        responses={
            200: UserPresenceSerializer,
            404: OpenApiResponse(description="User not found"),
        },
        tags=["Chat - Presence"],
    )
    def get(self, request, user_id):
        """Get presence for a specific user."""
        result = PresenceService.get_status(user_id)
        if not result.success:
            return service_error_response(result)

        if result.data is None:
            return Response({"user_id": user_id, "is_online": False, "last_seen": None})

        return Response(UserPresenceSerializer(result.data).data)
