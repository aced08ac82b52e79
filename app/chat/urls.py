"""
URL configuration for chat API.

URL Structure:
    Conversations:
        /conversations/                          GET
        /conversations/direct/                   POST
        /conversations/group/                    POST
        /conversations/{id}/                     GET
        /conversations/{id}/read/                POST
        /conversations/{id}/unread/              GET
        /conversations/{id}/unread/messages/     GET
        /conversations/{id}/typing/              GET, POST

    Messages:
        /conversations/{id}/messages/                 GET, POST
        /conversations/{id}/messages/with-reactions/  GET
        /conversations/{id}/messages/{pk}/            DELETE

    Reactions:
        /conversations/{id}/messages/{pk}/reactions/         GET
        /conversations/{id}/messages/{pk}/reactions/toggle/  POST

    Presence:
        /presence/                               POST
        /presence/online/                        GET
        /presence/{user_id}/                     GET

All URLs are prefixed with /api/v1/chat/ in the main URL configuration.
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from chat.views import (
    ConversationViewSet,
    MessageViewSet,
    OnlinePresenceView,
    PresenceView,
    UserPresenceView,
)

# Main router for conversations
router = DefaultRouter()
router.register(r"conversations", ConversationViewSet, basename="conversation")

app_name = "chat"

urlpatterns = [
    path("", include(router.urls)),
    # Presence endpoints
    path("presence/", PresenceView.as_view(), name="presence"),
    path("presence/online/", OnlinePresenceView.as_view(), name="presence-online"),
    path("presence/<int:user_id>/", UserPresenceView.as_view(), name="presence-user"),
    # Nested routes for messages
    path(
        "conversations/<int:conversation_pk>/messages/",
        MessageViewSet.as_view({"get": "list", "post": "create"}),
        name="conversation-message-list",
    ),
    path(
        "conversations/<int:conversation_pk>/messages/with-reactions/",
        MessageViewSet.as_view({"get": "with_reactions"}),
        name="conversation-message-with-reactions",
    ),
    path(
        "conversations/<int:conversation_pk>/messages/<int:pk>/",
        MessageViewSet.as_view({"delete": "destroy"}),
        name="conversation-message-detail",
    ),
    # Reaction routes
    path(
        "conversations/<int:conversation_pk>/messages/<int:pk>/reactions/",
        MessageViewSet.as_view({"get": "reactions"}),
        name="conversation-message-reactions",
    ),
    path(
        "conversations/<int:conversation_pk>/messages/<int:pk>/reactions/toggle/",
        MessageViewSet.as_view({"post": "toggle_reaction"}),
        name="conversation-message-reaction-toggle",
    ),
]
