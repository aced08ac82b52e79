"""
URL configuration for the Django application.

URL Structure:
    /                              - ReDoc API documentation
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/users/                 - User directory
        me/                        - Current user (GET) / upsert profile (POST)
        ?q=<text>                  - Search users by display name
        {id}/                      - User by internal id
        by-external-id/{subject}/  - User by identity-provider subject
    /api/v1/chat/                  - Chat endpoints
        conversations/                               - Conversation list (composed view)
        conversations/direct/                        - Create or get direct conversation
        conversations/group/                         - Create group conversation
        conversations/{id}/                          - Conversation detail (composed view)
        conversations/{id}/read/                     - Mark read up to a message
        conversations/{id}/unread/                   - Unread count
        conversations/{id}/unread/messages/          - Unread messages
        conversations/{id}/typing/                   - Set / list typing indicators
        conversations/{id}/messages/                 - Message list / send
        conversations/{id}/messages/with-reactions/  - Messages with aggregated reactions
        conversations/{id}/messages/{pk}/            - Soft delete message
        conversations/{id}/messages/{pk}/reactions/         - Aggregated reactions
        conversations/{id}/messages/{pk}/reactions/toggle/  - Toggle a reaction
        presence/                                    - Set own presence
        presence/online/                             - Online users
        presence/{user_id}/                          - Presence of one user

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    # User directory
    path("users/", include("authentication.urls")),
    # Chat
    path("chat/", include("chat.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Messaging Admin"
admin.site.site_title = "Messaging Admin Portal"
admin.site.index_title = "Conversations, messages and users"
