"""
URL configuration for the user directory.

URL structure (prefixed with /api/v1/users/ in config/urls.py):
    /                                  - Search users (GET, ?q=)
    /me/                               - Current user (GET) / upsert (POST)
    /{id}/                             - User by internal id (GET)
    /by-external-id/{external_id}/     - User by provider subject (GET)
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from authentication.views import UserViewSet

# SimpleRouter: an API root view would collide with the list route at ""
router = SimpleRouter()
router.register(r"", UserViewSet, basename="user")

app_name = "authentication"

urlpatterns = [
    path("", include(router.urls)),
]
