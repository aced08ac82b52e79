"""
User directory views.

This module provides the API for user profiles:

    GET  /api/v1/users/me/                          - Current user's profile
    POST /api/v1/users/me/                          - Upsert current user's profile
    GET  /api/v1/users/?q=<text>                    - Search users (all users if no q)
    GET  /api/v1/users/{id}/                        - User by internal id
    GET  /api/v1/users/by-external-id/{subject}/    - User by provider subject

Only a valid identity is required here; a registered profile is not, since
POST /me/ is how a profile gets registered on first login.

Related files:
    - services.py: UserDirectoryService
    - identity.py: IdentityService (token principal -> subject)
    - serializers.py: Request/response serialization
"""

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

from authentication.identity import IdentityService
from authentication.serializers import UserSerializer, UserUpsertSerializer
from authentication.services import UserDirectoryService
from core.views import service_error_response


@extend_schema_view(
    list=extend_schema(
        operation_id="search_users",
        summary="Search users",
        description=(
            "Users other than the caller whose display name contains `q` "
            "(case-insensitive), oldest first. Without `q`, every other user."
        ),
        parameters=[
            OpenApiParameter(
                name="q",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="Substring of the display name",
                required=False,
            ),
        ],
        responses={200: UserSerializer(many=True)},
        tags=["Users"],
    ),
    retrieve=extend_schema(
        operation_id="get_user",
        summary="Get user by id",
        responses={
            200: UserSerializer,
            404: OpenApiResponse(description="User not found"),
        },
        tags=["Users"],
    ),
)
class UserViewSet(viewsets.ViewSet):
    """
    ViewSet for the user directory.

    list:
        Search users by display name, excluding the caller.

    retrieve:
        Get a user by internal id.

    me:
        GET returns the caller's profile (404 PROFILE_NOT_FOUND until
        upserted); POST creates or updates it.

    by_external_id:
        Get a user by identity-provider subject.
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    def _subject_or_error(self, request):
        """Return (subject, None) or (None, error response)."""
        result = IdentityService.get_subject(request.user)
        if not result.success:
            return None, service_error_response(result)
        return result.data, None

    def list(self, request):
        """Search users by name."""
        subject, error = self._subject_or_error(request)
        if error:
            return error

        result = UserDirectoryService.search_users(subject, request.query_params.get("q", ""))
        return Response(UserSerializer(result.data, many=True).data)

    def retrieve(self, request, pk=None):
        """Get user by internal id."""
        result = UserDirectoryService.get_user(int(pk))
        if not result.success:
            return service_error_response(result)
        return Response(UserSerializer(result.data).data)

    @extend_schema(
        methods=["GET"],
        operation_id="get_me",
        summary="Get current user",
        responses={
            200: UserSerializer,
            404: OpenApiResponse(description="Profile not upserted yet (PROFILE_NOT_FOUND)"),
        },
        tags=["Users"],
    )
    @extend_schema(
        methods=["POST"],
        operation_id="upsert_user",
        summary="Create or update current user",
        description=(
            "Register on first login or refresh the profile. The identity "
            "provider subject is taken from the bearer token."
        ),
        request=UserUpsertSerializer,
        responses={
            200: UserSerializer,
            400: OpenApiResponse(description="Invalid payload"),
        },
        tags=["Users"],
    )
    @action(detail=False, methods=["get", "post"])
    def me(self, request):
        """Get or upsert the caller's profile."""
        subject, error = self._subject_or_error(request)
        if error:
            return error

        if request.method == "GET":
            result = UserDirectoryService.get_me(subject)
            if not result.success:
                return service_error_response(result)
            return Response(UserSerializer(result.data).data)

        serializer = UserUpsertSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = UserDirectoryService.upsert_user(
            subject=subject,
            email=serializer.validated_data["email"],
            name=serializer.validated_data["name"],
            avatar_url=serializer.validated_data.get("avatar_url"),
        )
        if not result.success:
            return service_error_response(result)

        return Response(UserSerializer(result.data).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="get_user_by_external_id",
        summary="Get user by identity-provider subject",
        responses={
            200: UserSerializer,
            404: OpenApiResponse(description="User not found"),
        },
        tags=["Users"],
    )
    @action(
        detail=False,
        methods=["get"],
        url_path=r"by-external-id/(?P<external_id>[^/]+)",
        url_name="by-external-id",
    )
    def by_external_id(self, request, external_id=None):
        """Get user by provider subject."""
        result = UserDirectoryService.get_user_by_external_id(external_id)
        if not result.success:
            return service_error_response(result)
        return Response(UserSerializer(result.data).data)
