"""
Serializers for the user directory.

This module provides DRF serializers for:
- User model (read operations, nested in chat responses too)
- Profile upsert payload

Related files:
    - models.py: User model
    - views.py: UserViewSet
"""

from rest_framework import serializers

from authentication.models import User


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for User model (read operations).

    external_id is exposed so clients can match the identity provider's
    subject against directory entries.
    """

    avatar_url = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "external_id",
            "email",
            "name",
            "avatar_url",
            "created_at",
        ]
        read_only_fields = fields

    def get_avatar_url(self, obj):
        """Return the avatar reference or None when unset."""
        return obj.avatar_url or None


class UserUpsertSerializer(serializers.Serializer):
    """
    Payload for POST /api/v1/users/me/.

    The subject is never accepted from the body; it comes from the token.
    """

    email = serializers.EmailField(max_length=254)
    name = serializers.CharField(max_length=255)
    avatar_url = serializers.URLField(
        max_length=1024,
        required=False,
        allow_null=True,
        allow_blank=True,
    )
