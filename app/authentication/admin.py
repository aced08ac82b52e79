"""
Django admin configuration for authentication models.

Related files:
    - models.py: Model definitions
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from authentication.models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin configuration for User model.

    Users are keyed by the identity provider's subject; passwords are
    unusable for regular users and only set for staff accounts.
    """

    list_display = (
        "external_id",
        "name",
        "email",
        "is_active",
        "is_staff",
        "created_at",
    )
    list_filter = ("is_active", "is_staff", "is_superuser", "created_at")
    search_fields = ("external_id", "email", "name")
    ordering = ("-created_at",)

    fieldsets = (
        (None, {"fields": ("external_id", "password")}),
        ("Profile", {"fields": ("name", "email", "avatar_url")}),
        (
            "Status",
            {"fields": ("is_active", "is_staff", "is_superuser")},
        ),
        (
            "Permissions",
            {"fields": ("groups", "user_permissions")},
        ),
        (
            "Important dates",
            {"fields": ("created_at", "updated_at", "last_login")},
        ),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("external_id", "email", "name", "password1", "password2"),
            },
        ),
    )

    readonly_fields = ("created_at", "updated_at", "last_login")
