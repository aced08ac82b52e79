"""
Factory Boy factories for authentication models.

Provides realistic test data generation for:
- User: Profile keyed by an identity-provider subject

Usage:
    from authentication.tests.factories import UserFactory

    # Create a user with default values
    user = UserFactory()

    # Create a user with a specific display name
    user = UserFactory(name="Ada Lovelace")
"""

import factory

from authentication.models import User


class UserFactory(factory.django.DjangoModelFactory):
    """
    Factory for User model.

    Creates users the way the directory does: keyed by a provider subject,
    with an unusable password.

    Examples:
        # Basic user
        user = UserFactory()

        # User without a display name
        user = UserFactory(name="")

        # Staff user
        user = UserFactory(is_staff=True)
    """

    class Meta:
        model = User
        skip_postgeneration_save = True

    external_id = factory.Sequence(lambda n: f"user_{n:04d}")
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    name = factory.Sequence(lambda n: f"User {n}")
    avatar_url = ""
    is_active = True
    is_staff = False

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Override create to use UserManager.create_user()."""
        return model_class.objects.create_user(
            external_id=kwargs.pop("external_id"),
            email=kwargs.pop("email"),
            name=kwargs.pop("name"),
            **kwargs,
        )
