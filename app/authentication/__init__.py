"""
Authentication application.

This app owns the user directory and the bridge between bearer tokens
issued by the external identity provider and local user records.

Key components:
    - User model: Profile keyed by the provider subject (external_id)
    - ExternalIdentity: Token principal carrying the subject claim
    - IdentityService: Subject extraction and caller resolution
    - UserDirectoryService: Upsert, "me", search and lookups

Usage:
    from authentication.models import User
    from authentication.services import UserDirectoryService
"""
