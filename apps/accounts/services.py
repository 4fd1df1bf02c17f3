"""
Account service layer.

Login, profile onboarding, forced password change and agent
settings. Views delegate here; the completeness rule itself lives in
apps.core.rules so every page evaluates it the same way.
"""

import logging
from datetime import datetime
from typing import Optional

from django.contrib.auth import authenticate, login, logout, update_session_auth_hash
from django.db import transaction

from apps.accounts.models import AgentSettings, UserProfile
from apps.core.exceptions import InvalidCredentialsError
from apps.core.rules import is_profile_complete

logger = logging.getLogger(__name__)


class AuthService:
    """Session login and logout."""

    @staticmethod
    def login(request, username: str, password: str):
        """
        Authenticate an agent and attach the user to the session.

        Raises:
            InvalidCredentialsError: If the credentials are rejected.
        """
        user = authenticate(request, username=username, password=password)
        if user is None:
            logger.warning("Failed login attempt for %r", username)
            raise InvalidCredentialsError()

        login(request, user)
        logger.info("User %s logged in", user.pk)
        return user

    @staticmethod
    def logout(request) -> None:
        user_id = getattr(request.user, 'pk', None)
        logout(request)
        logger.info("User %s logged out", user_id)


class ProfileService:
    """Service class for agent profile operations."""

    @staticmethod
    def get_profile(user) -> Optional[UserProfile]:
        """Return the agent's profile, or None if it was never created."""
        return UserProfile.objects.filter(user=user).first()

    @staticmethod
    def status(user) -> dict:
        """Onboarding flags used to route the agent after login."""
        profile = ProfileService.get_profile(user)
        return {
            'profile_complete': is_profile_complete(profile),
            'must_change_password': profile is None or profile.must_change_password,
        }

    @staticmethod
    @transaction.atomic
    def update_profile(user, validated_data: dict) -> UserProfile:
        """
        Create or update the agent's profile.

        The profile row is created on first submission. A brand new
        profile still requires a password change.

        Args:
            user: The authenticated agent.
            validated_data: Dict with name, phone, address.

        Returns:
            The saved UserProfile.
        """
        profile, created = UserProfile.objects.select_for_update().get_or_create(
            user=user,
        )
        profile.name = validated_data['name']
        profile.phone = validated_data['phone']
        profile.address = validated_data['address']
        profile.save(update_fields=['name', 'phone', 'address', 'updated_at'])

        logger.info(
            "Profile %s for user %s (complete=%s)",
            'created' if created else 'updated',
            user.pk,
            is_profile_complete(profile),
        )
        return profile

    @staticmethod
    @transaction.atomic
    def change_password(request, new_password: str, now: datetime) -> UserProfile:
        """
        Set a new password and clear the forced-change flag.

        The session hash is refreshed so the agent stays logged in.
        """
        user = request.user
        user.set_password(new_password)
        user.save(update_fields=['password'])
        update_session_auth_hash(request, user)

        profile, _ = UserProfile.objects.select_for_update().get_or_create(user=user)
        profile.must_change_password = False
        profile.password_changed_at = now
        profile.save(update_fields=['must_change_password', 'password_changed_at', 'updated_at'])

        logger.info("User %s changed password", user.pk)
        return profile


class SettingsService:
    """Business settings and preferences."""

    @staticmethod
    def get_settings(user) -> AgentSettings:
        settings_obj, _ = AgentSettings.objects.get_or_create(user=user)
        return settings_obj

    @staticmethod
    @transaction.atomic
    def update_settings(user, validated_data: dict) -> AgentSettings:
        """
        Merge submitted fields into the agent's settings.

        Only the fields present in validated_data are overwritten.
        """
        settings_obj, _ = AgentSettings.objects.select_for_update().get_or_create(user=user)
        for name, value in validated_data.items():
            setattr(settings_obj, name, value)
        settings_obj.save()

        logger.info(
            "Settings updated for user %s: %s",
            user.pk,
            ', '.join(sorted(validated_data)) or 'no changes',
        )
        return settings_obj
