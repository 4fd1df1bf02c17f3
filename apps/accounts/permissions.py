"""
Profile completeness gate for dashboard and client endpoints.
"""

import logging

from rest_framework.permissions import BasePermission

from apps.accounts.services import ProfileService
from apps.core.exceptions import ProfileIncompleteError
from apps.core.rules import is_profile_complete

logger = logging.getLogger(__name__)


class IsProfileComplete(BasePermission):
    """
    Allows access only to agents who finished onboarding.

    Must be listed after IsAuthenticated so anonymous requests get a 401
    rather than a profile error.
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        if not is_profile_complete(ProfileService.get_profile(user)):
            logger.info(
                "User %s blocked from %s: profile incomplete",
                user.pk,
                request.path,
            )
            raise ProfileIncompleteError()

        return True
