"""
Account views for the agent dashboard.

Views are thin; all business logic is in the service layer.
"""

import logging

from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.serializers import (
    AgentSettingsSerializer,
    ChangePasswordSerializer,
    LoginResponseSerializer,
    LoginSerializer,
    ProfileResponseSerializer,
    ProfileUpdateSerializer,
)
from apps.accounts.services import (
    AuthService,
    ProfileService,
    SettingsService,
)

logger = logging.getLogger(__name__)


def build_profile_data(user):
    """Profile fields plus onboarding flags for a user."""
    profile = ProfileService.get_profile(user)
    flags = ProfileService.status(user)
    return {
        'name': profile.name if profile else '',
        'email': user.email or '',
        'phone': profile.phone if profile else '',
        'address': profile.address if profile else '',
        'must_change_password': flags['must_change_password'],
        'profile_complete': flags['profile_complete'],
    }


class LoginView(APIView):
    """
    POST /api/login

    Start a session. The response tells the client where to send the
    agent next: change password, settings, or the dashboard.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        """Handle login."""
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = AuthService.login(
            request,
            username=serializer.validated_data['username'],
            password=serializer.validated_data['password'],
        )

        response_serializer = LoginResponseSerializer(data={
            'user_id': user.pk,
            'username': user.get_username(),
            'email': user.email or '',
            **ProfileService.status(user),
        })
        response_serializer.is_valid(raise_exception=True)

        return Response(
            response_serializer.validated_data,
            status=status.HTTP_200_OK,
        )


class LogoutView(APIView):
    """POST /api/logout"""

    permission_classes = [IsAuthenticated]

    def post(self, request):
        AuthService.logout(request)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProfileView(APIView):
    """
    GET /api/profile
    PUT /api/profile

    Read or complete the agent's profile.
    """

    permission_classes = [IsAuthenticated]

    def get(self, request):
        """Handle viewing the profile."""
        response_serializer = ProfileResponseSerializer(
            data=build_profile_data(request.user)
        )
        response_serializer.is_valid(raise_exception=True)

        return Response(
            response_serializer.validated_data,
            status=status.HTTP_200_OK,
        )

    def put(self, request):
        """Handle profile update."""
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        ProfileService.update_profile(request.user, serializer.validated_data)

        response_serializer = ProfileResponseSerializer(
            data=build_profile_data(request.user)
        )
        response_serializer.is_valid(raise_exception=True)

        return Response(
            response_serializer.validated_data,
            status=status.HTTP_200_OK,
        )


class ChangePasswordView(APIView):
    """
    POST /api/change-password

    Replace the provisioned password and clear the forced-change flag.
    """

    permission_classes = [IsAuthenticated]

    def post(self, request):
        """Handle password change."""
        serializer = ChangePasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        ProfileService.change_password(
            request,
            new_password=serializer.validated_data['new_password'],
            now=timezone.now(),
        )

        return Response(
            {
                'message': 'Password changed successfully.',
                **ProfileService.status(request.user),
            },
            status=status.HTTP_200_OK,
        )


class SettingsView(APIView):
    """
    GET /api/settings
    PUT /api/settings

    Business settings and preferences. PUT merges the submitted fields.
    """

    permission_classes = [IsAuthenticated]

    def get(self, request):
        """Handle viewing settings."""
        settings_obj = SettingsService.get_settings(request.user)
        return Response(
            AgentSettingsSerializer(settings_obj).data,
            status=status.HTTP_200_OK,
        )

    def put(self, request):
        """Handle settings update."""
        serializer = AgentSettingsSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        settings_obj = SettingsService.update_settings(
            request.user,
            serializer.validated_data,
        )

        return Response(
            AgentSettingsSerializer(settings_obj).data,
            status=status.HTTP_200_OK,
        )
