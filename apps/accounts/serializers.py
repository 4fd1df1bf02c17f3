"""
Account serializers for the agent dashboard.
"""

from decimal import Decimal

from rest_framework import serializers

from apps.accounts.models import AgentSettings
from apps.core.rules import EMAIL_PATTERN

MIN_PASSWORD_LENGTH = 6


class LoginSerializer(serializers.Serializer):
    """Serializer for login request."""

    username = serializers.CharField(max_length=150, required=True)
    password = serializers.CharField(required=True, trim_whitespace=False)


class LoginResponseSerializer(serializers.Serializer):
    """Serializer for login response."""

    user_id = serializers.IntegerField()
    username = serializers.CharField()
    email = serializers.CharField(allow_blank=True)
    profile_complete = serializers.BooleanField()
    must_change_password = serializers.BooleanField()


class ProfileUpdateSerializer(serializers.Serializer):
    """Serializer for profile update request. All three fields are required."""

    name = serializers.CharField(
        max_length=200,
        required=True,
        help_text="Agent's full name.",
    )
    phone = serializers.CharField(
        max_length=20,
        required=True,
        help_text="Agent's phone number.",
    )
    address = serializers.CharField(
        max_length=255,
        required=True,
        help_text="Agent's address.",
    )


class ProfileResponseSerializer(serializers.Serializer):
    """Serializer for profile response."""

    name = serializers.CharField(allow_blank=True)
    email = serializers.CharField(allow_blank=True)
    phone = serializers.CharField(allow_blank=True)
    address = serializers.CharField(allow_blank=True)
    must_change_password = serializers.BooleanField()
    profile_complete = serializers.BooleanField()


class ChangePasswordSerializer(serializers.Serializer):
    """Serializer for change-password request."""

    new_password = serializers.CharField(
        required=True,
        trim_whitespace=False,
        min_length=MIN_PASSWORD_LENGTH,
        error_messages={
            'min_length': 'Password must be at least 6 characters long.',
        },
    )
    confirm_password = serializers.CharField(required=True, trim_whitespace=False)

    def validate(self, attrs):
        """Check both password entries match."""
        if attrs['new_password'] != attrs['confirm_password']:
            raise serializers.ValidationError(
                "Passwords do not match. Please try again."
            )
        return attrs


class AgentSettingsSerializer(serializers.Serializer):
    """Serializer for business settings and preferences (partial updates)."""

    company_name = serializers.CharField(max_length=200, allow_blank=True, required=False)
    company_address = serializers.CharField(max_length=255, allow_blank=True, required=False)
    company_phone = serializers.CharField(max_length=20, allow_blank=True, required=False)
    company_email = serializers.CharField(max_length=254, allow_blank=True, required=False)
    default_commission = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=Decimal('0'), required=False,
    )
    comprehensive_rate = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=Decimal('0'), required=False,
    )
    third_party_rate = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=Decimal('0'), required=False,
    )
    act_only_rate = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=Decimal('0'), required=False,
    )
    dark_mode = serializers.BooleanField(required=False)
    language = serializers.ChoiceField(
        choices=AgentSettings.LANGUAGE_CHOICES, required=False,
    )
    email_notifications = serializers.BooleanField(required=False)
    expiry_alerts = serializers.BooleanField(required=False)
    commission_updates = serializers.BooleanField(required=False)
    default_page = serializers.ChoiceField(
        choices=AgentSettings.PAGE_CHOICES, required=False,
    )
    items_per_page = serializers.IntegerField(min_value=1, max_value=100, required=False)

    def validate_company_email(self, value):
        """Allow blank, otherwise require a basic local@domain.tld shape."""
        if value and not EMAIL_PATTERN.match(value):
            raise serializers.ValidationError("Please enter a valid email address.")
        return value
