"""
Agent profile and settings models.
"""

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class UserProfile(models.Model):
    """
    Onboarding record for an authenticated agent.

    An agent counts as onboarded once name, phone and address are
    filled in and the forced password change has been done.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='profile',
    )
    name = models.CharField(max_length=200, blank=True, default='')
    phone = models.CharField(max_length=20, blank=True, default='')
    address = models.CharField(max_length=255, blank=True, default='')
    must_change_password = models.BooleanField(
        default=True,
        help_text="Agent is still on the password they were provisioned with."
    )
    password_changed_at = models.DateTimeField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'user_profiles'

    def __str__(self):
        return f"{self.name or self.user.get_username()} (user {self.user_id})"


class AgentSettings(models.Model):
    """Business details and UI preferences for one agent."""

    LANGUAGE_CHOICES = [('en', 'English'), ('sw', 'Kiswahili')]
    PAGE_CHOICES = [('dashboard', 'Dashboard'), ('clients', 'Clients')]

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='agent_settings',
    )

    # Business
    company_name = models.CharField(max_length=200, blank=True, default='')
    company_address = models.CharField(max_length=255, blank=True, default='')
    company_phone = models.CharField(max_length=20, blank=True, default='')
    company_email = models.CharField(max_length=254, blank=True, default='')
    default_commission = models.DecimalField(
        max_digits=5, decimal_places=2, default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0'))],
        help_text="Default commission rate (%).",
    )
    comprehensive_rate = models.DecimalField(
        max_digits=5, decimal_places=2, default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0'))],
    )
    third_party_rate = models.DecimalField(
        max_digits=5, decimal_places=2, default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0'))],
    )
    act_only_rate = models.DecimalField(
        max_digits=5, decimal_places=2, default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0'))],
    )

    # Preferences
    dark_mode = models.BooleanField(default=False)
    language = models.CharField(max_length=5, choices=LANGUAGE_CHOICES, default='en')
    email_notifications = models.BooleanField(default=True)
    expiry_alerts = models.BooleanField(default=True)
    commission_updates = models.BooleanField(default=False)
    default_page = models.CharField(max_length=20, choices=PAGE_CHOICES, default='dashboard')
    items_per_page = models.PositiveIntegerField(default=25)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'agent_settings'
        verbose_name_plural = 'agent settings'

    def __str__(self):
        return f"Settings for user {self.user_id}"
