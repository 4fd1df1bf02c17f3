"""
Client record model for the agent dashboard.
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from apps.core.rules import MAX_LENGTHS, PolicyType, policy_number, resolve_renewal_date

POLICY_TYPE_CHOICES = [(choice.value, choice.value) for choice in PolicyType]


class ClientRecord(models.Model):
    """
    One insured vehicle and its policy.

    Policy status is never stored: it is derived from the start and
    renewal dates every time a record is read.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )
    full_name = models.CharField(
        max_length=MAX_LENGTHS['full_name'],
        help_text="Policy holder's full name."
    )
    phone = models.CharField(
        max_length=MAX_LENGTHS['phone'],
        db_index=True,
        help_text="Kenyan phone number (+254... or 0...)."
    )
    email = models.CharField(
        max_length=MAX_LENGTHS['email'],
        blank=True,
        default='',
    )
    address = models.CharField(
        max_length=MAX_LENGTHS['address'],
        blank=True,
        default='',
    )
    vehicle_number = models.CharField(
        max_length=MAX_LENGTHS['vehicle_number'],
        db_index=True,
        help_text="Vehicle registration number."
    )
    policy_type = models.CharField(
        max_length=20,
        choices=POLICY_TYPE_CHOICES,
    )
    start_date = models.DateField(
        help_text="Policy inception date."
    )
    renewal_date = models.DateField(
        null=True,
        blank=True,
        help_text="Explicit renewal date. Empty means start_date + 1 year.",
    )
    premium = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0'))],
    )
    earned = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
    )
    commission = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0'))],
    )
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='client_records',
        editable=False,
        help_text="Agent who captured this record."
    )

    class Meta:
        db_table = 'client_records'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['created_by', 'created_at'], name='idx_client_agent_created'),
        ]

    def __str__(self):
        return f"{self.full_name} - {self.vehicle_number}"

    @property
    def policy_number(self):
        return policy_number(self.vehicle_number)

    @property
    def effective_renewal_date(self):
        """Renewal date as a date, explicit or derived."""
        renewal = resolve_renewal_date(self.start_date, self.renewal_date)
        return renewal.date() if renewal is not None else None
