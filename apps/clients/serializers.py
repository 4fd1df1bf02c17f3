"""
Client serializers for the agent dashboard.

Input validation for client records is done by the rules engine
(apps.core.rules.validate_client); these serializers shape responses.
"""

from rest_framework import serializers

from apps.core.rules import PolicyStatus, PolicyType

STATUS_CHOICES = [status.value for status in PolicyStatus]


class ClientResponseSerializer(serializers.Serializer):
    """Serializer for a client record with its derived fields."""

    id = serializers.UUIDField()
    full_name = serializers.CharField()
    phone = serializers.CharField()
    email = serializers.CharField(allow_blank=True)
    address = serializers.CharField(allow_blank=True)
    vehicle_number = serializers.CharField()
    policy_number = serializers.CharField()
    policy_type = serializers.ChoiceField(choices=[t.value for t in PolicyType])
    start_date = serializers.DateField()
    renewal_date = serializers.DateField(allow_null=True)
    status = serializers.ChoiceField(choices=STATUS_CHOICES)
    status_label = serializers.CharField()
    days_remaining = serializers.IntegerField(allow_null=True)
    premium = serializers.DecimalField(max_digits=12, decimal_places=2)
    earned = serializers.DecimalField(max_digits=12, decimal_places=2)
    commission = serializers.DecimalField(max_digits=12, decimal_places=2)
    created_at = serializers.DateTimeField()
    created_by = serializers.IntegerField()


class ClientSummarySerializer(serializers.Serializer):
    """Serializer for the dashboard's recent clients table."""

    id = serializers.UUIDField()
    full_name = serializers.CharField()
    vehicle_number = serializers.CharField()
    policy_type = serializers.CharField()
    status = serializers.ChoiceField(choices=STATUS_CHOICES)
    status_label = serializers.CharField()


class RenewalAlertSerializer(serializers.Serializer):
    """Serializer for a policy inside the renewal window."""

    id = serializers.UUIDField()
    full_name = serializers.CharField()
    phone = serializers.CharField()
    vehicle_number = serializers.CharField()
    renewal_date = serializers.DateField()
    days_remaining = serializers.IntegerField()


class StatsSerializer(serializers.Serializer):
    """Serializer for dashboard counters."""

    total_clients = serializers.IntegerField(min_value=0)
    active_policies = serializers.IntegerField(min_value=0)
    expiring_soon = serializers.IntegerField(min_value=0)
    expired = serializers.IntegerField(min_value=0)
    total_commissions = serializers.DecimalField(max_digits=15, decimal_places=2)
    total_premiums = serializers.DecimalField(max_digits=15, decimal_places=2)
