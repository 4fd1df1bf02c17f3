"""
Client service layer.

All client-related business logic resides here: capture, listing,
search/filter, deletion and the dashboard summary. Views delegate
to these services and pass the current time in explicitly.
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from django.conf import settings
from django.db.models import Q

from apps.core.exceptions import ClientNotFoundError, ClientValidationError
from apps.core.rules import (
    KENYAN_MOBILE_PATTERN,
    KENYAN_PHONE_PATTERN,
    PolicyStatus,
    Stats,
    aggregate,
    matches_status_filter,
    record_status,
    validate_client,
)
from apps.core.utils import days_between, to_datetime, to_money
from apps.clients.models import ClientRecord

logger = logging.getLogger(__name__)

PHONE_PATTERNS = {
    'lenient': KENYAN_PHONE_PATTERN,
    'strict': KENYAN_MOBILE_PATTERN,
}

CLIENT_FIELDS = (
    'full_name', 'phone', 'email', 'address', 'vehicle_number',
    'policy_type', 'start_date', 'renewal_date',
    'premium', 'earned', 'commission',
)

RECENT_CLIENTS_LIMIT = 5


def get_phone_pattern():
    """Phone regex selected by the CLIENT_PHONE_PATTERN setting."""
    key = getattr(settings, 'CLIENT_PHONE_PATTERN', 'lenient')
    return PHONE_PATTERNS.get(key, KENYAN_PHONE_PATTERN)


class ClientService:
    """Service class for client record operations."""

    @staticmethod
    def create(data: dict, created_by, now: datetime) -> ClientRecord:
        """
        Validate and persist a new client record.

        Args:
            data: Raw submitted fields (snake_case).
            created_by: The authenticated agent.
            now: Creation timestamp.

        Returns:
            The newly created ClientRecord.

        Raises:
            ClientValidationError: If any validation check fails.
        """
        candidate = {name: data.get(name) for name in CLIENT_FIELDS}

        result = validate_client(candidate, phone_pattern=get_phone_pattern())
        if not result.is_valid:
            logger.info(
                "Client submission by user %s rejected: %s",
                created_by.pk,
                result.reason.value,
            )
            raise ClientValidationError(result.reason)

        renewal = to_datetime(candidate['renewal_date'])

        client = ClientRecord.objects.create(
            full_name=str(candidate['full_name']).strip(),
            phone=str(candidate['phone']).strip(),
            email=str(candidate['email'] or '').strip(),
            address=str(candidate['address'] or '').strip(),
            vehicle_number=str(candidate['vehicle_number']).strip(),
            policy_type=str(candidate['policy_type']).strip(),
            start_date=to_datetime(candidate['start_date']).date(),
            renewal_date=renewal.date() if renewal is not None else None,
            premium=to_money(candidate['premium']),
            earned=to_money(candidate['earned']),
            commission=to_money(candidate['commission']),
            created_at=now,
            created_by=created_by,
        )

        logger.info(
            "Client %s (%s) created by user %s",
            client.pk,
            client.vehicle_number,
            created_by.pk,
        )

        return client

    @staticmethod
    def get_client(client_id) -> ClientRecord:
        """
        Retrieve a client record by ID.

        Raises:
            ClientNotFoundError: If no such record exists.
        """
        try:
            return ClientRecord.objects.get(pk=client_id)
        except ClientRecord.DoesNotExist:
            raise ClientNotFoundError(
                detail=f"Client with ID {client_id} not found."
            )

    @staticmethod
    def list_clients(
        now: datetime,
        search: Optional[str] = None,
        status_filter: Optional[str] = None,
    ) -> List[Tuple[ClientRecord, PolicyStatus]]:
        """
        List client records newest first, with their derived status.

        Search runs in the database; the status filter runs afterwards
        because status is derived from `now` and never stored.

        Args:
            now: Current time used for status evaluation.
            search: Case-insensitive substring over name, phone,
                    email and vehicle number.
            status_filter: 'all', 'active', 'expiring' or 'expired'.

        Returns:
            List of (ClientRecord, PolicyStatus) pairs.
        """
        queryset = ClientRecord.objects.all().order_by('-created_at')

        term = (search or '').strip()
        if term:
            queryset = queryset.filter(
                Q(full_name__icontains=term)
                | Q(phone__icontains=term)
                | Q(email__icontains=term)
                | Q(vehicle_number__icontains=term)
            )

        results = []
        for client in queryset:
            status = record_status(client, now)
            if matches_status_filter(status, status_filter):
                results.append((client, status))
        return results

    @staticmethod
    def delete_client(client_id) -> None:
        """
        Permanently delete a client record.

        Raises:
            ClientNotFoundError: If no such record exists.
        """
        deleted, _ = ClientRecord.objects.filter(pk=client_id).delete()
        if not deleted:
            raise ClientNotFoundError(
                detail=f"Client with ID {client_id} not found."
            )
        logger.info("Client %s deleted", client_id)


class DashboardService:
    """Summary figures for the dashboard page."""

    @staticmethod
    def summary(now: datetime) -> dict:
        """
        Build the dashboard summary.

        Returns:
            Dict with 'stats' (Stats), 'recent_clients' and
            'renewal_alerts', each a list of (ClientRecord, PolicyStatus).
        """
        clients = list(ClientRecord.objects.all().order_by('-created_at'))
        stats: Stats = aggregate(clients, now)

        with_status = [(client, record_status(client, now)) for client in clients]
        renewal_alerts = sorted(
            (pair for pair in with_status if pair[1] is PolicyStatus.EXPIRING_SOON),
            key=lambda pair: pair[0].effective_renewal_date,
        )

        logger.debug(
            "Dashboard summary: total=%d active=%d expiring=%d",
            stats.total,
            stats.active,
            stats.expiring_soon,
        )

        return {
            'stats': stats,
            'recent_clients': with_status[:RECENT_CLIENTS_LIMIT],
            'renewal_alerts': renewal_alerts,
        }


def days_remaining(client: ClientRecord, now: datetime) -> Optional[int]:
    """Whole days from now until the client's renewal date."""
    return days_between(now, client.effective_renewal_date)
