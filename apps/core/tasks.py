"""
Celery tasks for data export and renewal alerts.

export_client_data writes every client record, with its derived
status and renewal date, to an Excel workbook using pandas.
send_renewal_alerts emails each agent the policies of theirs that
fall inside the renewal window.
"""

import logging
from pathlib import Path

import pandas as pd
from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail
from django.utils import timezone

from apps.core.rules import PolicyStatus, record_status
from apps.core.utils import days_between

logger = logging.getLogger(__name__)

EXPORT_FILENAME = 'clients_export.xlsx'

EXPORT_COLUMNS = [
    'id', 'full_name', 'phone', 'email', 'address', 'vehicle_number',
    'policy_number', 'policy_type', 'start_date', 'renewal_date', 'status',
    'premium', 'earned', 'commission', 'created_at', 'created_by',
]


@shared_task(
    bind=True,
    name='core.export_client_data',
    max_retries=3,
    default_retry_delay=10,
)
def export_client_data(self):
    """
    Export all client records to clients_export.xlsx under EXPORT_DIR.

    Status is evaluated at export time. Safe to run repeatedly; the
    file is overwritten.
    """
    from apps.clients.models import ClientRecord

    export_dir = Path(settings.EXPORT_DIR)
    file_path = export_dir / EXPORT_FILENAME

    try:
        logger.info("Starting client data export to %s", file_path)
        now = timezone.now()

        rows = []
        for client in ClientRecord.objects.select_related('created_by').order_by('-created_at'):
            renewal = client.effective_renewal_date
            rows.append({
                'id': str(client.pk),
                'full_name': client.full_name,
                'phone': client.phone,
                'email': client.email,
                'address': client.address,
                'vehicle_number': client.vehicle_number,
                'policy_number': client.policy_number,
                'policy_type': client.policy_type,
                'start_date': client.start_date.isoformat(),
                'renewal_date': renewal.isoformat() if renewal is not None else '',
                'status': record_status(client, now).label,
                'premium': float(client.premium),
                'earned': float(client.earned),
                'commission': float(client.commission),
                'created_at': client.created_at.isoformat(),
                'created_by': client.created_by.get_username(),
            })

        df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)

        export_dir.mkdir(parents=True, exist_ok=True)
        df.to_excel(file_path, index=False)

        result = {
            'status': 'success',
            'total_rows': len(df),
            'file': str(file_path),
        }
        logger.info("Client data export complete: %s", result)
        return result

    except Exception as exc:
        logger.exception("Client data export failed")
        raise self.retry(exc=exc)


@shared_task(
    bind=True,
    name='core.send_renewal_alerts',
    max_retries=3,
    default_retry_delay=60,
)
def send_renewal_alerts(self):
    """
    Email each agent a list of their policies expiring within 30 days.

    Agents are skipped when they have no email address or have turned
    off email notifications or expiry alerts in their settings.
    """
    from django.contrib.auth import get_user_model

    from apps.accounts.models import AgentSettings
    from apps.clients.models import ClientRecord

    User = get_user_model()
    now = timezone.now()

    try:
        agents_notified = 0
        policies = 0

        for agent in User.objects.filter(is_active=True).exclude(email=''):
            prefs = AgentSettings.objects.filter(user=agent).first()
            if prefs is not None and not (prefs.email_notifications and prefs.expiry_alerts):
                logger.debug("Agent %s opted out of renewal alerts", agent.pk)
                continue

            expiring = [
                client
                for client in ClientRecord.objects.filter(created_by=agent)
                if record_status(client, now) is PolicyStatus.EXPIRING_SOON
            ]
            if not expiring:
                continue

            expiring.sort(key=lambda client: client.effective_renewal_date)
            lines = [
                f"- {client.full_name} ({client.vehicle_number}, {client.phone}): "
                f"renews {client.effective_renewal_date.isoformat()}, "
                f"{days_between(now, client.effective_renewal_date)} days left"
                for client in expiring
            ]

            send_mail(
                subject=f"{len(expiring)} policies due for renewal",
                message=(
                    "The following policies renew within the next 30 days:\n\n"
                    + "\n".join(lines)
                ),
                from_email=settings.RENEWAL_ALERT_FROM_EMAIL,
                recipient_list=[agent.email],
            )
            agents_notified += 1
            policies += len(expiring)

        result = {
            'status': 'success',
            'agents_notified': agents_notified,
            'policies': policies,
        }
        logger.info("Renewal alerts sent: %s", result)
        return result

    except Exception as exc:
        logger.exception("Renewal alert run failed")
        raise self.retry(exc=exc)
