"""
Core views for the agent dashboard.
"""

import logging

from django.http import JsonResponse
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.tasks import export_client_data

logger = logging.getLogger(__name__)


def health_check(request):
    """
    GET /health/

    Simple health check endpoint for Docker and load balancer probes.
    Does not require authentication.
    """
    return JsonResponse({'status': 'healthy'}, status=200)


class TriggerExportView(APIView):
    """
    POST /api/export-data

    Queue a background export of all client records to Excel.
    """

    permission_classes = [IsAuthenticated]

    def post(self, request):
        """Trigger the export task."""
        export_task = export_client_data.delay()

        logger.info(
            "Client export triggered by user %s task=%s",
            request.user.pk,
            export_task.id,
        )

        return Response(
            {
                'message': 'Client data export has been queued.',
                'task_id': export_task.id,
            },
            status=status.HTTP_202_ACCEPTED,
        )
