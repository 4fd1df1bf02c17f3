"""
Client and dashboard views for the agent dashboard.

Views are thin; all business logic is in the service layer.
"""

import logging

from django.db import transaction
from django.utils import timezone
from rest_framework import status
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.permissions import IsProfileComplete
from apps.clients.serializers import (
    ClientResponseSerializer,
    ClientSummarySerializer,
    RenewalAlertSerializer,
    StatsSerializer,
)
from apps.clients.services import (
    ClientService,
    DashboardService,
    days_remaining,
)
from apps.core.rules import record_status

logger = logging.getLogger(__name__)


def build_client_data(client, policy_status, now):
    """Flatten a client record and its derived fields into a response dict."""
    return {
        'id': client.pk,
        'full_name': client.full_name,
        'phone': client.phone,
        'email': client.email,
        'address': client.address,
        'vehicle_number': client.vehicle_number,
        'policy_number': client.policy_number,
        'policy_type': client.policy_type,
        'start_date': client.start_date,
        'renewal_date': client.effective_renewal_date,
        'status': policy_status.value,
        'status_label': policy_status.label,
        'days_remaining': days_remaining(client, now),
        'premium': client.premium,
        'earned': client.earned,
        'commission': client.commission,
        'created_at': client.created_at,
        'created_by': client.created_by_id,
    }


class ClientPagination(PageNumberPagination):
    """Pagination for the clients table."""
    page_size = 10
    page_size_query_param = 'page_size'
    max_page_size = 100


class ClientListCreateView(APIView):
    """
    GET  /api/clients   list clients (search, status filter, pagination)
    POST /api/clients   capture a new client
    """

    permission_classes = [IsAuthenticated, IsProfileComplete]

    def get(self, request):
        """Handle listing clients."""
        now = timezone.now()
        clients = ClientService.list_clients(
            now=now,
            search=request.query_params.get('search'),
            status_filter=request.query_params.get('status'),
        )

        paginator = ClientPagination()
        page = paginator.paginate_queryset(clients, request)

        if page is not None:
            response_data = [
                build_client_data(client, policy_status, now)
                for client, policy_status in page
            ]
            serializer = ClientResponseSerializer(data=response_data, many=True)
            serializer.is_valid(raise_exception=True)

            return paginator.get_paginated_response(serializer.validated_data)

        response_data = [
            build_client_data(client, policy_status, now)
            for client, policy_status in clients
        ]
        serializer = ClientResponseSerializer(data=response_data, many=True)
        serializer.is_valid(raise_exception=True)

        return Response(serializer.validated_data, status=status.HTTP_200_OK)

    @transaction.atomic
    def post(self, request):
        """Handle client capture in one transaction."""
        now = timezone.now()
        client = ClientService.create(request.data, created_by=request.user, now=now)

        response_serializer = ClientResponseSerializer(
            data=build_client_data(client, record_status(client, now), now)
        )
        response_serializer.is_valid(raise_exception=True)

        return Response(
            response_serializer.validated_data,
            status=status.HTTP_201_CREATED,
        )


class ClientDetailView(APIView):
    """
    GET    /api/clients/<client_id>
    DELETE /api/clients/<client_id>
    """

    permission_classes = [IsAuthenticated, IsProfileComplete]

    def get(self, request, client_id):
        """Handle viewing a single client."""
        now = timezone.now()
        client = ClientService.get_client(client_id)

        response_serializer = ClientResponseSerializer(
            data=build_client_data(client, record_status(client, now), now)
        )
        response_serializer.is_valid(raise_exception=True)

        return Response(
            response_serializer.validated_data,
            status=status.HTTP_200_OK,
        )

    def delete(self, request, client_id):
        """Handle hard-deleting a client."""
        ClientService.delete_client(client_id)
        logger.info("User %s deleted client %s", request.user.pk, client_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class DashboardView(APIView):
    """
    GET /api/dashboard

    Stats cards, recent clients and renewal alerts.
    """

    permission_classes = [IsAuthenticated, IsProfileComplete]

    def get(self, request):
        """Handle the dashboard summary."""
        now = timezone.now()
        summary = DashboardService.summary(now)
        stats = summary['stats']

        stats_serializer = StatsSerializer(data={
            'total_clients': stats.total,
            'active_policies': stats.active,
            'expiring_soon': stats.expiring_soon,
            'expired': stats.expired,
            'total_commissions': stats.commission_sum,
            'total_premiums': stats.premium_sum,
        })
        stats_serializer.is_valid(raise_exception=True)

        recent_serializer = ClientSummarySerializer(
            data=[
                {
                    'id': client.pk,
                    'full_name': client.full_name,
                    'vehicle_number': client.vehicle_number,
                    'policy_type': client.policy_type,
                    'status': policy_status.value,
                    'status_label': policy_status.label,
                }
                for client, policy_status in summary['recent_clients']
            ],
            many=True,
        )
        recent_serializer.is_valid(raise_exception=True)

        alerts_serializer = RenewalAlertSerializer(
            data=[
                {
                    'id': client.pk,
                    'full_name': client.full_name,
                    'phone': client.phone,
                    'vehicle_number': client.vehicle_number,
                    'renewal_date': client.effective_renewal_date,
                    'days_remaining': days_remaining(client, now),
                }
                for client, _ in summary['renewal_alerts']
            ],
            many=True,
        )
        alerts_serializer.is_valid(raise_exception=True)

        return Response(
            {
                'stats': stats_serializer.validated_data,
                'recent_clients': recent_serializer.validated_data,
                'renewal_alerts': alerts_serializer.validated_data,
            },
            status=status.HTTP_200_OK,
        )
