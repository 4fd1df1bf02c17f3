"""
Client URL configuration.
"""

from django.urls import path

from apps.clients.views import (
    ClientDetailView,
    ClientListCreateView,
    DashboardView,
)

urlpatterns = [
    path('dashboard', DashboardView.as_view(), name='dashboard'),
    path('clients', ClientListCreateView.as_view(), name='client-list'),
    path('clients/<uuid:client_id>', ClientDetailView.as_view(), name='client-detail'),
]
