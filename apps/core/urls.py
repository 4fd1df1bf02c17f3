"""
Core app URL configuration for the data export trigger.
"""

from django.urls import path

from apps.core.views import TriggerExportView

urlpatterns = [
    path(
        'export-data',
        TriggerExportView.as_view(),
        name='export-data',
    ),
]
