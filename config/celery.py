"""
Celery application for the Majani agent dashboard.

Workers are started with: celery -A config worker -l info
"""

import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

app = Celery('agent_dashboard')

# Read CELERY_* keys from Django settings
app.config_from_object('django.conf:settings', namespace='CELERY')

# apps.core.tasks and any other tasks.py in installed apps
app.autodiscover_tasks()
