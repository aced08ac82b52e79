"""
Celery configuration for the messaging API.

Celery runs the periodic housekeeping jobs (purging expired typing
indicators). Correctness never depends on these jobs: expiry is evaluated
at read time, the jobs only reclaim storage.

The broker and result backend come from CELERY_BROKER_URL and
CELERY_RESULT_BACKEND. Tasks are auto-discovered from installed apps and
the beat schedule lives in settings.CELERY_BEAT_SCHEDULE.

Usage:
    celery -A config worker -l info
    celery -A config beat -l info

For more information, see:
https://docs.celeryq.dev/en/stable/django/first-steps-with-django.html
"""

import os

from celery import Celery

# Set the default Django settings module for the Celery worker
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("config")

# All Celery settings are prefixed with CELERY_ in settings.py
app.config_from_object("django.conf:settings", namespace="CELERY")

# Looks for a tasks.py module in each installed app
app.autodiscover_tasks()
