"""
WSGI config for the messaging API.

Exposes the WSGI callable as a module-level variable named `application`
for gunicorn or any other WSGI server.

For more information on this file, see:
https://docs.djangoproject.com/en/5.2/howto/deployment/wsgi/
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_wsgi_application()
