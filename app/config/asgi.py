"""
ASGI config for the messaging API.

ASGI servers use this entry point to serve the HTTP API. Realtime delivery to
clients is the transport layer's concern; every endpoint here is a plain
request/response query or mutation that reflects the latest committed state.

For more information on this file, see:
https://docs.djangoproject.com/en/5.2/howto/deployment/asgi/
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_asgi_application()
