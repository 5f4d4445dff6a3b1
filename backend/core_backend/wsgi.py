"""
WSGI config for core_backend project.

Websockets need the ASGI entry point (core_backend.asgi); this one serves the
REST API only.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "core_backend.settings")

application = get_wsgi_application()
