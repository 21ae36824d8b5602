"""
ASGI config for the SJMC records backend.

Only HTTP is served; there are no WebSocket routes.
"""
import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "sjmc.settings")

from django.core.asgi import get_asgi_application  # noqa: E402

application = get_asgi_application()
