"""WSGI entry point for the skyboard weather service."""
from __future__ import annotations

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "skyboard.settings")

application = get_wsgi_application()
