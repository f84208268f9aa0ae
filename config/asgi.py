"""ASGI entry point for the Barterly API.

The API is plain request/response; ASGI is offered for deployments that
run uvicorn or daphne. Set DJANGO_SETTINGS_MODULE to
``config.settings.prod`` there.
"""

import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.dev')

application = get_asgi_application()
