"""Local development overlay for Barterly.

Debug on, any host, any frontend origin, and verbose engine logs so every
booking and swap command shows up in the runserver console.
"""

from .base import *  # noqa: F401,F403

DEBUG = True

ALLOWED_HOSTS = ['*']

CORS_ALLOW_ALL_ORIGINS = True

# runserver serves static files itself; no manifest to build
STORAGES = {
    **STORAGES,  # noqa: F405
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

for _name in ('apps', 'shared'):
    LOGGING['loggers'][_name]['level'] = 'DEBUG'  # noqa: F405
LOGGING['handlers']['console']['level'] = 'DEBUG'  # noqa: F405
