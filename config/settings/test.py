"""Test settings for Barterly project.

In-memory SQLite, fast password hashing and plain static storage. Used by
pytest through ``DJANGO_SETTINGS_MODULE=config.settings.test``.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

SECRET_KEY = 'test-secret-key-not-for-production-use-0123456789'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES = {
    **STORAGES,  # noqa: F405
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

BOOKING_ENFORCE_TRANSITION_ORDER = False

LOGGING['handlers']['console']['level'] = 'WARNING'  # noqa: F405
