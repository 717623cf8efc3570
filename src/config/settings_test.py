"""Test settings: in-memory SQLite and structlog without logger caching."""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")

import structlog  # noqa: E402

from config.settings import *  # noqa: E402,F401,F403

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

# Short enough that a stuck lookup cannot stall the suite.
EXTERNAL_ORDERS_LOOKUP_TIMEOUT = 2.0

# capture_logs() swaps processors at runtime; cached loggers would ignore it.
structlog.configure(cache_logger_on_first_use=False)
