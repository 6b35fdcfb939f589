import os

import dj_database_url

# Set SECRET_KEY before importing base settings (which requires it)
# Not a real secret - tests don't need cryptographic security
os.environ.setdefault("SECRET_KEY", "test-key-not-secret")  # pragma: allowlist secret

from .base import *  # noqa

DEBUG = False
SITE_URL = "http://testserver"
PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

# Use DATABASE_URL if provided (CI uses Postgres), otherwise SQLite for local dev
DATABASES["default"] = dj_database_url.config(  # type: ignore[assignment]  # noqa: F405
    default="sqlite://:memory:",
    conn_max_age=600,
)

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "facility-planner-tests",
    }
}

# Integrations never reach the network from tests; calls are patched
RESEND_API_KEY = "re_test"  # pragma: allowlist secret
FIRECRAWL_API_KEY = "fc-test"  # pragma: allowlist secret
CORS_ALLOWED_ORIGINS = ["https://sportsfacility.ai"]
CORS_ALLOWED_ORIGIN_SUFFIXES = [".sportsfacility.ai"]

# Suppress noisy Django-Q logging during tests
Q_CLUSTER["log_level"] = "WARNING"  # type: ignore[name-defined]  # noqa: F405

# Suppress app logs during tests
# Tests verify behavior through assertions, not log inspection
LOGGING["loggers"]["facility_planner"]["level"] = "CRITICAL"  # type: ignore[index]  # noqa: F405
