"""Production settings."""

import os
import sys

import dj_database_url
from decouple import config

from .base import *  # noqa
from .base import APP_LOG_LEVEL, DJANGO_LOG_LEVEL, LOGGING

DEBUG = False
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_SSL_REDIRECT = True
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True

# Trust X-Forwarded-Proto header from hosting system's reverse proxy
# This is required when the proxy terminates SSL
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

# Whitenoise for static file serving
MIDDLEWARE.insert(1, "whitenoise.middleware.WhiteNoiseMiddleware")  # noqa: F405
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"},
}

database_url = os.environ.get("DATABASE_URL", "")
if not database_url.startswith("postgres"):
    print(f"ERROR: DATABASE_URL must be PostgreSQL. Got: {database_url[:20]}...", file=sys.stderr)
    sys.exit(1)

DATABASES = {
    "default": dj_database_url.parse(  # type: ignore[dict-item]
        database_url,
        conn_max_age=600,
        conn_health_checks=True,
    )
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.db.DatabaseCache",
        "LOCATION": "facility_planner_cache",
    }
}

LOGGING["loggers"]["facility_planner"]["level"] = config(  # type: ignore[index]
    "WEB_LOG_LEVEL",
    default=APP_LOG_LEVEL,
).upper()
LOGGING["loggers"]["django.request"]["level"] = config(  # type: ignore[index]
    "WEB_DJANGO_LOG_LEVEL",
    default=DJANGO_LOG_LEVEL,
).upper()
LOGGING["loggers"]["django.server"]["level"] = LOGGING["loggers"]["django.request"]["level"]  # type: ignore[index]
