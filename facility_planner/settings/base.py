"""Base Django settings."""

from __future__ import annotations

from pathlib import Path

from decouple import Csv, config

REPO_ROOT = Path(__file__).resolve().parent.parent.parent
BASE_DIR = REPO_ROOT

SECRET_KEY = config("SECRET_KEY", default="dev-secret-key")
DEBUG = config("DEBUG", default=True, cast=bool)
ALLOWED_HOSTS = config("ALLOWED_HOSTS", default="localhost,127.0.0.1", cast=Csv())

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "django.contrib.humanize",
    "django_q",
    "constance",
    "constance.backends.database",
    "simple_history",
    "facility_planner.apps.core",
    "facility_planner.apps.maintenance",
    "facility_planner.apps.pricing",
    "facility_planner.apps.estimates",
    "facility_planner.apps.leads",
    "facility_planner.apps.wizards",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "facility_planner.middleware.RequestContextMiddleware",
    "facility_planner.middleware.CorsAllowListMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "simple_history.middleware.HistoryRequestMiddleware",
]

ROOT_URLCONF = "facility_planner.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [REPO_ROOT / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
                "constance.context_processors.config",
            ],
        },
    },
]

WSGI_APPLICATION = "facility_planner.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": REPO_ROOT / "db.sqlite3",
    }
}

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# django-q2 configuration (DB-backed queue)
Q_CLUSTER = {
    "name": "facility_planner_worker",
    "orm": "default",
    "workers": 1,
    "timeout": 600,
    "retry": 660,
    "save_limit": 50,
    "queue_limit": 50,
    "recycle": 5,
    "bulk": 1,
    "catch_up": False,
    "max_attempts": 1,
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "/static/"
STATIC_ROOT = REPO_ROOT / "static_collected"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LOGIN_URL = "admin:login"

# Base URL used in links embedded in emails and sheet rows
SITE_URL = config("SITE_URL", default="http://localhost:8000")

# Browser origins allowed to call the JSON API
CORS_ALLOWED_ORIGINS = config(
    "CORS_ALLOWED_ORIGINS",
    default="http://localhost:3000,http://localhost:5173,http://localhost:8080",
    cast=Csv(),
)
CORS_ALLOWED_ORIGIN_SUFFIXES = config("CORS_ALLOWED_ORIGIN_SUFFIXES", default="", cast=Csv())

# Lead submission rate limiting (sliding window per client IP)
RATE_LIMIT_LEADS_PER_WINDOW = config("RATE_LIMIT_LEADS_PER_WINDOW", default=3, cast=int)
RATE_LIMIT_WINDOW_MINUTES = config("RATE_LIMIT_WINDOW_MINUTES", default=60, cast=int)

# Third-party API credentials
RESEND_API_KEY = config("RESEND_API_KEY", default="")
EMAIL_FROM_CUSTOMER = config(
    "EMAIL_FROM_CUSTOMER", default="Practice Sports <noreply@sportsfacility.ai>"
)
EMAIL_FROM_LEADS = config("EMAIL_FROM_LEADS", default="Practice Sports Leads <leads@sportsfacility.ai>")
EMAIL_FROM_REMINDERS = config(
    "EMAIL_FROM_REMINDERS", default="SportsFacility.ai <reminders@sportsfacility.ai>"
)
EMAIL_REPLY_TO = config("EMAIL_REPLY_TO", default="info@practicesports.com")

FIRECRAWL_API_KEY = config("FIRECRAWL_API_KEY", default="")

GOOGLE_SERVICE_ACCOUNT_JSON = config("GOOGLE_SERVICE_ACCOUNT_JSON", default="")
GOOGLE_SHEET_ID = config("GOOGLE_SHEET_ID", default="")
GOOGLE_SHEET_TAB = config("GOOGLE_SHEET_TAB", default="Leads")

# django-constance configuration (admin-editable settings)
CONSTANCE_BACKEND = "constance.backends.database.DatabaseBackend"

CONSTANCE_CONFIG = {
    "MAKE_WEBHOOK_ENABLED": (False, "Forward new leads to the Make.com webhook", bool),
    "MAKE_WEBHOOK_URL": ("", "Make.com webhook URL that receives lead payloads", str),
    "COMPANY_NOTIFICATION_EMAILS": (
        "chad@sportsfacility.ai,info@practicesports.com",
        "Comma-separated recipients of new-lead notifications",
        str,
    ),
    "SHEETS_SYNC_ENABLED": (True, "Append new leads to the Google Sheet", bool),
}

CONSTANCE_CONFIG_FIELDSETS = {
    "Lead Routing": (
        "MAKE_WEBHOOK_ENABLED",
        "MAKE_WEBHOOK_URL",
        "COMPANY_NOTIFICATION_EMAILS",
        "SHEETS_SYNC_ENABLED",
    ),
}

# Logging
LOG_LEVEL = config("LOG_LEVEL", default="WARNING").upper()
APP_LOG_LEVEL = config("APP_LOG_LEVEL", default="INFO").upper()
DJANGO_LOG_LEVEL = config("DJANGO_LOG_LEVEL", default="WARNING").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "request_context": {"()": "facility_planner.logging.RequestContextFilter"},
    },
    "formatters": {
        "json": {"()": "facility_planner.logging.JsonFormatter"},
        "dev": {"()": "facility_planner.logging.DevFormatter"},
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "filters": ["request_context"],
        },
    },
    "root": {"handlers": ["console"], "level": LOG_LEVEL},
    "loggers": {
        "facility_planner": {"handlers": ["console"], "level": APP_LOG_LEVEL, "propagate": False},
        "django.request": {"handlers": ["console"], "level": DJANGO_LOG_LEVEL, "propagate": False},
        "django.server": {"handlers": ["console"], "level": DJANGO_LOG_LEVEL, "propagate": False},
        "django_q": {"handlers": ["console"], "level": DJANGO_LOG_LEVEL, "propagate": False},
    },
}
