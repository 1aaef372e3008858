"""
Base Django settings for the Kasir point-of-sale application.
Common settings shared across all environments.
"""

import os
from pathlib import Path

import dj_database_url

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Application definition
INSTALLED_APPS = [
    "django_prometheus",  # Must be first for proper metrics collection
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.staticfiles",
    # Third-party apps
    "rest_framework",
    # Local apps
    "apps.core",
    "apps.inventory",
    "apps.sales",
    "apps.reporting",
]

MIDDLEWARE = [
    "django_prometheus.middleware.PrometheusBeforeMiddleware",  # Must be first
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.gzip.GZipMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "django_prometheus.middleware.PrometheusAfterMiddleware",  # Must be last
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"

# Internationalization
LANGUAGE_CODE = "en"
TIME_ZONE = os.getenv("TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True

# Static files
STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Browser Security Headers
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"
SECURE_REFERRER_POLICY = "strict-origin-when-cross-origin"

# Django REST Framework Configuration
# The cashier and admin screens are open; there is no account system.
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
        "rest_framework.parsers.FormParser",
        "rest_framework.parsers.MultiPartParser",
    ],
    "COERCE_DECIMAL_TO_STRING": True,
}

# Prometheus Monitoring Configuration
PROMETHEUS_EXPORT_MIGRATIONS = False
PROMETHEUS_LATENCY_BUCKETS = (
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
    float("inf"),
)

# GZip Compression Configuration
GZIP_MIN_LENGTH = 200

# Point of sale
VERSION = "1.0.0"
POS_DEFAULT_CATEGORY = os.getenv("POS_DEFAULT_CATEGORY", "Uncategorized")
POS_REPORT_HISTORY_LIMIT = int(os.getenv("POS_REPORT_HISTORY_LIMIT", "50"))

# Local server. Managed hosts (serverless WSGI) import config.wsgi directly
# and never bind a port themselves.
LISTEN_PORT = int(os.getenv("PORT", "3000"))
MANAGED_HOSTING = os.getenv("MANAGED_HOSTING", "False").lower() == "true"

# Create logs directory if it doesn't exist
LOGS_DIR = BASE_DIR / "logs"
LOGS_DIR.mkdir(exist_ok=True)


def postgres_database(engine="django_prometheus.db.backends.postgresql"):
    """
    Build the default database entry.

    DATABASE_URL, when set, wins over the POSTGRES_* variables. Either way a
    connect timeout and a per-statement timeout keep requests bounded when
    the database is unreachable or stuck.
    """
    statement_timeout_ms = os.getenv("POSTGRES_STATEMENT_TIMEOUT_MS", "10000")
    options = {
        "connect_timeout": int(os.getenv("POSTGRES_CONNECT_TIMEOUT", "5")),
        "options": f"-c statement_timeout={statement_timeout_ms}",
    }
    conn_max_age = int(os.getenv("POSTGRES_CONN_MAX_AGE", "600"))

    database_url = os.getenv("DATABASE_URL")
    if database_url:
        config = dj_database_url.parse(database_url, engine=engine, conn_max_age=conn_max_age)
        config["ATOMIC_REQUESTS"] = True
        config.setdefault("OPTIONS", {}).update(options)
        return config

    return {
        "ENGINE": engine,
        "NAME": os.getenv("POSTGRES_DB", "kasir"),
        "USER": os.getenv("POSTGRES_USER", "postgres"),
        "PASSWORD": os.getenv("POSTGRES_PASSWORD", "postgres"),
        "HOST": os.getenv("POSTGRES_HOST", "localhost"),
        "PORT": os.getenv("POSTGRES_PORT", "5432"),
        "ATOMIC_REQUESTS": True,
        "CONN_MAX_AGE": conn_max_age,
        "OPTIONS": options,
    }


def validate_required_env_vars():
    """
    Validate that all required environment variables are set.
    This function should be called at the end of each environment-specific settings file.
    """
    required_vars = {
        "DJANGO_SECRET_KEY": "Django secret key for cryptographic signing",
        "POSTGRES_DB": "PostgreSQL database name",
        "POSTGRES_USER": "PostgreSQL username",
        "POSTGRES_PASSWORD": "PostgreSQL password",
        "POSTGRES_HOST": "PostgreSQL host",
    }

    # A connection URL replaces the individual PostgreSQL settings
    if os.getenv("DATABASE_URL"):
        required_vars = {k: v for k, v in required_vars.items() if not k.startswith("POSTGRES_")}

    missing_vars = []
    for var, description in required_vars.items():
        if not os.getenv(var):
            missing_vars.append(f"{var} ({description})")

    if missing_vars:
        error_msg = (
            "Missing required environment variables:\n"
            + "\n".join(f"  - {var}" for var in missing_vars)
            + "\n\nPlease set these variables in your .env file or environment."
        )
        raise ValueError(error_msg)
