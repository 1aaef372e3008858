"""
Production-specific Django settings.
"""

import os

# Load environment variables from .env file
from dotenv import load_dotenv

from .base import *  # noqa: F403,F405

load_dotenv()

# Check if we're just collecting static files (during Docker build)
COLLECTSTATIC_ONLY = os.getenv("COLLECTSTATIC_ONLY", "0") == "1"

# SECURITY WARNING: Use a strong secret key in production
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY")
if not SECRET_KEY and not COLLECTSTATIC_ONLY:
    raise ValueError("DJANGO_SECRET_KEY must be set in production environment!")
elif not SECRET_KEY:
    SECRET_KEY = "temporary-key-for-collectstatic-only"

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = False

ALLOWED_HOSTS = os.getenv("DJANGO_ALLOWED_HOSTS", "").split(",")
if (not ALLOWED_HOSTS or ALLOWED_HOSTS == [""]) and not COLLECTSTATIC_ONLY:
    raise ValueError("DJANGO_ALLOWED_HOSTS must be set in production environment!")
elif not ALLOWED_HOSTS or ALLOWED_HOSTS == [""]:
    ALLOWED_HOSTS = ["*"]

# During collectstatic, use a dummy database backend that doesn't require a real DB
if COLLECTSTATIC_ONLY:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.dummy",
        }
    }
else:
    # Database with Prometheus monitoring
    DATABASES = {"default": postgres_database()}  # noqa: F405
    DATABASES["default"]["OPTIONS"]["sslmode"] = os.getenv("DB_SSLMODE", "prefer")

# Logging Configuration - Production (JSON to console, warnings and errors to file)
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
            "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "level": "INFO",
            "class": "logging.StreamHandler",
            "formatter": "json",
        },
        "file": {
            "level": "WARNING",
            "class": "logging.handlers.RotatingFileHandler",
            "filename": BASE_DIR / "logs" / "kasir_production.log",  # noqa: F405
            "maxBytes": 1024 * 1024 * 50,  # 50 MB
            "backupCount": 20,
            "formatter": "json",
        },
        "error_file": {
            "level": "ERROR",
            "class": "logging.handlers.RotatingFileHandler",
            "filename": BASE_DIR / "logs" / "kasir_errors.log",  # noqa: F405
            "maxBytes": 1024 * 1024 * 50,  # 50 MB
            "backupCount": 20,
            "formatter": "json",
        },
    },
    "root": {
        "handlers": ["console", "file"],
        "level": "INFO",
    },
    "loggers": {
        "django": {
            "handlers": ["console", "file"],
            "level": "INFO",
            "propagate": False,
        },
        "django.request": {
            "handlers": ["console", "error_file"],
            "level": "ERROR",
            "propagate": False,
        },
        "django.security": {
            "handlers": ["console", "error_file"],
            "level": "WARNING",
            "propagate": False,
        },
        "apps": {
            "handlers": ["console", "file", "error_file"],
            "level": "INFO",
            "propagate": False,
        },
    },
}

# Security Settings - Production (Maximum security)
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

# SSL is terminated at the proxy, not at Django
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_SSL_REDIRECT = os.getenv("SECURE_SSL_REDIRECT", "True") == "True"
SECURE_HSTS_SECONDS = 31536000  # 1 year
SECURE_HSTS_INCLUDE_SUBDOMAINS = True

# Validate all required environment variables
if not COLLECTSTATIC_ONLY:
    validate_required_env_vars()  # noqa: F405

if SECRET_KEY == "dev-secret-key-change-in-production":
    raise ValueError("SECRET_KEY must be changed from default value in production!")
