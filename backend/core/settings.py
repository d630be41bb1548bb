"""
Django settings for core project.

Values come from the environment (optionally a backend/.env file).
Adjust secrets and production flags via the .env file.
"""
import json
import os
from pathlib import Path
from datetime import timedelta
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=BASE_DIR / ".env")


def _env_flag(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


# Basic security / env
SECRET_KEY = os.getenv("SECRET_KEY", "replace-me-for-dev")
DEBUG = _env_flag("DEBUG")
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "127.0.0.1,localhost,testserver").split(",") if h.strip()]

# Name used in the X-<app>-alert response headers
APPLICATION_NAME = os.getenv("APPLICATION_NAME", "bankAccountsApp")

# Application definition
INSTALLED_APPS = [
    # Django contrib
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "django.contrib.postgres",

    # Third party
    "rest_framework",
    "rest_framework_simplejwt",
    "corsheaders",
    "django_filters",

    # Local apps
    "bank_accounts",
    "frontend",
]

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "core.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "core.wsgi.application"

# Database
# PostgreSQL only: the search index relies on its full-text search.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.getenv("DB_NAME", "bank_accounts"),
        "USER": os.getenv("DB_USER", "postgres"),
        "PASSWORD": os.getenv("DB_PASSWORD", ""),
        "HOST": os.getenv("DB_HOST", "localhost"),
        "PORT": os.getenv("DB_PORT", "5432"),
        "OPTIONS": {"options": "-c client_encoding=UTF8"},
        "CONN_MAX_AGE": int(os.getenv("DB_CONN_MAX_AGE", 0)),
    }
}

# Password validation
AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = os.getenv("TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True

# Static files (the compiled SPA bundle is served from here)
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Frontend bootstrap
FRONTEND_BUNDLE = os.getenv("FRONTEND_BUNDLE", "frontend/app/main.bundle.js")
FRONTEND_HOT_RELOAD = _env_flag("FRONTEND_HOT_RELOAD", "True")

# REST Framework + Simple JWT configuration
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework_simplejwt.authentication.JWTAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": ("rest_framework.permissions.IsAuthenticated",),
    "DEFAULT_FILTER_BACKENDS": (
        "django_filters.rest_framework.DjangoFilterBackend",
        "rest_framework.filters.OrderingFilter",
    ),
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "COERCE_DECIMAL_TO_STRING": True,
}

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(minutes=int(os.getenv("JWT_ACCESS_MINUTES", 15))),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=int(os.getenv("JWT_REFRESH_DAYS", 7))),
    "AUTH_HEADER_TYPES": tuple(os.getenv("JWT_AUTH_HEADER_TYPES", "Bearer").split(",")),
}

# CORS (development)
CORS_ALLOW_ALL_ORIGINS = _env_flag("CORS_ALLOW_ALL_ORIGINS", "True")
# The SPA reads the alert headers set by the bank account endpoints
CORS_EXPOSE_HEADERS = [
    "Location",
    "Failure",
    f"X-{APPLICATION_NAME}-alert",
    f"X-{APPLICATION_NAME}-error",
    f"X-{APPLICATION_NAME}-params",
]

# Cookies / security defaults (override in production via env)
SESSION_COOKIE_SECURE = _env_flag("SESSION_COOKIE_SECURE")
CSRF_COOKIE_SECURE = _env_flag("CSRF_COOKIE_SECURE")
SESSION_COOKIE_SAMESITE = os.getenv("SESSION_COOKIE_SAMESITE", "Lax")

# FERNET KEYS configuration
# Expect FERNET_KEYS as either a JSON list string or a single base64 key string in the environment.
# In production DO NOT fallback to empty values; in DEBUG you may supply FERNET_DEV_KEY for convenience.
FERNET_KEYS = None
_raw = os.getenv("FERNET_KEYS")
if _raw:
    try:
        FERNET_KEYS = json.loads(_raw) if _raw.strip().startswith("[") else [_raw]
    except ValueError:
        FERNET_KEYS = [_raw]

if not FERNET_KEYS and DEBUG:
    _dev = os.getenv("FERNET_DEV_KEY")
    FERNET_KEYS = [_dev] if _dev else None

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {
            "level": "DEBUG",
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        }
    },
    "loggers": {
        "bank_accounts": {"level": LOG_LEVEL, "handlers": ["console"], "propagate": False},
        "frontend": {"level": LOG_LEVEL, "handlers": ["console"], "propagate": False},
    },
}

# Set to True only in development when you understand consequences
SHOW_SQL = _env_flag("SHOW_SQL")
if SHOW_SQL:
    LOGGING["filters"] = {"require_debug_true": {"()": "django.utils.log.RequireDebugTrue"}}
    LOGGING["loggers"]["django.db.backends"] = {
        "level": "DEBUG",
        "handlers": ["console"],
        "filters": ["require_debug_true"],
        "propagate": False,
    }

DATA_UPLOAD_MAX_MEMORY_SIZE = int(os.getenv("DATA_UPLOAD_MAX_MEMORY_SIZE", 10485760))

# End of settings
