"""Django settings for the shopfront order service.

Every knob is read from the environment with a development default. The
service keeps all of its state in memory, so there is no database and no
auth stack: DRF is configured for anonymous JSON-only APIs.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-insecure-shopfront-key")
DEBUG = _env_bool("DJANGO_DEBUG", "0")
ALLOWED_HOSTS = [h.strip() for h in os.getenv("DJANGO_ALLOWED_HOSTS", "*").split(",") if h.strip()]

INSTALLED_APPS = [
    "corsheaders",
    "rest_framework",
    "apps.orders",
    "apps.monitoring",
]

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "gateway.middleware.RequestIdMiddleware",
    "gateway.middleware.ApiSizeLimitMiddleware",
]

ROOT_URLCONF = "shopfront.urls"
WSGI_APPLICATION = "shopfront.wsgi.application"
APPEND_SLASH = False

# In-memory registries only
DATABASES = {}

USE_TZ = True
TIME_ZONE = "UTC"

# ---- CORS ----
# Any origin by default; set CORS_ALLOWED_ORIGINS to restrict
CORS_ALLOWED_ORIGINS = [o.strip() for o in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",") if o.strip()]
CORS_ALLOW_ALL_ORIGINS = _env_bool("CORS_ALLOW_ALL_ORIGINS", "0" if CORS_ALLOWED_ORIGINS else "1")

# ---- Service ----
API_MAX_BYTES = int(os.getenv("API_MAX_BYTES", str(1 * 1024 * 1024)))
ORDERS_SEED_DATA = _env_bool("ORDERS_SEED_DATA", "1")

# ---- DRF ----
REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "gateway.exceptions.api_exception_handler",
    # Unset rates mean no throttling for that scope
    "DEFAULT_THROTTLE_RATES": {
        "catalog_read": os.getenv("THROTTLE_CATALOG_READ") or None,
        "orders_list": os.getenv("THROTTLE_ORDERS_LIST") or None,
        "orders_create": os.getenv("THROTTLE_ORDERS_CREATE") or None,
        "management": os.getenv("THROTTLE_MANAGEMENT") or None,
    },
}

CACHES = {
    "default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache"},
}

# ---- Logging ----
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "request_id": {"()": "gateway.logging_filters.RequestIdFilter"},
    },
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s %(request_id)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "filters": ["request_id"],
        },
    },
    "root": {"handlers": ["console"], "level": LOG_LEVEL},
    "loggers": {
        "orders": {"level": LOG_LEVEL},
        "gateway": {"level": LOG_LEVEL},
        "django": {"level": "WARNING"},
    },
}

if LOG_DIR:
    os.makedirs(LOG_DIR, exist_ok=True)
    LOGGING["handlers"]["combined_file"] = {
        "class": "logging.FileHandler",
        "filename": os.path.join(LOG_DIR, "combined.log"),
        "formatter": "json",
        "filters": ["request_id"],
    }
    LOGGING["handlers"]["error_file"] = {
        "class": "logging.FileHandler",
        "filename": os.path.join(LOG_DIR, "error.log"),
        "level": "ERROR",
        "formatter": "json",
        "filters": ["request_id"],
    }
    LOGGING["root"]["handlers"] += ["combined_file", "error_file"]
