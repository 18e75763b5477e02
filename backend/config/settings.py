import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / ".env")


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "dev-only-secret-key")
DEBUG = _env_bool("DJANGO_DEBUG", True)
ALLOWED_HOSTS = [h.strip() for h in os.environ.get("DJANGO_ALLOWED_HOSTS", "*").split(",") if h.strip()]

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "flights",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "config.urls"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
USE_TZ = True
TIME_ZONE = "UTC"

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
}

# --- Flight search ---
FLIGHTS_PROVIDER = os.environ.get("FLIGHTS_PROVIDER", "tbo")
TBO_API_BASE_URL = os.environ.get("TBO_API_BASE_URL", "http://localhost:5000/api/v1")
TBO_API_TOKEN = os.environ.get("TBO_API_TOKEN") or None
TBO_SEARCH_PATH = os.environ.get("TBO_SEARCH_PATH", "/flights/search")
TBO_TIMEOUT_SECONDS = int(os.environ.get("TBO_TIMEOUT_SECONDS", "30"))

# Serve the offline sample when the provider is unreachable.
FLIGHTS_OFFLINE_FALLBACK = _env_bool("FLIGHTS_OFFLINE_FALLBACK", False)

DEFAULT_CURRENCY = os.environ.get("DEFAULT_CURRENCY", "INR")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "flights": {
            "handlers": ["console"],
            "level": os.environ.get("FLIGHTS_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
