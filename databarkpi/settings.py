"""Django settings for databar-kpi.

The project has no database, URLs or static files: Django provides the
template engine, locale number formats and management commands used to render
the data bar. Configuration is driven by environment variables so deployments
can tune defaults without code changes.
"""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, *, default: bool) -> bool:
    """Parse a boolean environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        Parsed boolean value.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _env_int(name: str, *, default: int) -> int:
    """Parse an integer environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        Parsed integer value.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return int(raw.strip())


DEBUG = _env_bool("DJANGO_DEBUG", default=True)

_DEV_SECRET_KEY = "dev-only-insecure-secret-key"
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY") or (_DEV_SECRET_KEY if DEBUG else "")
if not SECRET_KEY:
    raise RuntimeError("DJANGO_SECRET_KEY is required when DJANGO_DEBUG is False.")

INSTALLED_APPS = [
    "visual.apps.VisualConfig",
]

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {},
    }
]

DATABASES: dict[str, dict[str, str]] = {}

LANGUAGE_CODE = os.getenv("DJANGO_LANGUAGE_CODE", "en-us")
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Data bar defaults (visual settings the host does not override).
DATABAR_DEFAULT_DISPLAY_UNITS = _env_int("DATABAR_DEFAULT_DISPLAY_UNITS", default=0)
DATABAR_FONT_SIZE = _env_int("DATABAR_FONT_SIZE", default=12)
DATABAR_VIEWPORT_WIDTH = _env_int("DATABAR_VIEWPORT_WIDTH", default=300)
DATABAR_VIEWPORT_HEIGHT = _env_int("DATABAR_VIEWPORT_HEIGHT", default=60)

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
        "kpi": {"handlers": ["console"], "level": os.getenv("DATABAR_LOG_LEVEL", "WARNING")},
        "visual": {"handlers": ["console"], "level": os.getenv("DATABAR_LOG_LEVEL", "WARNING")},
    },
}
