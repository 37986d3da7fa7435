"""
GymTastic – Django Settings (Infrastructure Only)
==================================================
Django is the persistence and configuration container for the
commerce core. The engines define the behaviour; Django provides the
ORM, migrations, settings and logging configuration.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("GYMTASTIC_SECRET_KEY", "gymtastic-dev-key-replace-before-deployment")

DEBUG = os.environ.get("GYMTASTIC_DEBUG", "1") == "1"

ALLOWED_HOSTS = []

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    # ── GymTastic engines ─────────────────────────────────
    "engines.catalog",
    "engines.cart",
    "engines.stock",
    "engines.membership",
    "engines.orders",
]

MIDDLEWARE = []

# ── Database ──────────────────────────────────────────────────
# SQLite for development and tests. Point GYMTASTIC_DB_ENGINE at
# another backend for deployment.
DATABASES = {
    "default": {
        "ENGINE": os.environ.get("GYMTASTIC_DB_ENGINE", "django.db.backends.sqlite3"),
        "NAME": os.environ.get("GYMTASTIC_DB_NAME", str(BASE_DIR / "db.sqlite3")),
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "es-cl"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Commerce core rules ───────────────────────────────────────
# Read by core.config.SettingsConfigStore. A timeout of 0 disables it.
GYMTASTIC_CORE = {
    "RENEWAL_THRESHOLD_DAYS": int(os.environ.get("GYMTASTIC_RENEWAL_THRESHOLD_DAYS", "3")),
    "CHECKOUT_TIMEOUT_SECONDS": float(os.environ.get("GYMTASTIC_CHECKOUT_TIMEOUT_SECONDS", "30")),
    "DEFAULT_PLAN_DURATION_DAYS": int(os.environ.get("GYMTASTIC_DEFAULT_PLAN_DURATION_DAYS", "30")),
}

# ── Logging ───────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("GYMTASTIC_LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {name} {thread:d} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "loggers": {
        "gymtastic": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": True,
        },
    },
}
