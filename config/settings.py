"""
Settings for the scrim scheduler API.

One module for every environment; behavior is driven by env vars
(optionally loaded from a .env file next to manage.py).
"""
from datetime import timedelta
from pathlib import Path
import os

import dj_database_url
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

dotenv_file = BASE_DIR / ".env"
if dotenv_file.exists():
    load_dotenv(dotenv_path=dotenv_file, override=True)


def env_flag(name, default="0"):
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


def env_list(name, default=""):
    return [item.strip() for item in os.environ.get(name, default).split(",") if item.strip()]


# ===================================================================
# Runtime
# ===================================================================
ENV = os.environ.get("ENV", "dev")  # dev / staging / prod
DEBUG = env_flag("DEBUG", "1")

# Only the dev fallback lives here; deployments must set SECRET_KEY
SECRET_KEY = os.environ.get("SECRET_KEY", "scheduler-dev-only-secret")

ALLOWED_HOSTS = env_list("DJANGO_ALLOWED_HOSTS", "127.0.0.1,localhost,testserver")


# ===================================================================
# Apps / middleware
# ===================================================================
DJANGO_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
]

THIRD_PARTY_APPS = [
    "django_extensions",
    "rest_framework",
    "rest_framework_simplejwt",
    "corsheaders",
]

LOCAL_APPS = [
    "users",   # profiles mirrored from Supabase identities
    "core",    # auth, error envelope, health, seed command
    "events",  # teams, events, availability
    "ux",      # classified grid for the frontend
]

INSTALLED_APPS = DJANGO_APPS + THIRD_PARTY_APPS + LOCAL_APPS

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

TEMPLATES = [{
    "BACKEND": "django.template.backends.django.DjangoTemplates",
    "DIRS": [],
    "APP_DIRS": True,
    "OPTIONS": {
        "context_processors": [
            "django.template.context_processors.request",
            "django.contrib.auth.context_processors.auth",
            "django.contrib.messages.context_processors.messages",
        ],
    },
}]


# ===================================================================
# CORS: the grid frontend is served from its own origin
# ===================================================================
CORS_ALLOWED_ORIGINS = env_list("CORS_ALLOWED_ORIGINS", "http://localhost:3000")
CORS_ALLOW_ALL_ORIGINS = DEBUG and "CORS_ALLOWED_ORIGINS" not in os.environ


# ===================================================================
# Database
#   1. DATABASE_URL (Supabase Postgres pooler string)
#   2. discrete DB_* vars
#   3. local sqlite
# ===================================================================
if os.environ.get("DATABASE_URL"):
    DATABASES = {
        "default": dj_database_url.parse(
            os.environ["DATABASE_URL"],
            conn_max_age=600,
            conn_health_checks=True,
            ssl_require=not DEBUG,
        )
    }
elif os.environ.get("DB_NAME"):
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.environ["DB_NAME"],
            "USER": os.environ.get("DB_USER", ""),
            "PASSWORD": os.environ.get("DB_PASSWORD", ""),
            "HOST": os.environ.get("DB_HOST", "127.0.0.1"),
            "PORT": os.environ.get("DB_PORT", "5432"),
            "OPTIONS": {"sslmode": os.environ.get("DB_SSLMODE", "require")},
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "scheduler.sqlite3",
        }
    }

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
AUTH_USER_MODEL = "users.User"


# ===================================================================
# Supabase (identity provider)
# ===================================================================
SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_ANON_KEY = os.environ.get("SUPABASE_ANON_KEY", "")
# Set: tokens are verified locally (HS256). Empty: tokens are checked
# against the Supabase auth API on every request.
SUPABASE_JWT_SECRET = os.environ.get("SUPABASE_JWT_SECRET", "")
SUPABASE_JWT_AUDIENCE = os.environ.get("SUPABASE_JWT_AUDIENCE", "authenticated")

# Supabase accounts have no local password; these only guard admin users
AUTH_PASSWORD_VALIDATORS = [
    {"NAME": f"django.contrib.auth.password_validation.{name}"}
    for name in (
        "UserAttributeSimilarityValidator",
        "MinimumLengthValidator",
        "CommonPasswordValidator",
        "NumericPasswordValidator",
    )
]


# ===================================================================
# I18N / time
# ===================================================================
LANGUAGE_CODE = "en-us"
# Events are plain dates and grid hours are naive; TIME_ZONE only
# decides what "today" means for an event's phase.
TIME_ZONE = os.environ.get("TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True


# ===================================================================
# Static (admin only, served by whitenoise)
# ===================================================================
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"


# ===================================================================
# DRF
# ===================================================================
REST_FRAMEWORK = {
    # Order matters: the first class also decides the 401 challenge header
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "core.supabase_auth.SupabaseJWTAuthentication",
        "rest_framework_simplejwt.authentication.JWTAuthentication",
        "rest_framework.authentication.SessionAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_THROTTLE_RATES": {
        "event-create": os.environ.get("THROTTLE_EVENT_CREATE", "30/minute"),
        "availability-save": os.environ.get("THROTTLE_AVAILABILITY_SAVE", "120/minute"),
    },
    "EXCEPTION_HANDLER": "core.exceptions.custom_exception_handler",
}

# Locally minted tokens for scripts and service accounts
SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(minutes=int(os.environ.get("JWT_ACCESS_MINUTES", "60"))),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=int(os.environ.get("JWT_REFRESH_DAYS", "7"))),
    "AUTH_HEADER_TYPES": ("Bearer",),
}


# ===================================================================
# Logging
# ===================================================================
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "[{levelname}] {asctime} {name}: {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "django": {"handlers": ["console"], "level": "INFO"},
        # 4xx/5xx raised outside DRF
        "django.request": {"handlers": ["console"], "level": "ERROR", "propagate": False},
        # scheduler, scheduler.events, scheduler.auth
        "scheduler": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    },
}


# ===================================================================
# Production hardening
# ===================================================================
if not DEBUG:
    SECURE_SSL_REDIRECT = env_flag("SECURE_SSL_REDIRECT", "1")
    SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
    SESSION_COOKIE_SECURE = True
    CSRF_COOKIE_SECURE = True
    SECURE_HSTS_SECONDS = 60 * 60 * 24 * 365
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_CONTENT_TYPE_NOSNIFF = True
    CSRF_TRUSTED_ORIGINS = env_list("CSRF_TRUSTED_ORIGINS")
