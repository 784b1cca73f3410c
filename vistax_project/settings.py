"""
Django settings for the VistaX forecast service.

Everything deployment-specific comes from environment variables,
optionally seeded from a .env file in the project root.
"""
import os
from pathlib import Path

from load_env import load_env

BASE_DIR = Path(__file__).resolve().parent.parent

load_env(str(BASE_DIR / '.env'))


def env_bool(name, default='False'):
    return os.environ.get(name, default).lower() in ('true', '1', 't')


SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'django-insecure-vistax-development-key')

DEBUG = env_bool('DJANGO_DEBUG')

ALLOWED_HOSTS = [h.strip() for h in os.environ.get('DJANGO_ALLOWED_HOSTS', '*').split(',') if h.strip()]

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'rest_framework',
    'vistax_forecast',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'vistax_forecast.middleware.CorsMiddleware',
]

ROOT_URLCONF = 'vistax_project.urls'

WSGI_APPLICATION = 'vistax_project.wsgi.application'

# Nothing is stored relationally; the database is only there for contrib apps
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
    }
}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = False
USE_TZ = True

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Market state lives in a cache alias; Redis in production, memory otherwise
REDIS_URL = os.environ.get('REDIS_URL')

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    },
    'market_state': {
        'BACKEND': 'django.core.cache.backends.redis.RedisCache',
        'LOCATION': REDIS_URL,
    } if REDIS_URL else {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'vistax-market-state',
    },
}

REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': ['rest_framework.renderers.JSONRenderer'],
    'DEFAULT_PARSER_CLASSES': ['rest_framework.parsers.JSONParser'],
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': ['rest_framework.permissions.AllowAny'],
    'UNAUTHENTICATED_USER': None,
    'EXCEPTION_HANDLER': 'vistax_forecast.exceptions.api_exception_handler',
}

LOG_LEVEL = os.environ.get('DJANGO_LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'standard': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'standard',
        },
    },
    'loggers': {
        'api_requests': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'vistax_forecast': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}

# VistaX
VISTAX_API_PREFIX = '/api/'

# ALLOWED_ORIGIN overrides every endpoint; otherwise each route keeps its own default
VISTAX_ALLOWED_ORIGIN = os.environ.get('ALLOWED_ORIGIN') or None
VISTAX_DEFAULT_ORIGINS = {
    'vistax-forecast': 'https://kazpa.io',
    'tv-signal': '*',
}

VISTAX_WEBHOOK_SECRET = os.environ.get('TV_WEBHOOK_SECRET')

VISTAX_CALENDAR_PROVIDER = 'static' if env_bool('USE_MOCK_CALENDAR') else \
    os.environ.get('CALENDAR_PROVIDER', 'forexfactory').lower()

VISTAX_STATIC_CALENDAR_PATH = os.environ.get('STATIC_CALENDAR_PATH')

VISTAX_TE_API_KEY = os.environ.get('TE_API_KEY')

VISTAX_CALENDAR_FETCH_TIMEOUT = float(os.environ.get('CALENDAR_FETCH_TIMEOUT', '10'))

VISTAX_ROUTINE = {
    'startGmt': os.environ.get('ROUTINE_START_GMT', '09:35'),
    'endGmt': os.environ.get('ROUTINE_END_GMT', '10:50'),
}

VISTAX_MARKET_STATE_CACHE = 'market_state'
