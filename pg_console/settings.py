"""
Django settings for pg_console project.

Backend connection values come from the environment:
    PG_API_BASE_URL, PG_API_TIMEOUT, PG_API_TOKEN,
    PG_ORGANIZATION_ID, PG_LOCATION_ID, PG_USER_ID
"""

from pathlib import Path
import os


def _env_int(name, default=None):
    value = os.environ.get(name)
    if value in (None, ''):
        return default
    return int(value)


# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'django-insecure-pg-console-local-only')

DEBUG = os.environ.get('DJANGO_DEBUG', 'False').lower() == 'true'

ALLOWED_HOSTS = []


# Application definition

INSTALLED_APPS = [
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'rest_framework',
    'common',  # Alerts, logging, statistics refresh, management commands
    'listing',  # List controller and screen registry
    'rent',  # Rent / advance / refund payment screens
    'tenants',  # Tenant screen
    'expenses',  # Expense screen
    'visitors',  # Visitor screen
]

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
    }
}

LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'Asia/Kolkata'

USE_I18N = False
USE_TZ = True

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# PG management backend
PG_API = {
    'BASE_URL': os.environ.get('PG_API_BASE_URL', 'http://localhost:3000/api/v1'),
    'TIMEOUT': _env_int('PG_API_TIMEOUT', 30),  # seconds
    'MAX_PAGE_SIZE': 100,
    'AUTH_TOKEN': os.environ.get('PG_API_TOKEN', ''),
    'ORGANIZATION_ID': _env_int('PG_ORGANIZATION_ID'),
    'PG_LOCATION_ID': _env_int('PG_LOCATION_ID'),
    'USER_ID': _env_int('PG_USER_ID'),
}

# Alerts hide themselves after this many seconds
ALERT_AUTO_HIDE_SECONDS = 5.0

# Statistics refresh
ENABLE_BACKGROUND_SCHEDULER = os.environ.get('PG_ENABLE_SCHEDULER', 'False').lower() == 'true'
STATS_REFRESH_SECONDS = _env_int('PG_STATS_REFRESH_SECONDS', 300)


# Logging Configuration with Fetch ID Support
LOG_DIR = BASE_DIR / 'logs'
LOG_DIR.mkdir(exist_ok=True)

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'filters': {
        'fetch_id': {
            '()': 'common.logging_config.FetchIDFilter',
        },
    },
    'formatters': {
        'verbose': {
            'format': '[{fetch_id}] {levelname} {asctime} {module} {message}',
            'style': '{',
        },
        'simple': {
            'format': '[{fetch_id}] {levelname} {message}',
            'style': '{',
        },
        'error': {
            'format': '[{fetch_id}] {levelname} {asctime} {pathname}:{lineno} {funcName} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'level': 'INFO',
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
            'filters': ['fetch_id'],
        },
        'error_file': {
            'level': 'ERROR',
            'class': 'logging.FileHandler',
            'filename': LOG_DIR / 'errors.log',
            'formatter': 'error',
            'filters': ['fetch_id'],
        },
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
        'api': {
            'handlers': ['console', 'error_file'],
            'level': os.environ.get('PG_API_LOG_LEVEL', 'WARNING'),
            'propagate': False,
        },
        'common': {
            'handlers': ['console', 'error_file'],
            'level': 'INFO',
            'propagate': False,
        },
        'listing': {
            'handlers': ['console', 'error_file'],
            'level': 'INFO',
            'propagate': False,
        },
    },
    'root': {
        'handlers': ['console', 'error_file'],
        'level': 'WARNING',
    },
}
