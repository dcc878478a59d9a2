"""
Django test settings for family_planner project.

Used by pytest-django (see pyproject.toml).
"""

from .base import *

DEBUG = False

ALLOWED_HOSTS = ['testserver', 'localhost']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# Fast hashing for fixtures
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

REMINDER_WINDOW_SLACK_MINUTES = 2
REMINDER_DEFAULT_ADVANCE_MINUTES = 15
TASK_DUE_SOON_HOURS = 24
TASK_REMINDER_COOLDOWN_HOURS = 12
NOTIFICATIONS_TRIGGER_TOKEN = 'test-trigger-token'

# Run django-q tasks inline
Q_CLUSTER = dict(Q_CLUSTER, sync=True)

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['null'],
        'level': 'WARNING',
    },
}
