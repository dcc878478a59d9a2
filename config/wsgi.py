"""
WSGI config for family_planner project.

For production, set DJANGO_SETTINGS_MODULE=config.settings.production
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

application = get_wsgi_application()
