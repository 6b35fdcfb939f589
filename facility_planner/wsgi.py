"""WSGI config for the facility planner."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "facility_planner.settings.prod")

application = get_wsgi_application()
