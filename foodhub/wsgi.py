"""
WSGI config for the foodhub project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "foodhub.settings")

application = get_wsgi_application()
