"""
WSGI config for the garment market project.

gunicorn picks up `application` from here (see gunicorn.conf.py).
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "garment_market_project.settings")

application = get_wsgi_application()
