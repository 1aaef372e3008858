"""
WSGI config for the Kasir point-of-sale application.

It exposes the WSGI callable as a module-level variable named ``application``.
Managed hosts import this module directly; locally, use ``manage.py serve``.

For more information on this file, see
https://docs.djangoproject.com/en/4.2/howto/deployment/wsgi/
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.production")

application = get_wsgi_application()
