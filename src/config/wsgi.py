"""WSGI config for the product and order services.

Set ``SERVICE_NAME`` to ``products`` or ``orders`` to serve one API only.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_wsgi_application()
