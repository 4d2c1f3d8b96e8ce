"""
ASGI config for worklog project.

A websocket layer that relays ``projects.signals.project_changed`` would be
mounted here next to the HTTP application.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'worklog.settings')

application = get_asgi_application()
