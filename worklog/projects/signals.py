# -*- coding: utf-8 -*-
"""
Publish/subscribe seam for live project updates.

Receivers get ``project_id``, ``stream`` (the per-project channel name),
``action`` and ``payload``. Whatever pushes updates to browsers (a websocket
layer, an SSE relay) connects here.
"""
from django.dispatch import Signal

project_changed = Signal()
