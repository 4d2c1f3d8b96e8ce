# -*- coding: utf-8 -*-
from __future__ import annotations
from typing import Any, Dict, Optional
import logging

from django.db import transaction

from projects.signals import project_changed

log = logging.getLogger(__name__)

STREAM_PREFIX = "projects"


def stream_name(project) -> str:
    """Channel a viewer of this project subscribes to."""
    project_id = project if isinstance(project, int) else project.pk
    return f"{STREAM_PREFIX}:{project_id}"


def _deliver(project_id: int, action: str, payload: Dict[str, Any]) -> None:
    results = project_changed.send_robust(
        sender=None,
        project_id=project_id,
        stream=stream_name(project_id),
        action=action,
        payload=payload,
    )
    for receiver, result in results:
        if isinstance(result, Exception):
            log.error(
                "[broadcast] receiver %r failed for project=%s action=%s: %s",
                receiver, project_id, action, result,
            )


def broadcast_project_change(project, action: str, payload: Optional[Dict[str, Any]] = None) -> None:
    """
    Fire-and-forget notification that a project (or its tasks) changed.
    Runs after the surrounding transaction commits; dropped on rollback.
    """
    project_id = project.pk
    data = dict(payload or {})
    log.debug("[broadcast] scheduled project=%s action=%s", project_id, action)
    transaction.on_commit(lambda: _deliver(project_id, action, data))
