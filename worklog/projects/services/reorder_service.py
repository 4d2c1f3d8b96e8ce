# -*- coding: utf-8 -*-
"""
Position-only write path for drag-and-drop ordering.

``task_ids[i]`` gets ``position = i``. Rows are locked for the duration of the
transaction so readers never see a half-applied order; values are written with
``QuerySet.update`` so a stale invalid title elsewhere cannot block a reorder.
Concurrent writers are last-writer-wins per row.
"""
from __future__ import annotations
from typing import List, Sequence
import logging

from django.db import transaction
from django.utils import timezone

from projects.exceptions import ReorderError, TaskNotFound
from projects.models import Project, Task
from projects.selectors.task_selector import ordered_tasks
from projects.services.broadcast_service import broadcast_project_change

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "No task IDs provided"


def _normalize_ids(task_ids: Sequence) -> List[int]:
    if not task_ids:
        raise ReorderError(EMPTY_MESSAGE)
    ids: List[int] = []
    for raw in task_ids:
        try:
            ids.append(int(raw))
        except (TypeError, ValueError):
            raise TaskNotFound([raw])
    if len(set(ids)) != len(ids):
        raise ReorderError("Duplicate task IDs provided")
    return ids


def reorder_tasks(*, project: Project, task_ids: Sequence) -> List[Task]:
    """
    Rewrite positions of the listed tasks to match their index.
    Tasks of the project that are not listed keep their position.
    Returns the project's tasks in their new order.
    """
    ids = _normalize_ids(task_ids)

    with transaction.atomic():
        rows = {
            t.pk: t.position
            for t in Task.objects.select_for_update()
            .filter(project=project, pk__in=ids)
            .only("id", "position")
        }
        missing = [tid for tid in ids if tid not in rows]
        if missing:
            logger.warning("[reorder] project=%s foreign ids=%s", project.pk, missing)
            raise TaskNotFound(missing)

        now = timezone.now()
        moved = 0
        for index, tid in enumerate(ids):
            if rows[tid] == index:
                continue
            Task.objects.filter(pk=tid).update(position=index, updated_at=now)
            moved += 1

        if moved:
            broadcast_project_change(project, "reordered", {"task_ids": ids})

    logger.info("[reorder] project=%s ids=%s moved=%s", project.pk, len(ids), moved)
    return list(ordered_tasks(project.pk))
