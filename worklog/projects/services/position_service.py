# -*- coding: utf-8 -*-
"""
Position allocation for tasks inside one project.

A new task sorts last: max(position of its siblings) + 1, or 0 for the first
one. Siblings are the persisted tasks of the project *and* whatever tasks are
still in memory for the current submission, so several rows added before the
first save do not all land on the same slot.
"""
from __future__ import annotations
from typing import Iterable, List, Optional

from django.db.models import Max

_UNSET = object()


def persisted_max(project) -> Optional[int]:
    """Highest stored position for the project, None for none/unsaved."""
    if project is None or project.pk is None:
        return None
    return project.tasks.aggregate(top=Max("position"))["top"]


def next_position(project, pending: Iterable = (), *, stored=_UNSET) -> int:
    # explicit positions that are not integers yet are left to validation
    positions = [t.position for t in pending if isinstance(t.position, int)]
    if stored is _UNSET:
        stored = persisted_max(project)
    if stored is not None:
        positions.append(stored)
    return max(positions) + 1 if positions else 0


def assign_positions(project, tasks: List) -> List:
    """Fill in missing positions in list order; explicit positions are kept."""
    stored = persisted_max(project)
    seen: list = []
    for task in tasks:
        if task.position is None:
            task.position = next_position(project, pending=seen, stored=stored)
        seen.append(task)
    return tasks
