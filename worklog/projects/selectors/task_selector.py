# -*- coding: utf-8 -*-
from __future__ import annotations
from typing import List

from django.db.models import QuerySet

from projects.models import Task


def ordered_tasks(project_id: int) -> QuerySet[Task]:
    return Task.objects.filter(project_id=project_id).order_by("position", "created_at")


def ordered_task_ids(project_id: int) -> List[int]:
    return list(ordered_tasks(project_id).values_list("id", flat=True))
