# -*- coding: utf-8 -*-
from __future__ import annotations
from typing import Optional, Union

from django.db.models import Prefetch, QuerySet

from projects.models import Project, Task


def recent_projects() -> QuerySet[Project]:
    return Project.objects.order_by("-created_at", "-id")


def search_projects(q: Optional[str]) -> QuerySet[Project]:
    """Case-insensitive name search; a blank query matches nothing."""
    if not q or not q.strip():
        return Project.objects.none()
    return recent_projects().filter(name__icontains=q.strip())


def get_project(ref: Union[int, str], *, with_tasks: bool = False) -> Optional[Project]:
    """Look a project up by id or by slug."""
    qs = Project.objects.all()
    if with_tasks:
        qs = qs.prefetch_related(Prefetch("tasks", queryset=Task.objects.order_by("position", "created_at")))
    ref = str(ref)
    lookup = {"pk": int(ref)} if ref.isdigit() else {"slug": ref}
    try:
        return qs.get(**lookup)
    except Project.DoesNotExist:
        return None
