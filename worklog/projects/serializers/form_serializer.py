# -*- coding: utf-8 -*-
"""
Form payloads for the project editor.

Field names follow ``project[tasks_attributes][<key>][<field>]`` and DOM ids
``project_tasks_attributes_<key>_<field>``. ``<key>`` is a synthetic token
per line (``task-<id>`` for stored tasks, a random hex for new rows), never
the row index, so moving rows around never renames fields.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional
import uuid

from django.urls import reverse

from projects.models import Project, Task
from projects.services.project_service import DESTROY_VALUES

FORM_PREFIX = "project"


def new_line_key() -> str:
    return uuid.uuid4().hex


def line_key(task: Optional[Task]) -> str:
    if task is not None and task.pk is not None:
        return f"task-{task.pk}"
    return new_line_key()


def _input(name: str, dom_id: str, value: Any = "", type_: str = "text") -> Dict[str, Any]:
    value = "" if value is None else str(value)
    return {
        "name": name,
        "id": dom_id,
        "type": type_,
        "value": value,
        "defaultValue": value,
    }


def task_input(key: str, field: str, value: Any = "", type_: str = "text") -> Dict[str, Any]:
    return _input(
        f"{FORM_PREFIX}[tasks_attributes][{key}][{field}]",
        f"{FORM_PREFIX}_tasks_attributes_{key}_{field}",
        value,
        type_,
    )


def task_line(task: Optional[Task] = None, *, key: Optional[str] = None, values: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """One task row; ``values`` (echoed user input) wins over stored values."""
    key = key or line_key(task)
    values = values or {}
    title = values.get("title", task.title if task else "")
    allotted = values.get("allotted_time", task.allotted_time if task else "")
    return {
        "key": key,
        "task_id": task.pk if task is not None else values.get("id"),
        "_destroy": values.get("_destroy") in DESTROY_VALUES,
        "title": task_input(key, "title", title, "text"),
        "allotted_time": task_input(key, "allotted_time", allotted, "number"),
    }


def blank_task_line() -> Dict[str, Any]:
    return task_line()


def project_form(
    project: Optional[Project] = None,
    *,
    data: Optional[Dict[str, Any]] = None,
    errors: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Payload for the new/edit page. When ``data`` (a rejected submission) is
    given, its values are shown instead of the stored ones.
    """
    data = data or {}
    editing = project is not None and project.pk is not None

    if editing:
        action = reverse("projects:project-detail", kwargs={"ref": project.slug})
        method = "patch"
    else:
        action = reverse("projects:project-list-create")
        method = "post"

    lines: List[Dict[str, Any]] = []
    submitted = data.get("tasks_attributes") or {}
    if isinstance(submitted, list):
        submitted = {str(i): v for i, v in enumerate(submitted)}
    elif not isinstance(submitted, dict):
        submitted = {}
    if submitted:
        stored = {t.pk: t for t in project.tasks.all()} if editing else {}
        for key, values in submitted.items():
            if not isinstance(values, dict):
                continue
            task = stored.get(_as_int(values.get("id")))
            lines.append(task_line(task, key=str(key), values=values))
    elif editing:
        lines = [task_line(t) for t in project.tasks.all()]
    else:
        lines = [blank_task_line()]

    name = data.get("name", project.name if project else "")
    description = data.get("description", project.description if project else "")
    return {
        "form": {"action": action, "method": method},
        "inputs": {
            "name": _input(f"{FORM_PREFIX}[name]", f"{FORM_PREFIX}_name", name),
            "description": _input(f"{FORM_PREFIX}[description]", f"{FORM_PREFIX}_description", description, "textarea"),
            "tasks_attributes": lines,
        },
        "errors": errors or {},
    }


def _as_int(value) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
