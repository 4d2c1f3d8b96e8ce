# -*- coding: utf-8 -*-
"""
Project create/update/delete with the nested task collection.

One submission = one transaction: every line-item is validated first and the
whole batch is written only if nothing failed. Line-items:

    {"title": ..., "allotted_time": ...}                 -> create
    {"id": 7, "title": ..., "allotted_time": ...}        -> update task 7
    {"id": 7, "_destroy": "1"}                            -> delete task 7

``_destroy`` is a one-shot instruction, never stored.
"""
from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union
import logging

from django.core.exceptions import ObjectDoesNotExist, ValidationError
from django.db import transaction

from projects.exceptions import NestedValidationError, TaskNotFound
from projects.models import Project, Task
from projects.services.broadcast_service import broadcast_project_change
from projects.services.position_service import assign_positions

logger = logging.getLogger(__name__)

PROJECT_FIELDS = ("name", "description")
TASK_FIELDS = ("title", "allotted_time", "position")
DESTROY_VALUES = ("1", "true", "True", "on", True, 1)
DUPLICATE_ID_MESSAGE = "Task listed more than once"
POSITION_MESSAGE = "Position must be a whole number"

TasksAttributes = Union[Mapping[Any, Dict[str, Any]], Sequence[Dict[str, Any]], None]


# ====================== Helpers ======================

def _line_items(tasks_attributes: TasksAttributes) -> List[Tuple[str, Dict[str, Any]]]:
    if not tasks_attributes:
        return []
    if isinstance(tasks_attributes, Mapping):
        return [(str(k), dict(v)) for k, v in tasks_attributes.items()]
    return [(str(i), dict(v)) for i, v in enumerate(tasks_attributes)]


def _is_destroy(value) -> bool:
    return value in DESTROY_VALUES


def _task_id(value) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise TaskNotFound([value])


def _lock_existing(project: Project, items) -> Dict[int, Task]:
    ids = [tid for tid in (_task_id(item.get("id")) for _, item in items) if tid is not None]
    if not ids:
        return {}
    if project.pk is None:
        raise TaskNotFound(ids)
    existing = {t.pk: t for t in project.tasks.select_for_update().filter(pk__in=ids)}
    missing = [tid for tid in ids if tid not in existing]
    if missing:
        raise TaskNotFound(missing)
    return existing


def _lock_project(project: Project) -> None:
    """Serialize position allocation per project until the transaction ends."""
    if project.pk is not None:
        list(Project.objects.select_for_update().filter(pk=project.pk).values_list("pk", flat=True))


def _clean_task_values(item: Dict[str, Any]) -> Tuple[Dict[str, Any], Dict[str, List[str]]]:
    """Values to set on the task, plus errors for values that cannot be coerced."""
    values = {f: item[f] for f in TASK_FIELDS if f in item}
    errors: Dict[str, List[str]] = {}
    if isinstance(values.get("title"), str):
        values["title"] = values["title"].strip()
    if values.get("allotted_time") == "":
        values["allotted_time"] = None
    # blank position means "let the allocator decide"
    if values.get("position") in ("", None):
        values.pop("position", None)
    elif "position" in values:
        try:
            values["position"] = int(values["position"])
        except (TypeError, ValueError):
            errors["position"] = [POSITION_MESSAGE]
            values.pop("position")
    return values, errors


def _project_errors(project: Project) -> Dict[str, List[str]]:
    if isinstance(project.name, str):
        project.name = project.name.strip()
    try:
        project.full_clean(exclude=["slug"], validate_unique=False)
    except ValidationError as exc:
        return exc.message_dict
    return {}


# ====================== SERVICES ======================

@transaction.atomic
def _save_nested(project: Project, tasks_attributes: TasksAttributes, *, action: str) -> Project:
    items = _line_items(tasks_attributes)
    errors: Dict[str, Any] = _project_errors(project)

    existing = _lock_existing(project, items)

    to_delete: List[Task] = []
    new_tasks: List[Task] = []
    staged: List[Tuple[str, Task, Dict[str, Any]]] = []
    task_errors: Dict[str, Dict[str, List[str]]] = {}
    seen_ids = set()

    for key, item in items:
        tid = _task_id(item.get("id"))
        destroy = _is_destroy(item.get("_destroy"))
        if tid is not None:
            if tid in seen_ids:
                # one row per stored task; a second row would act on the same object
                task_errors[key] = {"id": [DUPLICATE_ID_MESSAGE]}
                continue
            seen_ids.add(tid)
            task = existing[tid]
            if destroy:
                to_delete.append(task)
                continue
            before = {f: getattr(task, f) for f in TASK_FIELDS}
        else:
            if destroy:
                # added and removed again before saving
                continue
            # built detached so the model hook does not allocate a position
            task = Task(position=None)
            new_tasks.append(task)
            before = None
        values, value_errors = _clean_task_values(item)
        for field, value in values.items():
            setattr(task, field, value)
        if value_errors:
            task_errors[key] = value_errors
        staged.append((key, task, before))

    if new_tasks:
        _lock_project(project)
    assign_positions(project, new_tasks)

    for key, task, _ in staged:
        try:
            task.full_clean(exclude=["project"], validate_unique=False)
        except ValidationError as exc:
            task_errors[key] = {**exc.message_dict, **task_errors.get(key, {})}
    if task_errors:
        errors["tasks_attributes"] = task_errors

    if errors:
        logger.info("[projects] %s rejected for project=%s: %s", action, project.pk, list(errors))
        raise NestedValidationError(errors)

    project.save()

    for task in to_delete:
        task.delete()

    for _, task, before in staged:
        if before is None:
            task.project = project
            task.save()
            continue
        changed = [f for f in TASK_FIELDS if getattr(task, f) != before[f]]
        if changed:
            task.save(update_fields=changed + ["updated_at"])

    logger.info(
        "[projects] %s project=%s created=%s updated=%s deleted=%s",
        action, project.pk, len(new_tasks), len(staged) - len(new_tasks), len(to_delete),
    )
    broadcast_project_change(project, action)
    return project


def create_project(
    *,
    name: str,
    description: str = "",
    tasks_attributes: TasksAttributes = None,
) -> Project:
    """Create a project together with its first tasks."""
    project = Project(name=name, description=description or "")
    return _save_nested(project, tasks_attributes, action="created")


def update_project(
    *,
    project: Project,
    tasks_attributes: TasksAttributes = None,
    **data,
) -> Project:
    """Update project fields and apply the task line-items in one go."""
    for field, value in data.items():
        if field in PROJECT_FIELDS:
            setattr(project, field, value if value is not None else "")
    try:
        return _save_nested(project, tasks_attributes, action="updated")
    except (ValidationError, ObjectDoesNotExist):
        # keep the caller's instance consistent with what is stored
        if project.pk is not None:
            project.refresh_from_db()
        raise


def delete_project(*, project: Project) -> None:
    """Delete project; its tasks go with it."""
    project_id = project.pk
    with transaction.atomic():
        broadcast_project_change(project, "destroyed")
        project.delete()
    logger.info("[projects] destroyed project=%s", project_id)
