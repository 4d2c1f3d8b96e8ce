# -*- coding: utf-8 -*-
from django.core.exceptions import ObjectDoesNotExist, ValidationError


class TaskNotFound(ObjectDoesNotExist):
    """A task id that is not part of the project being edited."""

    def __init__(self, task_ids):
        self.task_ids = list(task_ids)
        super().__init__(f"Task not found: {', '.join(str(t) for t in self.task_ids)}")


class ReorderError(ValidationError):
    """Reorder request that cannot be applied (empty or duplicated ids)."""


class NestedValidationError(ValidationError):
    """
    Field errors of a project form, tasks keyed by their line key:
    {"name": [...], "tasks_attributes": {"<key>": {"title": [...]}}}
    """

    def __init__(self, errors: dict):
        self.errors = errors
        flat = {}
        for field, value in errors.items():
            if isinstance(value, dict):
                for key, task_errors in value.items():
                    for name, messages in task_errors.items():
                        flat[f"{field}[{key}].{name}"] = list(messages)
            else:
                flat[field] = list(value)
        super().__init__(flat)
