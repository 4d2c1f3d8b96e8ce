# ============================================
# projects/clients/reorder_client.py
# ============================================
import logging
from typing import Dict, Hashable, List, Optional, Sequence

import requests
from django.conf import settings

from projects.clients.drag_drop import (
    DragEnd, DragOver, DragStart, Drop, IDLE_STATE, move_item, transition,
)

logger = logging.getLogger(__name__)


class ReorderFailed(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ProjectsClient:
    """Client for the projects HTTP API of a running worklog instance"""

    DEFAULT_URL = "http://localhost:8000"
    DEFAULT_TIMEOUT = 5

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        csrf_token: Optional[str] = None,
    ):
        configured = settings.configured
        self.base_url = (
            base_url
            or (configured and getattr(settings, "WORKLOG_API_URL", None))
            or self.DEFAULT_URL
        ).rstrip("/")
        self.timeout = timeout or (configured and getattr(settings, "WORKLOG_API_TIMEOUT", None)) or self.DEFAULT_TIMEOUT
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "X-Requested-With": "XMLHttpRequest",
        })
        if csrf_token:
            self.session.headers["X-CSRFToken"] = csrf_token

    def _url(self, path: str) -> str:
        return f"{self.base_url}/projects/{path.lstrip('/')}"

    def sort_tasks(self, project_ref, task_ids: Sequence[int]) -> Dict:
        """PATCH the new order; raises ReorderFailed on a non-2xx answer."""
        response = self.session.patch(
            self._url(f"{project_ref}/sort_tasks/"),
            json={"task_ids": list(task_ids)},
            timeout=self.timeout,
        )
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not response.ok:
            message = data.get("message") or data.get("detail") or f"HTTP {response.status_code}"
            raise ReorderFailed(message, status_code=response.status_code)
        return data

    def add_task_template(self) -> Dict:
        """Blank task row as the server names its fields."""
        response = self.session.get(self._url("add_task/"), timeout=self.timeout)
        response.raise_for_status()
        return response.json()["task"]


class OptimisticTaskList:
    """
    Local task order driven by drag-and-drop events.

    Drops are applied to ``local`` straight away; ``sync()`` sends the order
    to the server. If that fails, ``local`` goes back to the last order the
    server accepted and the failure is raised to the caller.
    """

    def __init__(self, project_ref, task_ids: Sequence[Hashable], client: ProjectsClient):
        self.project_ref = project_ref
        self.client = client
        self.confirmed: List[Hashable] = list(task_ids)
        self.local: List[Hashable] = list(task_ids)
        self.state = IDLE_STATE

    @property
    def dirty(self) -> bool:
        return self.local != self.confirmed

    def dispatch(self, event) -> bool:
        """Feed one UI event; True when the local order changed."""
        self.state, effect = transition(self.state, event)
        if effect is None:
            return False
        self.local = move_item(self.local, effect.dragged_id, effect.target_id, effect.placement)
        return True

    def drop(self, dragged_id, target_id, placement: str) -> bool:
        """Whole gesture in one call: start, hover, drop, end."""
        self.dispatch(DragStart(dragged_id))
        self.dispatch(DragOver(target_id, placement))
        changed = self.dispatch(Drop())
        self.dispatch(DragEnd())
        return changed

    def sync(self) -> List[Hashable]:
        if not self.dirty:
            return list(self.confirmed)

        order = list(self.local)
        try:
            self.client.sort_tasks(self.project_ref, order)
        except (requests.RequestException, ReorderFailed) as exc:
            logger.warning("[reorder] project=%s sync failed, reverting: %s", self.project_ref, exc)
            self.local = list(self.confirmed)
            status_code = getattr(exc, "status_code", None)
            raise ReorderFailed(str(exc), status_code=status_code) from exc

        self.confirmed = order
        logger.info("[reorder] project=%s synced %s tasks", self.project_ref, len(order))
        return list(order)
