from unittest import mock

import pytest
import requests

from projects.clients.drag_drop import ABOVE, BELOW, DragOver, DragStart, Drop
from projects.clients.reorder_client import OptimisticTaskList, ProjectsClient, ReorderFailed

BASE = "http://worklog.test"


def _response(status_code=200, body=None):
    res = mock.Mock(status_code=status_code, ok=200 <= status_code < 300)
    res.json.return_value = body if body is not None else {}
    return res


@pytest.fixture
def session():
    s = requests.Session()
    s.patch = mock.Mock()
    s.get = mock.Mock()
    return s


@pytest.fixture
def projects_client(session):
    return ProjectsClient(BASE, session=session, csrf_token="tok")


def test_sort_tasks_sends_patch(projects_client, session):
    session.patch.return_value = _response(200, {"status": "success", "tasks": []})

    data = projects_client.sort_tasks("website-redesign", [3, 1, 2])

    assert data["status"] == "success"
    session.patch.assert_called_once_with(
        f"{BASE}/projects/website-redesign/sort_tasks/",
        json={"task_ids": [3, 1, 2]},
        timeout=projects_client.timeout,
    )
    assert session.headers["X-CSRFToken"] == "tok"


def test_sort_tasks_error_carries_server_message(projects_client, session):
    session.patch.return_value = _response(422, {"status": "error", "message": "No task IDs provided"})

    with pytest.raises(ReorderFailed) as exc:
        projects_client.sort_tasks(1, [])
    assert str(exc.value) == "No task IDs provided"
    assert exc.value.status_code == 422


def test_add_task_template(projects_client, session):
    session.get.return_value = _response(200, {"task": {"key": "abc"}})
    session.get.return_value.raise_for_status = mock.Mock()
    assert projects_client.add_task_template() == {"key": "abc"}


def test_drop_applies_locally_before_sync(projects_client, session):
    tasks = OptimisticTaskList(1, ["A", "B", "C", "D"], projects_client)

    assert tasks.drop("D", "B", ABOVE) is True
    assert tasks.local == ["A", "D", "B", "C"]
    assert tasks.confirmed == ["A", "B", "C", "D"]
    assert tasks.dirty
    session.patch.assert_not_called()


def test_sync_success_confirms_order(projects_client, session):
    session.patch.return_value = _response(200, {"status": "success"})
    tasks = OptimisticTaskList(1, ["A", "B", "C", "D"], projects_client)
    tasks.drop("D", "B", BELOW)

    assert tasks.sync() == ["A", "B", "D", "C"]
    assert tasks.confirmed == ["A", "B", "D", "C"]
    assert not tasks.dirty


def test_sync_failure_reverts_to_confirmed(projects_client, session):
    session.patch.return_value = _response(404, {"status": "error", "message": "Task not found: 9"})
    tasks = OptimisticTaskList(1, ["A", "B", "C"], projects_client)
    tasks.drop("C", "A", ABOVE)

    with pytest.raises(ReorderFailed) as exc:
        tasks.sync()

    assert exc.value.status_code == 404
    assert tasks.local == ["A", "B", "C"]
    assert not tasks.dirty


def test_sync_network_error_reverts(projects_client, session):
    session.patch.side_effect = requests.ConnectionError("down")
    tasks = OptimisticTaskList(1, ["A", "B"], projects_client)
    tasks.drop("B", "A", ABOVE)

    with pytest.raises(ReorderFailed):
        tasks.sync()
    assert tasks.local == ["A", "B"]


def test_sync_without_changes_makes_no_request(projects_client, session):
    tasks = OptimisticTaskList(1, ["A", "B"], projects_client)
    assert tasks.sync() == ["A", "B"]
    session.patch.assert_not_called()


def test_dispatch_reports_only_real_moves(projects_client):
    tasks = OptimisticTaskList(1, ["A", "B"], projects_client)
    assert tasks.dispatch(DragStart("A")) is False
    assert tasks.dispatch(DragOver("A", BELOW)) is False
    assert tasks.dispatch(Drop()) is False
    assert tasks.local == ["A", "B"]
