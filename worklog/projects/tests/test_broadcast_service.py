from unittest import mock

import pytest

from projects.exceptions import NestedValidationError
from projects.services import broadcast_service
from projects.services.broadcast_service import broadcast_project_change, stream_name
from projects.services.project_service import create_project, delete_project, update_project
from projects.services.reorder_service import reorder_tasks
from projects.signals import project_changed


@pytest.fixture
def received():
    events = []

    def receiver(sender, **kwargs):
        events.append(kwargs)

    project_changed.connect(receiver, weak=False)
    yield events
    project_changed.disconnect(receiver)


def test_stream_name_accepts_id_or_instance(project):
    assert stream_name(project.pk) == f"projects:{project.pk}"
    assert stream_name(project) == f"projects:{project.pk}"


@pytest.mark.django_db
def test_create_broadcasts_after_commit(received, on_commit):
    with on_commit(execute=True) as callbacks:
        project = create_project(name="Podcast", tasks_attributes={"a": {"title": "Intro"}})

    assert len(callbacks) == 1
    assert received[0]["project_id"] == project.pk
    assert received[0]["stream"] == f"projects:{project.pk}"
    assert received[0]["action"] == "created"


@pytest.mark.django_db
def test_nothing_sent_before_commit(received, on_commit):
    with on_commit() as callbacks:
        create_project(name="Podcast")
    assert len(callbacks) == 1
    assert received == []


@pytest.mark.django_db
def test_rejected_submission_broadcasts_nothing(project, received, on_commit):
    with on_commit(execute=True) as callbacks:
        with pytest.raises(NestedValidationError):
            update_project(project=project, tasks_attributes={"a": {"title": ""}})
    assert callbacks == []
    assert received == []


@pytest.mark.django_db
def test_reorder_and_delete_broadcast(project_with_tasks, received, on_commit):
    project = project_with_tasks["project"]
    t1, t2, t3 = project_with_tasks["tasks"]
    project_id = project.pk

    with on_commit(execute=True):
        reorder_tasks(project=project, task_ids=[t3.pk, t2.pk, t1.pk])
    with on_commit(execute=True):
        delete_project(project=project)

    assert [e["action"] for e in received] == ["reordered", "destroyed"]
    assert received[0]["payload"] == {"task_ids": [t3.pk, t2.pk, t1.pk]}
    assert received[1]["project_id"] == project_id


@pytest.mark.django_db
def test_failing_receiver_is_logged_not_raised(project, on_commit):
    def broken(sender, **kwargs):
        raise RuntimeError("socket closed")

    project_changed.connect(broken, weak=False)
    try:
        with mock.patch.object(broadcast_service.log, "error") as log_error:
            with on_commit(execute=True):
                broadcast_project_change(project, "updated")
    finally:
        project_changed.disconnect(broken)

    log_error.assert_called_once()
    assert "socket closed" in str(log_error.call_args)
