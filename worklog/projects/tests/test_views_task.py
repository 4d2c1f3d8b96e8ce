import pytest
from django.urls import reverse

from projects.models import Project, Task
from projects.selectors.task_selector import ordered_task_ids


def sort_url(ref):
    return reverse("projects:project-sort-tasks", kwargs={"ref": ref})


@pytest.mark.django_db
def test_sort_tasks_success(api_client, project_with_tasks):
    project = project_with_tasks["project"]
    t1, t2, t3 = project_with_tasks["tasks"]

    res = api_client.patch(sort_url(project.slug), {"task_ids": [t3.pk, t1.pk, t2.pk]}, format="json")

    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "success"
    assert [t["id"] for t in body["tasks"]] == [t3.pk, t1.pk, t2.pk]
    assert [t["position"] for t in body["tasks"]] == [0, 1, 2]
    assert ordered_task_ids(project.pk) == [t3.pk, t1.pk, t2.pk]


@pytest.mark.django_db
def test_sort_tasks_empty_is_422(api_client, project_with_tasks):
    project = project_with_tasks["project"]

    res = api_client.patch(sort_url(project.pk), {"task_ids": []}, format="json")

    assert res.status_code == 422
    assert res.json() == {"status": "error", "message": "No task IDs provided"}


@pytest.mark.django_db
def test_sort_tasks_missing_key_is_422(api_client, project_with_tasks):
    project = project_with_tasks["project"]
    res = api_client.patch(sort_url(project.pk), {}, format="json")
    assert res.status_code == 422
    assert res.json()["message"] == "No task IDs provided"


@pytest.mark.django_db
def test_sort_tasks_non_integer_ids_is_422(api_client, project_with_tasks):
    project = project_with_tasks["project"]
    res = api_client.patch(sort_url(project.pk), {"task_ids": ["abc"]}, format="json")
    assert res.status_code == 422
    assert res.json()["message"] == "Invalid task IDs"


@pytest.mark.django_db
def test_sort_tasks_foreign_ids_is_404_and_no_writes(api_client, project_with_tasks):
    project = project_with_tasks["project"]
    t1, t2, t3 = project_with_tasks["tasks"]
    stranger = Task.objects.create(project=Project.objects.create(name="Other"), title="x")

    res = api_client.patch(sort_url(project.slug), {"task_ids": [stranger.pk, t1.pk]}, format="json")

    assert res.status_code == 404
    assert res.json()["status"] == "error"
    assert ordered_task_ids(project.pk) == [t1.pk, t2.pk, t3.pk]


@pytest.mark.django_db
def test_sort_tasks_unknown_project_is_404(api_client):
    res = api_client.patch(sort_url("missing"), {"task_ids": [1]}, format="json")
    assert res.status_code == 404
    assert res.json() == {"status": "error", "message": "Project not found"}
