import pytest
from decimal import Decimal
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from projects.models import Project, Task

User = get_user_model()


@pytest.fixture
def user(db):
    return User.objects.create_user(username="freelancer", password="pass12345")


@pytest.fixture
def api_client(db):
    return APIClient()


@pytest.fixture
def auth_client(user):
    c = APIClient()
    c.force_authenticate(user=user)
    return c


@pytest.fixture
def project(db):
    return Project.objects.create(name="Website Redesign", description="Landing + blog")


@pytest.fixture
def project_with_tasks(project):
    # positions 0, 1, 2 in creation order
    t1 = Task.objects.create(project=project, title="Wireframes", allotted_time=Decimal("4"))
    t2 = Task.objects.create(project=project, title="Copy", allotted_time=Decimal("2.5"))
    t3 = Task.objects.create(project=project, title="Build", allotted_time=Decimal("10"))
    return {"project": project, "tasks": [t1, t2, t3]}


@pytest.fixture
def on_commit(django_capture_on_commit_callbacks):
    return django_capture_on_commit_callbacks
