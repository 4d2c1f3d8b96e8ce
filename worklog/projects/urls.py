# ============================================
# projects/urls.py
# ============================================
from django.urls import path
from projects.views.project_view import (
    AddTaskAPIView,
    ProjectDetailAPIView,
    ProjectEditAPIView,
    ProjectListCreateAPIView,
    ProjectNewAPIView,
)
from projects.views.task_view import SortTasksAPIView

app_name = 'projects'

urlpatterns = [
    # Projects
    path('', ProjectListCreateAPIView.as_view(), name='project-list-create'),
    path('new/', ProjectNewAPIView.as_view(), name='project-new'),
    path('add_task/', AddTaskAPIView.as_view(), name='project-add-task'),
    path('<str:ref>/', ProjectDetailAPIView.as_view(), name='project-detail'),
    path('<str:ref>/edit/', ProjectEditAPIView.as_view(), name='project-edit'),

    # Tasks
    path('<str:ref>/sort_tasks/', SortTasksAPIView.as_view(), name='project-sort-tasks'),
]
