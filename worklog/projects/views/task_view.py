# ============================================
# projects/views/task_view.py
# ============================================
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from projects.exceptions import ReorderError, TaskNotFound
from projects.selectors.project_selector import get_project
from projects.serializers.task_serializer import ReorderSerializer, TaskReadSerializer
from projects.services.reorder_service import reorder_tasks
from .utils import (
    extend_schema, extend_schema_view, OpenApiExample, OpenApiResponse,
    StatusMessageSerializer, PROJECT_REF, std_errors,
)


def _error(message, code, **extra):
    return Response({"status": "error", "message": message, **extra}, status=code)


@extend_schema_view(
    patch=extend_schema(
        tags=["Task"],
        summary="Reorder tasks: task_ids[i] gets position i",
        parameters=[PROJECT_REF],
        request=ReorderSerializer,
        responses={
            200: OpenApiResponse(TaskReadSerializer(many=True), description="{'status': 'success', 'tasks': [...]}"),
            422: OpenApiResponse(StatusMessageSerializer, description="No task IDs provided"),
            **std_errors(404),
        },
        examples=[OpenApiExample("Payload", value={"task_ids": [3, 1, 2]})],
    )
)
class SortTasksAPIView(APIView):
    """
    PATCH: position-only write; other task fields are not validated.
    Tasks not listed keep their position.
    """
    permission_classes = [permissions.AllowAny]

    def patch(self, request, ref):
        project = get_project(ref)
        if not project:
            return _error("Project not found", status.HTTP_404_NOT_FOUND)

        serializer = ReorderSerializer(data=request.data)
        if not serializer.is_valid():
            return _error("Invalid task IDs", status.HTTP_422_UNPROCESSABLE_ENTITY, errors=serializer.errors)

        try:
            tasks = reorder_tasks(project=project, task_ids=serializer.validated_data["task_ids"])
        except ReorderError as exc:
            return _error(exc.messages[0], status.HTTP_422_UNPROCESSABLE_ENTITY)
        except TaskNotFound as exc:
            return _error(str(exc), status.HTTP_404_NOT_FOUND)

        return Response({"status": "success", "tasks": TaskReadSerializer(tasks, many=True).data})
