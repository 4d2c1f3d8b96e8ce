# ============================================
# projects/views/project_view.py
# ============================================
from django.urls import reverse
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from projects.exceptions import NestedValidationError, TaskNotFound
from projects.pagination import ProjectPagination
from projects.selectors.project_selector import get_project, recent_projects, search_projects
from projects.serializers.form_serializer import blank_task_line, project_form
from projects.serializers.project_serializer import (
    ProjectListSerializer,
    ProjectReadSerializer,
    ProjectWriteSerializer,
)
from projects.services.project_service import create_project, delete_project, update_project
from projects.utils import unwrap_project_payload
from .utils import (
    extend_schema, extend_schema_view, OpenApiExample, OpenApiResponse,
    FormErrorSerializer, StatusMessageSerializer, PROJECT_REF, list_params, std_errors,
)

PROJECT_NOT_FOUND = {"detail": "Project not found"}


def _rejected(*, alert, payload, errors, content_location, project=None):
    """422 with the user's input echoed back untouched."""
    response = Response(
        {
            "alert": alert,
            "errors": errors,
            "inputs": payload,
            "form": project_form(project, data=payload, errors=errors),
            "content_location": content_location,
        },
        status=status.HTTP_422_UNPROCESSABLE_ENTITY,
    )
    response["Content-Location"] = content_location
    return response


def _write_fields(validated):
    fields = {k: validated[k] for k in ("name", "description") if k in validated}
    fields["tasks_attributes"] = validated.get("tasks_attributes") or {}
    return fields


# ==============================================================
# /projects/  -> GET list, POST create
# ==============================================================
@extend_schema_view(
    get=extend_schema(
        tags=["Project"],
        summary="List projects (most recent first)",
        parameters=list_params(),
        responses={200: ProjectListSerializer(many=True), **std_errors(401, 403)},
    ),
    post=extend_schema(
        tags=["Project"],
        summary="Create a project with its tasks",
        request=ProjectWriteSerializer,
        responses={
            201: OpenApiResponse(ProjectReadSerializer, description="Created"),
            422: OpenApiResponse(FormErrorSerializer, description="Validation failed"),
            **std_errors(404),
        },
        examples=[
            OpenApiExample(
                "Payload",
                value={
                    "name": "Website redesign",
                    "description": "Landing page + blog",
                    "tasks_attributes": {
                        "a1": {"title": "Wireframes", "allotted_time": "4"},
                        "b2": {"title": "Copy", "allotted_time": "2.5"},
                    },
                },
            )
        ],
    ),
)
class ProjectListCreateAPIView(APIView):

    def get_permissions(self):
        if self.request.method == "GET":
            return [permissions.IsAuthenticated()]
        return [permissions.AllowAny()]

    def get(self, request):
        q = request.query_params.get("q")
        projects = search_projects(q) if q is not None else recent_projects()

        paginator = ProjectPagination()
        page = paginator.paginate_queryset(projects, request, view=self)
        serializer = ProjectListSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    def post(self, request):
        payload = unwrap_project_payload(request.data)
        content_location = reverse("projects:project-new")
        alert = "There was an error creating your project"

        serializer = ProjectWriteSerializer(data=payload)
        if not serializer.is_valid():
            return _rejected(alert=alert, payload=payload, errors=serializer.errors,
                             content_location=content_location)

        fields = _write_fields(serializer.validated_data)
        try:
            project = create_project(
                name=fields.get("name", ""),
                description=fields.get("description") or "",
                tasks_attributes=fields["tasks_attributes"],
            )
        except NestedValidationError as exc:
            return _rejected(alert=alert, payload=payload, errors=exc.errors,
                             content_location=content_location)
        except TaskNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)

        return Response(
            {
                "notice": "Project created successfully",
                "redirect_to": reverse("projects:project-list-create"),
                "project": ProjectReadSerializer(project).data,
            },
            status=status.HTTP_201_CREATED,
        )


# ==============================================================
# /projects/new/  -> GET blank form
# ==============================================================
@extend_schema_view(
    get=extend_schema(
        tags=["Project"],
        summary="Blank project form with one empty task row",
        responses={200: OpenApiResponse(description="Form payload")},
    )
)
class ProjectNewAPIView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        return Response({"new_project_form": project_form(None)})


# ==============================================================
# /projects/add_task/  -> GET blank task row
# ==============================================================
@extend_schema_view(
    get=extend_schema(
        tags=["Project"],
        summary="Template for one new, unsaved task row",
        responses={200: OpenApiResponse(description="{'task': {...}}")},
    )
)
class AddTaskAPIView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        return Response({"task": blank_task_line()})


# ==============================================================
# /projects/<ref>/  -> GET, PUT, PATCH, DELETE
# ==============================================================
@extend_schema_view(
    get=extend_schema(
        tags=["Project"],
        summary="Project with its ordered tasks",
        parameters=[PROJECT_REF],
        responses={200: ProjectReadSerializer, **std_errors(404)},
    ),
    put=extend_schema(
        tags=["Project"],
        summary="Update project and apply task rows (create/update/_destroy)",
        parameters=[PROJECT_REF],
        request=ProjectWriteSerializer,
        responses={
            200: OpenApiResponse(ProjectReadSerializer),
            422: OpenApiResponse(FormErrorSerializer, description="Validation failed"),
            **std_errors(404),
        },
    ),
    patch=extend_schema(
        tags=["Project"],
        summary="Same as PUT",
        parameters=[PROJECT_REF],
        request=ProjectWriteSerializer,
        responses={200: OpenApiResponse(ProjectReadSerializer), **std_errors(404)},
    ),
    delete=extend_schema(
        tags=["Project"],
        summary="Delete project and all of its tasks",
        parameters=[PROJECT_REF],
        responses={200: OpenApiResponse(StatusMessageSerializer), **std_errors()},
    ),
)
class ProjectDetailAPIView(APIView):

    def get_permissions(self):
        if self.request.method == "DELETE":
            return [permissions.IsAuthenticated()]
        return [permissions.AllowAny()]

    def get(self, request, ref):
        project = get_project(ref, with_tasks=True)
        if not project:
            return Response(PROJECT_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(ProjectReadSerializer(project).data)

    def put(self, request, ref):
        project = get_project(ref)
        if not project:
            return Response(PROJECT_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)

        payload = unwrap_project_payload(request.data)
        content_location = reverse("projects:project-edit", kwargs={"ref": project.slug})
        alert = "There was an error updating your project"

        serializer = ProjectWriteSerializer(data=payload)
        if not serializer.is_valid():
            return _rejected(alert=alert, payload=payload, errors=serializer.errors,
                             content_location=content_location, project=project)

        try:
            project = update_project(project=project, **_write_fields(serializer.validated_data))
        except NestedValidationError as exc:
            return _rejected(alert=alert, payload=payload, errors=exc.errors,
                             content_location=content_location, project=project)
        except TaskNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)

        return Response(
            {
                "notice": "Project updated successfully",
                "redirect_to": reverse("projects:project-detail", kwargs={"ref": project.slug}),
                "project": ProjectReadSerializer(project).data,
            }
        )

    def patch(self, request, ref):
        return self.put(request, ref)

    def delete(self, request, ref):
        project = get_project(ref)
        if not project:
            return Response(PROJECT_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)

        delete_project(project=project)
        return Response({"status": "success", "message": "Project deleted successfully"})


# ==============================================================
# /projects/<ref>/edit/  -> GET form for an existing project
# ==============================================================
@extend_schema_view(
    get=extend_schema(
        tags=["Project"],
        summary="Edit form payload for an existing project",
        parameters=[PROJECT_REF],
        responses={200: OpenApiResponse(description="Form payload"), **std_errors(404)},
    )
)
class ProjectEditAPIView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, ref):
        project = get_project(ref, with_tasks=True)
        if not project:
            return Response(PROJECT_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response({
            "edit_project_form": project_form(project),
            "project": ProjectReadSerializer(project).data,
        })
