# views/utils.py
"""
drf-spectacular pieces shared by the project and task views.

    from .utils import (
        extend_schema, extend_schema_view, OpenApiExample, OpenApiResponse,
        FormErrorSerializer, StatusMessageSerializer,
        PROJECT_REF, list_params, std_errors,
    )
"""
from drf_spectacular.utils import (
    extend_schema, extend_schema_view,
    OpenApiParameter, OpenApiExample, OpenApiResponse, inline_serializer,
)
from drf_spectacular.types import OpenApiTypes
from rest_framework import serializers

# ---- Response bodies that are not backed by a model serializer
DetailSerializer = inline_serializer(
    name="Detail",
    fields={"detail": serializers.CharField()}
)

# sort_tasks and delete answer with {status, message}
StatusMessageSerializer = inline_serializer(
    name="StatusMessage",
    fields={
        "status": serializers.ChoiceField(choices=["success", "error"]),
        "message": serializers.CharField(),
    }
)

# 422 from create/update: the submission comes back untouched under "inputs"
FormErrorSerializer = inline_serializer(
    name="ProjectFormError",
    fields={
        "alert": serializers.CharField(),
        "errors": serializers.DictField(),
        "inputs": serializers.DictField(),
        "form": serializers.DictField(),
        "content_location": serializers.CharField(),
    }
)

# ---- Parameters

PROJECT_REF = OpenApiParameter(
    "ref", OpenApiTypes.STR, OpenApiParameter.PATH,
    description="Project id or slug",
)


def list_params():
    return [
        OpenApiParameter("q", OpenApiTypes.STR, OpenApiParameter.QUERY,
                         description="Case-insensitive name search; blank matches nothing"),
        OpenApiParameter("page", OpenApiTypes.INT, OpenApiParameter.QUERY, description="Page number"),
        OpenApiParameter("per_page", OpenApiTypes.INT, OpenApiParameter.QUERY, description="Page size"),
    ]


def std_errors(*codes):
    """Error responses for ``responses=``; defaults to auth + not found."""
    described = {
        401: "Not logged in",
        403: "Forbidden",
        404: "Project not found",
    }
    return {
        code: OpenApiResponse(DetailSerializer, description=described[code])
        for code in (codes or (401, 403, 404))
    }
