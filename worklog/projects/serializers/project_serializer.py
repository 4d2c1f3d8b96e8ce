# ============================================
# projects/serializers/project_serializer.py
# ============================================
from django.urls import reverse
from rest_framework import serializers

from projects.models import Project
from projects.serializers.task_serializer import TaskLineItemSerializer, TaskReadSerializer
from projects.services.broadcast_service import stream_name


class ProjectWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    tasks_attributes = serializers.DictField(
        child=TaskLineItemSerializer(),
        required=False,
        default=dict
    )


class ProjectListSerializer(serializers.ModelSerializer):
    task_count = serializers.SerializerMethodField()

    class Meta:
        model = Project
        fields = [
            'id', 'name', 'description', 'slug',
            'task_count', 'created_at', 'updated_at'
        ]

    def get_task_count(self, obj):
        return obj.tasks.count()


class ProjectReadSerializer(serializers.ModelSerializer):
    """Project page payload: ordered tasks plus the links and stream the page needs."""
    tasks = TaskReadSerializer(many=True, read_only=True)
    edit_path = serializers.SerializerMethodField()
    delete_path = serializers.SerializerMethodField()
    back_path = serializers.SerializerMethodField()
    stream_from_project = serializers.SerializerMethodField()

    class Meta:
        model = Project
        fields = [
            'id', 'name', 'description', 'slug',
            'created_at', 'updated_at', 'tasks',
            'edit_path', 'delete_path', 'back_path', 'stream_from_project'
        ]

    def get_edit_path(self, obj):
        return reverse('projects:project-edit', kwargs={'ref': obj.slug})

    def get_delete_path(self, obj):
        return reverse('projects:project-detail', kwargs={'ref': obj.slug})

    def get_back_path(self, obj):
        return reverse('projects:project-list-create')

    def get_stream_from_project(self, obj):
        return stream_name(obj)
