# ============================================
# projects/serializers/task_serializer.py
# ============================================
from rest_framework import serializers
from projects.models import Task


class TaskReadSerializer(serializers.ModelSerializer):
    class Meta:
        model = Task
        fields = [
            'id', 'title', 'allotted_time', 'position',
            'created_at', 'updated_at'
        ]
        read_only_fields = fields


class TaskLineItemSerializer(serializers.Serializer):
    """
    One row of the nested task form. Only the shape is checked here;
    title/allotted_time rules live on the model so every row reports
    its errors in the same pass.
    """
    id = serializers.IntegerField(required=False, allow_null=True)
    title = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=False)
    allotted_time = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    position = serializers.IntegerField(required=False, allow_null=True)
    _destroy = serializers.BooleanField(required=False, default=False)


class ReorderSerializer(serializers.Serializer):
    task_ids = serializers.ListField(
        child=serializers.IntegerField(),
        required=False,
        allow_empty=True,
        default=list
    )
