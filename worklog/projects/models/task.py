# ============================================
# projects/models/task.py
# ============================================
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models.signals import post_init

from projects.services.position_service import next_position


class Task(models.Model):
    project = models.ForeignKey(
        'Project',
        on_delete=models.CASCADE,
        related_name='tasks'
    )
    title = models.CharField(max_length=255)
    allotted_time = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)]
    )
    position = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'tasks'
        ordering = ['position', 'created_at']
        indexes = [
            models.Index(fields=['project', 'position'], name='tasks_project_position_idx'),
        ]

    def __str__(self):
        return f"{self.project_id} #{self.position} - {self.title}"

    def save(self, *args, **kwargs):
        # built against a project that had no pk yet: allocate now that it has one
        project = getattr(self, "project", None)
        if self.position is None and project is not None and project.pk is not None:
            self.position = next_position(project)
        super().save(*args, **kwargs)


def set_default_position(sender, instance, **kwargs):
    """
    New tasks of a saved project sort last unless a position was given.
    For an unsaved project the position stays None here and is filled in by
    ``Task.save`` once the project has been stored.
    """
    # rows loaded from the db never carry NULL; deferred fields are absent
    if instance.__dict__.get("position", 0) is not None:
        return
    project = instance.__dict__.get("project_id") and instance.project
    if project is None:
        return
    instance.position = next_position(project)


post_init.connect(set_default_position, sender=Task)
