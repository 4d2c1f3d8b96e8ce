# ============================================
# projects/models/project.py
# ============================================
from django.db import models
from django.utils.text import slugify

# collide with fixed routes under /projects/
RESERVED_SLUGS = {"new", "add_task"}


def unique_slug(name: str, *, exclude_pk=None) -> str:
    base_slug = slugify(name) or "project"
    if base_slug.isdigit():
        # bare numbers are read as ids by the project lookup
        base_slug = f"project-{base_slug}"
    slug = base_slug
    idx = 1
    qs = Project.objects.all()
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    while slug in RESERVED_SLUGS or qs.filter(slug=slug).exists():
        idx += 1
        slug = f"{base_slug}-{idx}"
    return slug


class Project(models.Model):
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    slug = models.SlugField(max_length=280, unique=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'projects'
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        # slug follows the name, and only the name
        if not self.slug or self._name_changed():
            self.slug = unique_slug(self.name, exclude_pk=self.pk)
            update_fields = kwargs.get("update_fields")
            if update_fields is not None and "slug" not in update_fields:
                kwargs["update_fields"] = list(update_fields) + ["slug"]
        super().save(*args, **kwargs)

    def _name_changed(self) -> bool:
        if self.pk is None:
            return False
        stored = Project.objects.filter(pk=self.pk).values_list("name", flat=True).first()
        return stored is not None and stored != self.name
