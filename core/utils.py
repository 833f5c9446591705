"""Helpers shared by the apps' models."""
from django.utils.text import slugify


def unique_slug(model, value, instance=None, field="permalink"):
    """Slugify value and add a numeric suffix until it is unique for model."""
    base = slugify(value) or model._meta.model_name
    candidate = base
    suffix = 1
    qs = model._base_manager.all()
    if instance is not None and instance.pk:
        qs = qs.exclude(pk=instance.pk)
    while qs.filter(**{field: candidate}).exists():
        suffix += 1
        candidate = f"{base}-{suffix}"
    return candidate
