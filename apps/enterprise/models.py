# enterprise/models.py
"""Models for the businesses that supply and distribute products."""
from django.conf import settings
from django.db import models
from django.db.models import Q

from core.utils import unique_slug


class EnterpriseQuerySet(models.QuerySet):
    """QuerySet helpers for enterprise ownership."""

    def managed_by(self, user):
        """Enterprises the user may manage. Staff manage every enterprise."""
        if user is None or not user.is_authenticated:
            return self.none()
        if user.is_staff:
            return self.all()
        return self.filter(
            Q(owner=user) | Q(roles__user=user)
        ).distinct()

    def suppliers(self):
        return self.filter(is_primary_producer=True)


class Enterprise(models.Model):
    """A business acting as supplier and/or distributor."""
    SELLS_NONE = "none"
    SELLS_OWN = "own"
    SELLS_ANY = "any"

    SELLS_CHOICES = [
        (SELLS_NONE, "None"),
        (SELLS_OWN, "Own products"),
        (SELLS_ANY, "Any products"),
    ]

    name = models.CharField(max_length=255, unique=True)
    permalink = models.SlugField(max_length=255, unique=True, blank=True)
    description = models.TextField(blank=True)
    email = models.EmailField(blank=True)
    is_primary_producer = models.BooleanField(default=False)
    sells = models.CharField(
        max_length=10, choices=SELLS_CHOICES, default=SELLS_NONE
    )
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="owned_enterprises",
    )
    users = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="enterprise.EnterpriseRole",
        related_name="enterprises",
        blank=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = EnterpriseQuerySet.as_manager()

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return str(self.name)

    @property
    def is_distributor(self) -> bool:
        return self.sells != self.SELLS_NONE

    def save(self, *args, **kwargs):
        if not self.permalink:
            self.permalink = unique_slug(Enterprise, self.name, self)
        super().save(*args, **kwargs)


class EnterpriseRole(models.Model):
    """Grants a user management rights over an enterprise."""
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="enterprise_roles",
    )
    enterprise = models.ForeignKey(
        Enterprise,
        on_delete=models.CASCADE,
        related_name="roles",
    )
    receives_notifications = models.BooleanField(default=False)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["user", "enterprise"], name="unique_enterprise_role"
            )
        ]

    def __str__(self):
        return f"{self.user} manages {self.enterprise}"
