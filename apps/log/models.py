# log/models.py
"""Models for logging catalog, login and email events."""
from django.db import models
from django.conf import settings


class EmailLog(models.Model):
    """Model to log sent emails so each type goes out once per user."""
    WELCOME = "welcome"
    PASSWORD_RESET = "password_reset"

    EMAIL_TYPE_CHOICES = [
        (WELCOME, "Welcome"),
        (PASSWORD_RESET, "Password Reset"),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    email_type = models.CharField(max_length=50, choices=EMAIL_TYPE_CHOICES)
    sent_at = models.DateTimeField(auto_now_add=True)
    message_id = models.CharField(max_length=255, blank=True, null=True)

    class Meta:
        app_label = 'log'
        constraints = [
            models.UniqueConstraint(
                fields=["user", "email_type"], name="unique_email_per_type"
            )
        ]

    def __str__(self):
        return f"{self.email_type} -> {self.user}"


class BaseLog(models.Model):
    """Abstract base log model for catalog events."""
    DEBUG = 'DEBUG'
    INFO = 'INFO'
    WARNING = 'WARNING'
    ERROR = 'ERROR'

    LOG_TYPE_CHOICES = [
        (DEBUG, 'Debug'),
        (INFO, 'Info'),
        (WARNING, 'Warning'),
        (ERROR, 'Error'),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL
    )
    message = models.TextField()
    log_type = models.CharField(
        max_length=10, choices=LOG_TYPE_CHOICES, default=INFO
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Meta options for the log model."""
        abstract = True
        ordering = ["-created_at"]

    def __str__(self):
        return f"[{self.log_type}]: {self.message[:50]}"


class ProductLog(BaseLog):
    """
    Log model for tracking product and variant changes made by enterprise
    users and administrators.
    """
    CREATED = "created"
    UPDATED = "updated"
    BULK_UPDATED = "bulk_updated"
    VARIANT_DELETED = "variant_deleted"
    VARIANT_DELETE_REFUSED = "variant_delete_refused"
    ACCESS_DENIED = "access_denied"

    EVENT_CHOICES = [
        (CREATED, "Created"),
        (UPDATED, "Updated"),
        (BULK_UPDATED, "Bulk updated"),
        (VARIANT_DELETED, "Variant deleted"),
        (VARIANT_DELETE_REFUSED, "Variant delete refused"),
        (ACCESS_DENIED, "Access denied"),
    ]

    event = models.CharField(max_length=30, choices=EVENT_CHOICES)
    enterprise = models.ForeignKey(
        "enterprise.Enterprise",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="product_logs"
    )
    product = models.ForeignKey(
        "catalog.Product",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="logs"
    )
    variant = models.ForeignKey(
        "catalog.Variant",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="logs"
    )

    def __str__(self):
        target = f"Product {self.product_id}" if self.product_id else "Catalog"
        return f"{target} {self.event} [{self.log_type}]: {self.message[:50]}"


class UserLoginLog(models.Model):
    """Tracks logins, logouts and failed login attempts."""
    LOGIN = "login"
    LOGOUT = "logout"
    FAILED_LOGIN = "failed_login"

    ACTION_CHOICES = [
        (LOGIN, "Login"),
        (LOGOUT, "Logout"),
        (FAILED_LOGIN, "Failed login"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="login_logs"
    )
    username_attempted = models.CharField(max_length=150, blank=True)
    action = models.CharField(max_length=20, choices=ACTION_CHOICES)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.CharField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        who = self.user or self.username_attempted or "anonymous"
        return f"{who} {self.action} at {self.created_at}"
