from .email import send_welcome_email  # noqa: F401
