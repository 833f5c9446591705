# core/middleware.py
import logging
from django.conf import settings
from django.core.exceptions import PermissionDenied, ValidationError
from django.contrib import messages
from django.http import Http404
from django.shortcuts import redirect

logger = logging.getLogger("custom_validation")

PASSTHROUGH_PREFIXES = ("/admin/", "/api/", "/django-admin/")
PASSTHROUGH_EXCEPTIONS = (Http404, PermissionDenied)


class GlobalErrorMiddleware:
    """
    Middleware that unifies error handling for HTML pages:
    - ValidationError → flash message + redirect to the account page
    - Other unhandled exceptions:
        - DEBUG=True → Django default error page
        - DEBUG=False → log + redirect home
    Admin and API paths keep their own error handling, as do 404 and 403.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if settings.DEBUG or request.path.startswith(PASSTHROUGH_PREFIXES):
            return None
        if isinstance(exception, PASSTHROUGH_EXCEPTIONS):
            return None

        if isinstance(exception, ValidationError):
            self.handle_validation_error(request, exception)
            messages.error(request, "; ".join(exception.messages))
            return redirect("account")

        logger.exception(
            "Unhandled exception on path=%s", request.path, exc_info=exception
        )
        messages.error(request, "Something went wrong. Please try again.")
        return redirect("home")

    def handle_validation_error(self, request, exception):
        user = getattr(request, "user", None)
        logger.warning(
            "ValidationError on path=%s, user=%s, error=%s",
            request.path,
            getattr(user, "username", None) or "Anonymous",
            exception,
        )
