# core/tests/test_middleware.py
"""Tests for the HTML error handling middleware."""
import pytest
from django.contrib.messages import get_messages
from django.contrib.messages.storage.fallback import FallbackStorage
from django.contrib.sessions.middleware import SessionMiddleware
from django.core.exceptions import ValidationError
from django.http import HttpResponse

from core.middleware import GlobalErrorMiddleware


@pytest.fixture
def middleware():
    return GlobalErrorMiddleware(lambda request: HttpResponse("ok"))


@pytest.fixture
def html_request(rf):
    def build(path="/account/update/"):
        request = rf.post(path)
        SessionMiddleware(lambda r: None).process_request(request)
        request._messages = FallbackStorage(request)
        return request
    return build


def test_passes_responses_through(middleware, rf):
    assert middleware(rf.get("/")).content == b"ok"


def test_validation_error_redirects_to_account(middleware, html_request, settings):
    settings.DEBUG = False
    request = html_request()

    response = middleware.process_exception(request, ValidationError("Email is invalid"))

    assert response.status_code == 302
    assert response.url == "/account/"
    assert [str(m) for m in get_messages(request)] == ["Email is invalid"]


def test_other_errors_redirect_home(middleware, html_request, settings):
    settings.DEBUG = False
    request = html_request()

    response = middleware.process_exception(request, RuntimeError("boom"))

    assert response.url == "/"
    assert [str(m) for m in get_messages(request)] == [
        "Something went wrong. Please try again."
    ]


def test_api_and_admin_paths_are_left_alone(middleware, html_request, settings):
    settings.DEBUG = False

    for path in ("/api/variants/", "/admin/products/", "/django-admin/"):
        assert middleware.process_exception(html_request(path), RuntimeError()) is None


def test_debug_keeps_django_error_page(middleware, html_request, settings):
    settings.DEBUG = True

    assert middleware.process_exception(html_request(), RuntimeError()) is None


def test_not_found_and_forbidden_keep_their_status(middleware, html_request, settings):
    from django.core.exceptions import PermissionDenied
    from django.http import Http404

    settings.DEBUG = False

    assert middleware.process_exception(html_request(), Http404()) is None
    assert middleware.process_exception(html_request(), PermissionDenied()) is None
