# apps/log/tests/test_signals.py
"""Tests for login tracking and product event logging."""
import pytest
from django.contrib.auth import authenticate
from django.urls import reverse

from apps.log.models import ProductLog, UserLoginLog
from apps.log.signals import ProductLogger, get_client_ip
from apps.orders.tests.factories import ProductFactory, UserFactory, VariantFactory


@pytest.mark.django_db
class TestLoginSignals:

    def test_successful_login_is_logged(self, client):
        user = UserFactory()

        client.post(
            reverse("login"),
            {"username": user.username, "password": "password123"},
            HTTP_USER_AGENT="pytest-browser",
            REMOTE_ADDR="10.0.0.7",
        )

        log = UserLoginLog.objects.get(action=UserLoginLog.LOGIN)
        assert log.user == user
        assert log.ip_address == "10.0.0.7"
        assert log.user_agent == "pytest-browser"

    def test_logout_is_logged(self, client):
        user = UserFactory()
        client.force_login(user)

        client.post(reverse("logout"))

        assert UserLoginLog.objects.filter(user=user, action=UserLoginLog.LOGOUT).exists()

    def test_failed_login_records_attempted_username(self):
        authenticate(username="intruder", password="wrong")

        log = UserLoginLog.objects.get(action=UserLoginLog.FAILED_LOGIN)
        assert log.user is None
        assert log.username_attempted == "intruder"

    def test_forwarded_ip_wins(self, rf):
        request = rf.get("/", HTTP_X_FORWARDED_FOR="203.0.113.5, 10.0.0.1")

        assert get_client_ip(request) == "203.0.113.5"


@pytest.mark.django_db
class TestProductLogger:

    def test_variant_log_fills_product_and_enterprise(self):
        user = UserFactory()
        variant = VariantFactory()

        log = ProductLogger.info(ProductLog.UPDATED, "Price changed", variant=variant, user=user)

        assert log.product == variant.product
        assert log.enterprise == variant.product.supplier
        assert log.log_type == ProductLog.INFO
        assert log.user == user

    def test_warning_level(self):
        product = ProductFactory()

        log = ProductLogger.warning(ProductLog.ACCESS_DENIED, "Denied", product=product)

        assert log.log_type == ProductLog.WARNING
        assert log.variant is None

    def test_anonymous_user_is_not_stored(self):
        from django.contrib.auth.models import AnonymousUser

        log = ProductLogger.info(
            ProductLog.UPDATED, "Touched", product=ProductFactory(), user=AnonymousUser()
        )

        assert log.user is None
