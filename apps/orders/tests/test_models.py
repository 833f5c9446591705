# apps/orders/tests/test_models.py
"""Tests for orders and line items."""
import re
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from apps.orders.models import Order, generate_order_number
from apps.orders.tests.factories import (
    CompletedOrderWithTotalsFactory,
    LineItemFactory,
    OrderFactory,
    UserFactory,
    VariantFactory,
)


@pytest.mark.django_db
class TestOrder:

    def test_number_is_generated(self):
        order = OrderFactory()

        assert re.fullmatch(r"R\d{9}", order.number)

    def test_generated_numbers_are_unique(self):
        numbers = {generate_order_number() for _ in range(20)}

        assert len(numbers) == 20

    def test_email_defaults_to_user_email(self):
        user = UserFactory(email="buyer@example.com")

        order = OrderFactory(user=user, email="")

        assert order.email == "buyer@example.com"

    def test_complete_state_requires_completed_at(self):
        with pytest.raises(ValidationError) as exc:
            OrderFactory(state=Order.COMPLETE)

        assert "completed_at" in exc.value.message_dict

    def test_complete_and_incomplete_querysets(self):
        done = CompletedOrderWithTotalsFactory()
        cart = OrderFactory()

        assert list(Order.objects.complete()) == [done]
        assert list(Order.objects.incomplete()) == [cart]

    def test_update_totals(self):
        order = OrderFactory()
        LineItemFactory(order=order, price=Decimal("2.50"), quantity=3)
        LineItemFactory(order=order, price=Decimal("1.00"), quantity=1)

        assert order.update_totals() == Decimal("8.50")
        order.refresh_from_db()
        assert order.item_total == Decimal("8.50")

    def test_totals_fit_the_money_columns(self):
        order = OrderFactory()
        LineItemFactory(order=order, price=Decimal("0.10"), quantity=3)
        LineItemFactory(order=order, price=Decimal("19.99"), quantity=7)

        order.finalize()

        order.refresh_from_db()
        assert order.item_total == Decimal("140.23")
        assert order.total == Decimal("140.23")
        assert order.total.as_tuple().exponent == -2

    def test_finalize_marks_order_complete(self):
        order = CompletedOrderWithTotalsFactory()

        assert order.state == Order.COMPLETE
        assert order.is_complete
        assert order.total == order.line_items.get().price


@pytest.mark.django_db
class TestLineItem:

    def test_price_is_taken_from_variant(self):
        variant = VariantFactory(price=Decimal("4.75"))

        item = LineItemFactory(variant=variant, price=None, quantity=2)

        assert item.price == Decimal("4.75")
        assert item.total_price() == Decimal("9.50")

    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            LineItemFactory(quantity=0)
