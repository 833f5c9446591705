# orders/models.py
"""Customer orders placed with distributor enterprises."""
# Standard library imports
from decimal import Decimal
import logging
import secrets
# Django imports
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.db.models import DecimalField, ExpressionWrapper, F, Sum
from django.utils import timezone

logger = logging.getLogger(__name__)

NUMBER_DIGITS = 9
CENT = Decimal("0.01")


def generate_order_number() -> str:
    """Random "R" + 9 digit number not used by any order yet."""
    while True:
        number = "R" + "".join(
            str(secrets.randbelow(10)) for _ in range(NUMBER_DIGITS)
        )
        if not Order.objects.filter(number=number).exists():
            return number


class OrderQuerySet(models.QuerySet):

    def complete(self):
        return self.filter(completed_at__isnull=False)

    def incomplete(self):
        return self.filter(completed_at__isnull=True)


class Order(models.Model):
    """An order of variants from one distributor."""
    CART = "cart"
    ADDRESS = "address"
    DELIVERY = "delivery"
    PAYMENT = "payment"
    CONFIRMATION = "confirmation"
    COMPLETE = "complete"
    CANCELED = "canceled"
    RETURNED = "returned"

    STATE_CHOICES = [
        (CART, "Cart"),
        (ADDRESS, "Address"),
        (DELIVERY, "Delivery"),
        (PAYMENT, "Payment"),
        (CONFIRMATION, "Confirmation"),
        (COMPLETE, "Complete"),
        (CANCELED, "Canceled"),
        (RETURNED, "Returned"),
    ]

    number = models.CharField(max_length=15, unique=True, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="orders",
    )
    email = models.EmailField(blank=True)
    distributor = models.ForeignKey(
        "enterprise.Enterprise",
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="distributed_orders",
    )
    state = models.CharField(max_length=20, choices=STATE_CHOICES, default=CART)
    item_total = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    total = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    completed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = OrderQuerySet.as_manager()

    class Meta:
        ordering = ["-completed_at", "-created_at"]

    def __str__(self) -> str:
        return str(self.number)

    @property
    def is_complete(self) -> bool:
        return self.completed_at is not None

    def clean(self):
        super().clean()
        if self.state == self.COMPLETE and self.completed_at is None:
            raise ValidationError({"completed_at": "is required for complete orders"})

    def save(self, *args, **kwargs):
        if not self.number:
            self.number = generate_order_number()
        if not self.email and self.user_id:
            self.email = self.user.email
        self.full_clean()
        super().save(*args, **kwargs)

    def update_totals(self):
        """Recompute item_total and total from the line items."""
        item_total = self.line_items.aggregate(
            total=Sum(
                ExpressionWrapper(
                    F("price") * F("quantity"),
                    output_field=DecimalField(max_digits=10, decimal_places=2),
                )
            )
        )["total"] or Decimal("0.00")
        item_total = Decimal(item_total).quantize(CENT)
        self.item_total = item_total
        self.total = item_total
        self.save(update_fields=["item_total", "total", "updated_at"])
        return self.total

    def finalize(self):
        """Mark the order complete."""
        with transaction.atomic():
            self.state = self.COMPLETE
            self.completed_at = timezone.now()
            self.save()
            self.update_totals()
        logger.info("Order %s completed, total %s", self.number, self.total)


class LineItem(models.Model):
    """A variant bought within an order."""
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="line_items")
    variant = models.ForeignKey(
        "catalog.Variant", on_delete=models.PROTECT, related_name="line_items"
    )
    quantity = models.PositiveIntegerField(default=1)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.quantity} x {self.variant}"

    def total_price(self) -> Decimal:
        return self.quantity * self.price

    def clean(self):
        super().clean()
        if self.quantity < 1:
            raise ValidationError({"quantity": "must be at least 1"})

    def save(self, *args, **kwargs):
        # Price is frozen from the variant when the item is first added
        if self.price is None and self.variant_id:
            self.price = self.variant.price
        self.full_clean()
        super().save(*args, **kwargs)
