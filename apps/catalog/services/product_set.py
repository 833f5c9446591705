"""
Bulk product editing.

A ProductSet receives the rows posted by the bulk product editor, one dict
per product, and applies them in a single transaction: either every row is
saved or none is.
"""
import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction

from apps.catalog.models import Product, Variant
from apps.log.models import ProductLog
from apps.log.signals import ProductLogger

logger = logging.getLogger(__name__)

PRODUCT_ATTRIBUTES = (
    "name",
    "description",
    "variant_unit",
    "variant_unit_scale",
    "variant_unit_name",
    "available_on",
    "primary_taxon_id",
    "supplier_id",
)

MASTER_ATTRIBUTES = (
    "sku",
    "price",
    "on_hand",
    "on_demand",
    "unit_value",
    "unit_description",
)

VARIANT_ATTRIBUTES = (
    "sku",
    "price",
    "cost_price",
    "on_hand",
    "on_demand",
    "unit_value",
    "unit_description",
    "display_name",
    "display_as",
)


def assign_attributes(instance, attributes, allowed):
    """Copy allowed keys onto instance. Blank strings clear nullable fields."""
    changed = False
    for name in allowed:
        if name not in attributes:
            continue
        value = attributes[name]
        field = instance._meta.get_field(name[:-3] if name.endswith("_id") else name)
        if value == "" and field.null:
            value = None
        setattr(instance, name, value)
        changed = True
    return changed


def error_messages(label, error):
    """Flatten a ValidationError into "label: field message" strings."""
    if hasattr(error, "error_dict"):
        return [
            f"{label}: {field} {message}" if field != "__all__" else f"{label}: {message}"
            for field, messages in error.message_dict.items()
            for message in messages
        ]
    return [f"{label}: {message}" for message in error.messages]


def validate_product_variants(product):
    """Unit changes on the product may invalidate existing variants."""
    errors = []
    for variant in product.variants_including_master.all():
        try:
            variant.full_clean()
        except ValidationError as e:
            errors.extend(error_messages(f"Variant {variant.pk}", e))
    if errors:
        raise ValidationError(errors)


class ProductSet:
    """Applies bulk edits to a collection of products."""

    def __init__(self, collection_attributes, user=None):
        if isinstance(collection_attributes, dict):
            try:
                keys = sorted(collection_attributes, key=int)
            except (TypeError, ValueError):
                raise ValidationError(
                    {"products": ["rows must be a list or keyed by index"]}
                )
            collection_attributes = [collection_attributes[key] for key in keys]
        self.collection_attributes = list(collection_attributes or [])
        self.user = user
        self.errors = []
        self._collection = None

    @property
    def collection(self):
        """Products named by the posted rows, keyed by id."""
        if self._collection is None:
            ids = []
            for attributes in self.collection_attributes:
                try:
                    ids.append(int(attributes["id"]))
                except (KeyError, TypeError, ValueError):
                    raise Product.DoesNotExist("Every product row needs an id")
            products = Product.objects.select_related("supplier").in_bulk(ids)
            missing = set(ids) - set(products)
            if missing:
                raise Product.DoesNotExist(
                    f"Products not found: {sorted(missing)}"
                )
            self._collection = products
        return self._collection

    def authorize(self, permissions):
        """
        Raise PermissionDenied unless every row may be applied, or
        ValidationError when a supplier id is malformed.
        """
        from apps.enterprise.models import Enterprise

        for product in self.collection.values():
            if not permissions.can_manage_product(product):
                ProductLogger.warning(
                    ProductLog.ACCESS_DENIED,
                    f"Bulk update of '{product.name}' denied",
                    product=product,
                    user=self.user,
                )
                raise PermissionDenied(
                    f"Not allowed to update product {product.pk}"
                )
        for attributes in self.collection_attributes:
            supplier_id = attributes.get("supplier_id")
            if supplier_id in (None, ""):
                continue
            try:
                supplier = Enterprise.objects.filter(pk=int(supplier_id)).first()
            except (TypeError, ValueError):
                raise ValidationError(
                    {"supplier_id": [f"{supplier_id!r} is not a valid id"]}
                )
            if not permissions.can_assign_supplier(supplier):
                raise PermissionDenied(
                    f"Not allowed to assign supplier {supplier_id}"
                )

    def save(self) -> bool:
        """Apply every row. Returns False, with errors set, on failure."""
        self.errors = []
        with transaction.atomic():
            for attributes in self.collection_attributes:
                product = self.collection[int(attributes["id"])]
                try:
                    self._update_product(product, attributes)
                except ValidationError as e:
                    self.errors.extend(error_messages(product.name, e))
            if self.errors:
                transaction.set_rollback(True)

        if self.errors:
            logger.warning("Bulk product update rejected: %s", self.errors)
            return False

        for product in self.collection.values():
            ProductLogger.info(
                ProductLog.BULK_UPDATED,
                f"Bulk updated '{product.name}'",
                product=product,
                user=self.user,
            )
        return True

    def _update_product(self, product, attributes):
        if assign_attributes(product, attributes, PRODUCT_ATTRIBUTES):
            product.save()

        master = product.master
        if master is not None and not master.is_deleted:
            if assign_attributes(master, attributes, MASTER_ATTRIBUTES):
                master.save()

        for variant_attributes in attributes.get("variants_attributes") or []:
            if not variant_attributes:
                continue
            self._update_variant(product, variant_attributes)

        validate_product_variants(product)

    def _update_variant(self, product, attributes):
        variant_id = attributes.get("id")
        if variant_id:
            try:
                variant = product.variants_including_master.get(pk=int(variant_id))
            except (Variant.DoesNotExist, TypeError, ValueError):
                raise ValidationError(
                    {"variants": [f"variant {variant_id} not found"]}
                )
        else:
            variant = Variant(product=product, is_master=False)
        assign_attributes(variant, attributes, VARIANT_ATTRIBUTES)
        variant.save()
        return variant
