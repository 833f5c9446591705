"""Soft deletion of variants."""
import logging

from django.core.exceptions import ValidationError

from apps.catalog.cache import ProductsCache
from apps.log.models import ProductLog
from apps.log.signals import ProductLogger

logger = logging.getLogger(__name__)

ONLY_VARIANT_MESSAGE = "must have at least one variant"


class VariantDeleter:
    """
    Soft-deletes variants while keeping every product sellable: the last
    live non-master variant of a product cannot be deleted.
    """

    def __init__(self, user=None):
        self.user = user

    def delete(self, variant):
        """
        Mark variant as deleted.

        Raises:
            ValidationError: keyed on "product" when variant is the only
                live variant of its product.
        """
        if self.only_variant_on_product(variant):
            ProductLogger.warning(
                ProductLog.VARIANT_DELETE_REFUSED,
                f"Refused to delete variant {variant.pk}: it is the only "
                f"variant of '{variant.product.name}'",
                variant=variant,
                user=self.user,
            )
            raise ValidationError({"product": [ONLY_VARIANT_MESSAGE]})

        variant.soft_delete()
        if not variant.is_master:
            ProductsCache.variant_destroyed(variant)

        ProductLogger.info(
            ProductLog.VARIANT_DELETED,
            f"Deleted variant {variant.pk} of '{variant.product.name}'",
            variant=variant,
            user=self.user,
        )
        return variant

    @staticmethod
    def only_variant_on_product(variant) -> bool:
        live = list(
            variant.product.variants.values_list("pk", flat=True)
        )
        return live == [variant.pk]
