"""
Cache of serialized product payloads.

Entries are keyed by product id and dropped whenever the product, one of its
variants or one of its images changes. Destroying a variant also schedules a
background rebuild so listings stay warm.
"""
import logging

from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)


class ProductsCache:
    KEY_TEMPLATE = "products_cache:product:{product_id}"

    @classmethod
    def key(cls, product_id) -> str:
        return cls.KEY_TEMPLATE.format(product_id=product_id)

    @classmethod
    def timeout(cls) -> int:
        return getattr(settings, "PRODUCTS_CACHE_TIMEOUT", 60 * 60)

    @classmethod
    def fetch(cls, product):
        """Return the cached payload for product, building it on a miss."""
        data = cache.get(cls.key(product.pk))
        if data is None:
            data = cls.refresh(product)
        return data

    @classmethod
    def refresh(cls, product):
        from apps.catalog.api.serializers import BulkProductSerializer

        data = BulkProductSerializer(product).data
        cache.set(cls.key(product.pk), data, cls.timeout())
        logger.debug("Refreshed products cache for product %s", product.pk)
        return data

    @classmethod
    def expire(cls, product_id):
        cache.delete(cls.key(product_id))

    @classmethod
    def product_changed(cls, product):
        cls.expire(product.pk)

    @classmethod
    def variant_changed(cls, variant):
        cls.expire(variant.product_id)

    @classmethod
    def variant_destroyed(cls, variant):
        from apps.catalog.tasks import refresh_product_cache

        cls.expire(variant.product_id)
        logger.info(
            "Variant %s destroyed, rebuilding cache for product %s",
            variant.pk, variant.product_id,
        )
        refresh_product_cache.delay(variant.product_id)
