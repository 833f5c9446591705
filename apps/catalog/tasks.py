"""Asynchronous catalog tasks."""
import logging

from celery import shared_task

from apps.catalog.cache import ProductsCache
from apps.catalog.models import Product

logger = logging.getLogger(__name__)


@shared_task
def refresh_product_cache(product_id):
    """Rebuild the cached payload of a product."""
    try:
        product = Product.objects.get(pk=product_id)
    except Product.DoesNotExist:
        logger.warning("refresh_product_cache: product %s not found", product_id)
        ProductsCache.expire(product_id)
        return None
    ProductsCache.refresh(product)
    return product_id
