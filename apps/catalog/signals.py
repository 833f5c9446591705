# catalog/signals.py
import logging
# Django imports
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
# Local imports
from .cache import ProductsCache
from .models import Image, Product, Variant

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Product)
def expire_cache_on_product_save(sender, instance, **kwargs):
    ProductsCache.product_changed(instance)


@receiver(post_save, sender=Variant)
def expire_cache_on_variant_save(sender, instance, **kwargs):
    ProductsCache.variant_changed(instance)


@receiver([post_save, post_delete], sender=Image)
def expire_cache_on_image_change(sender, instance, **kwargs):
    """Images hang off variants; the product payload embeds them."""
    variant = Variant.all_objects.filter(pk=instance.variant_id).first()
    if variant is not None:
        ProductsCache.variant_changed(variant)
