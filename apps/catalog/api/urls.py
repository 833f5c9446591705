"""
Catalog API URL Configuration.
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import BulkProductsView, ProductImageView, VariantViewSet

router = DefaultRouter()
router.register(r'variants', VariantViewSet, basename='variant')
router.register(
    r'products/(?P<product_id>[^/.]+)/variants',
    VariantViewSet,
    basename='product-variant',
)

urlpatterns = [
    path('products/bulk_products/', BulkProductsView.as_view(), name='bulk-products'),
    path('product_images/<int:product_id>/', ProductImageView.as_view(), name='product-images'),
    path('', include(router.urls)),
]
