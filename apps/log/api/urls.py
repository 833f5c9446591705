"""
URL configuration for the Log API.
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from apps.log.api.views import (
    ProductLogViewSet,
    UserLoginLogViewSet,
)

router = DefaultRouter()
router.register(r'product-logs', ProductLogViewSet, basename='product-log')
router.register(r'login-logs', UserLoginLogViewSet, basename='login-log')

urlpatterns = [
    path('', include(router.urls)),
]
