"""
ViewSets for the Log app.
"""
from rest_framework import viewsets, filters
from rest_framework.permissions import IsAuthenticated
from django_filters.rest_framework import DjangoFilterBackend

from apps.api.pagination import StandardResultsSetPagination
from apps.api.permissions import IsStaffUser
from apps.log.models import ProductLog, UserLoginLog
from apps.log.api.serializers import (
    ProductLogSerializer,
    UserLoginLogSerializer,
)


class ProductLogViewSet(viewsets.ReadOnlyModelViewSet):
    """Read-only ViewSet for ProductLog model."""
    queryset = ProductLog.objects.all().select_related(
        'product', 'enterprise', 'user'
    )
    serializer_class = ProductLogSerializer
    permission_classes = [IsAuthenticated, IsStaffUser]
    pagination_class = StandardResultsSetPagination
    filter_backends = [
        DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter
    ]
    filterset_fields = ['event', 'log_type', 'product', 'enterprise', 'user']
    search_fields = ['message', 'product__name', 'enterprise__name']
    ordering_fields = ['created_at', 'event']
    ordering = ['-created_at']


class UserLoginLogViewSet(viewsets.ReadOnlyModelViewSet):
    """Read-only ViewSet for UserLoginLog model."""
    queryset = UserLoginLog.objects.all().select_related('user')
    serializer_class = UserLoginLogSerializer
    permission_classes = [IsAuthenticated, IsStaffUser]
    pagination_class = StandardResultsSetPagination
    filter_backends = [
        DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter
    ]
    filterset_fields = ['action', 'user']
    search_fields = ['user__username', 'username_attempted', 'ip_address']
    ordering_fields = ['created_at', 'action']
    ordering = ['-created_at']
