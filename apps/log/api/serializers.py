"""
Serializers for the Log app.
"""
from rest_framework import serializers

from apps.log.models import ProductLog, UserLoginLog


class ProductLogSerializer(serializers.ModelSerializer):
    """Serializer for ProductLog model."""
    product_name = serializers.CharField(
        source='product.name', read_only=True, default=None
    )
    enterprise_name = serializers.CharField(
        source='enterprise.name', read_only=True, default=None
    )
    username = serializers.CharField(
        source='user.username', read_only=True, default=None
    )

    class Meta:
        model = ProductLog
        fields = [
            'id', 'event', 'log_type', 'message',
            'product', 'product_name', 'variant',
            'enterprise', 'enterprise_name',
            'user', 'username', 'created_at'
        ]
        read_only_fields = fields


class UserLoginLogSerializer(serializers.ModelSerializer):
    """Serializer for UserLoginLog model."""
    username = serializers.CharField(
        source='user.username', read_only=True, default=None
    )

    class Meta:
        model = UserLoginLog
        fields = [
            'id', 'user', 'username', 'username_attempted', 'action',
            'ip_address', 'user_agent', 'created_at'
        ]
        read_only_fields = fields
