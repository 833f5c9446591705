from rest_framework import permissions

from apps.enterprise.permissions import EnterprisePermissions


class IsStaffUser(permissions.BasePermission):
    """Only allow staff users."""
    def has_permission(self, request, view):
        return request.user and request.user.is_staff


class IsCatalogManagerOrReadOnly(permissions.BasePermission):
    """
    Authenticated users may read catalog records. Writes need the user to
    be an admin or to manage the supplier enterprise of the product.
    """
    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS:
            return True
        perms = EnterprisePermissions(request.user)
        if hasattr(obj, 'product_id'):
            return perms.can_manage_variant(obj)
        return perms.can_manage_product(obj)
