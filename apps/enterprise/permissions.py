"""
Ownership rules shared by the admin views and the JSON API.

A user manages an enterprise when they own it or hold an EnterpriseRole on
it. Staff users manage everything.
"""
from apps.enterprise.models import Enterprise


class EnterprisePermissions:
    """Answers "may this user touch that record?" for catalog objects."""

    def __init__(self, user):
        self.user = user

    @property
    def is_admin(self) -> bool:
        return bool(
            self.user is not None
            and self.user.is_authenticated
            and self.user.is_staff
        )

    def managed_enterprises(self):
        return Enterprise.objects.managed_by(self.user)

    def managed_products(self):
        from apps.catalog.models import Product

        if self.is_admin:
            return Product.objects.all()
        return Product.objects.supplied_by(self.managed_enterprises())

    def can_assign_supplier(self, enterprise) -> bool:
        if enterprise is None:
            return False
        if self.is_admin:
            return True
        return self.managed_enterprises().filter(pk=enterprise.pk).exists()

    def can_manage_product(self, product) -> bool:
        if product is None:
            return False
        if self.is_admin:
            return True
        return self.can_assign_supplier(product.supplier)

    def can_manage_variant(self, variant) -> bool:
        if variant is None:
            return False
        return self.can_manage_product(variant.product)
