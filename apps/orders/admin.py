# apps/orders/admin.py
"""Admin configuration for Order model."""
from django.contrib import admin

from .models import LineItem, Order


class LineItemInline(admin.TabularInline):
    model = LineItem
    extra = 0
    raw_id_fields = ('variant',)


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin for Order model."""
    list_display = ('number', 'user', 'distributor', 'state', 'total', 'completed_at')
    list_filter = ('state', 'distributor')
    search_fields = ('number', 'email', 'user__username')
    readonly_fields = ('number', 'item_total', 'total', 'completed_at')
    inlines = [LineItemInline]
    actions = ['finalize_orders']

    @admin.action(description="Mark selected orders complete")
    def finalize_orders(self, request, queryset):
        finalized = 0
        for order in queryset.incomplete():
            order.finalize()
            finalized += 1
        self.message_user(request, f"{finalized} order(s) completed.")
