from django.contrib import admin
from .models import EmailLog, ProductLog, UserLoginLog


@admin.register(EmailLog)
class EmailLogAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'sent_at', 'email_type')
    readonly_fields = ('user', 'email_type', 'sent_at')
    search_fields = ('user__username', 'user__email', 'email_type')
    list_filter = ('email_type',)


@admin.register(ProductLog)
class ProductLogAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'event', 'log_type', 'product', 'enterprise', 'user')
    list_filter = ('event', 'log_type')
    search_fields = ('message', 'product__name', 'enterprise__name')
    readonly_fields = (
        'event', 'log_type', 'message', 'product', 'variant', 'enterprise',
        'user', 'created_at'
    )

    def has_add_permission(self, request):
        return False


@admin.register(UserLoginLog)
class UserLoginLogAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'action', 'user', 'username_attempted', 'ip_address')
    list_filter = ('action',)
    search_fields = ('user__username', 'username_attempted', 'ip_address')
    readonly_fields = (
        'user', 'username_attempted', 'action', 'ip_address', 'user_agent',
        'created_at'
    )

    def has_add_permission(self, request):
        return False
