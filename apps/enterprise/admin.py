from django.contrib import admin

from .models import Enterprise, EnterpriseRole


class EnterpriseRoleInline(admin.TabularInline):
    model = EnterpriseRole
    extra = 0
    autocomplete_fields = ("user",)


@admin.register(Enterprise)
class EnterpriseAdmin(admin.ModelAdmin):
    list_display = ("name", "owner", "is_primary_producer", "sells", "created_at")
    list_filter = ("is_primary_producer", "sells")
    search_fields = ("name", "permalink", "email")
    readonly_fields = ("created_at", "updated_at")
    inlines = [EnterpriseRoleInline]
