from django.contrib import admin

from .models import (
    Image,
    OptionType,
    OptionValue,
    Product,
    ProductProperty,
    Property,
    ShippingCategory,
    Taxon,
    Variant,
)


class VariantInline(admin.TabularInline):
    model = Variant
    extra = 0
    fields = ('sku', 'price', 'on_hand', 'on_demand', 'unit_value', 'unit_description', 'is_master', 'deleted_at')
    readonly_fields = ('is_master', 'deleted_at')

    def get_queryset(self, request):
        return Variant.all_objects.select_related('product')


class ProductPropertyInline(admin.TabularInline):
    model = ProductProperty
    extra = 0


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('name', 'supplier', 'variant_unit', 'primary_taxon', 'available_on')
    list_filter = ('variant_unit', 'supplier')
    search_fields = ('name', 'permalink', 'supplier__name')
    readonly_fields = ('permalink', 'created_at', 'updated_at')
    inlines = [VariantInline, ProductPropertyInline]


@admin.register(Variant)
class VariantAdmin(admin.ModelAdmin):
    list_display = ('id', 'product', 'sku', 'price', 'on_hand', 'is_master', 'deleted_at')
    list_filter = ('is_master',)
    search_fields = ('sku', 'product__name')
    filter_horizontal = ('option_values',)

    def get_queryset(self, request):
        return Variant.all_objects.select_related('product')


@admin.register(Image)
class ImageAdmin(admin.ModelAdmin):
    list_display = ('id', 'variant', 'attachment', 'attachment_content_type', 'position')
    readonly_fields = ('attachment_width', 'attachment_height', 'attachment_content_type')


class OptionValueInline(admin.TabularInline):
    model = OptionValue
    extra = 1


@admin.register(OptionType)
class OptionTypeAdmin(admin.ModelAdmin):
    list_display = ('name', 'presentation', 'position')
    inlines = [OptionValueInline]


admin.site.register(Taxon)
admin.site.register(ShippingCategory)
admin.site.register(Property)
