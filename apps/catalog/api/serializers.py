"""
Catalog API serializers.
"""
from rest_framework import serializers

from apps.catalog.models import Image, OptionValue, Product, Variant


def style_url(image, style):
    """URL of an imagekit rendition, or None when there is no attachment."""
    if image is None or not image.attachment:
        return None
    return getattr(image, style).url


class OptionValueSerializer(serializers.ModelSerializer):
    option_type_name = serializers.CharField(source='option_type.name', read_only=True)
    option_type_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = OptionValue
        fields = ['id', 'name', 'presentation', 'option_type_name', 'option_type_id']


class ImageSerializer(serializers.ModelSerializer):
    """Images embedded in variant payloads."""
    viewable_id = serializers.IntegerField(source='variant_id', read_only=True)
    attachment_file_name = serializers.CharField(read_only=True)
    mini_url = serializers.SerializerMethodField()
    small_url = serializers.SerializerMethodField()
    product_url = serializers.SerializerMethodField()
    large_url = serializers.SerializerMethodField()

    class Meta:
        model = Image
        fields = [
            'id', 'position', 'alt', 'attachment_file_name',
            'attachment_content_type', 'attachment_width', 'attachment_height',
            'viewable_id', 'mini_url', 'small_url', 'product_url', 'large_url',
        ]

    def get_mini_url(self, obj):
        return style_url(obj, 'mini')

    def get_small_url(self, obj):
        return style_url(obj, 'small')

    def get_product_url(self, obj):
        return style_url(obj, 'product_size')

    def get_large_url(self, obj):
        return style_url(obj, 'large')


class ProductImageSerializer(serializers.ModelSerializer):
    """Response body of the product image upload endpoint."""
    thumb_url = serializers.SerializerMethodField()
    small_url = serializers.SerializerMethodField()
    image_url = serializers.SerializerMethodField()
    large_url = serializers.SerializerMethodField()

    class Meta:
        model = Image
        fields = ['id', 'alt', 'thumb_url', 'small_url', 'image_url', 'large_url']

    def get_thumb_url(self, obj):
        return style_url(obj, 'mini')

    def get_small_url(self, obj):
        return style_url(obj, 'small')

    def get_image_url(self, obj):
        return style_url(obj, 'product_size')

    def get_large_url(self, obj):
        return style_url(obj, 'large')


class ProductImageUploadSerializer(serializers.Serializer):
    file = serializers.ImageField()
    alt = serializers.CharField(required=False, allow_blank=True, default='')


class VariantSerializer(serializers.ModelSerializer):
    """Full variant representation used by show, create and update."""

    STANDARD_ATTRIBUTES = [
        'id', 'name', 'sku', 'price', 'weight', 'height', 'width', 'depth',
        'is_master', 'cost_price', 'permalink',
    ]

    name = serializers.CharField(read_only=True)
    permalink = serializers.CharField(read_only=True)
    options_text = serializers.CharField(read_only=True)
    option_values = OptionValueSerializer(many=True, read_only=True)
    option_value_ids = serializers.PrimaryKeyRelatedField(
        source='option_values',
        queryset=OptionValue.objects.all(),
        many=True,
        write_only=True,
        required=False,
    )
    images = ImageSerializer(many=True, read_only=True)

    class Meta:
        model = Variant
        fields = [
            'id', 'name', 'sku', 'price', 'weight', 'height', 'width', 'depth',
            'is_master', 'cost_price', 'permalink',
            'product_id', 'on_hand', 'on_demand', 'unit_value',
            'unit_description', 'display_name', 'display_as',
            'options_text', 'option_values', 'option_value_ids', 'images',
        ]
        read_only_fields = ['id', 'is_master', 'product_id']


class BulkIndexVariantSerializer(serializers.ModelSerializer):
    """Compact variant rows for the bulk editing screens."""
    options_text = serializers.CharField(read_only=True)
    unit_to_display = serializers.CharField(read_only=True)

    class Meta:
        model = Variant
        fields = [
            'id', 'options_text', 'unit_to_display', 'display_name',
            'display_as', 'price', 'on_demand', 'on_hand', 'unit_value',
            'unit_description',
        ]


class BulkVariantSerializer(BulkIndexVariantSerializer):

    class Meta(BulkIndexVariantSerializer.Meta):
        fields = BulkIndexVariantSerializer.Meta.fields + ['sku']


class BulkProductSerializer(serializers.ModelSerializer):
    """Product payload stored in the products cache."""
    producer_id = serializers.IntegerField(source='supplier_id', read_only=True)
    category_id = serializers.IntegerField(source='primary_taxon_id', read_only=True)
    sku = serializers.SerializerMethodField()
    price = serializers.SerializerMethodField()
    on_hand = serializers.SerializerMethodField()
    image_url = serializers.SerializerMethodField()
    thumb_url = serializers.SerializerMethodField()
    master = serializers.SerializerMethodField()
    variants = BulkVariantSerializer(many=True, read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'permalink', 'sku', 'price', 'on_hand',
            'variant_unit', 'variant_unit_scale', 'variant_unit_name',
            'available_on', 'producer_id', 'category_id',
            'image_url', 'thumb_url', 'master', 'variants',
        ]

    def _master(self, obj):
        if not hasattr(obj, '_bulk_master'):
            obj._bulk_master = obj.master
        return obj._bulk_master

    def _image(self, obj):
        if not hasattr(obj, '_bulk_image'):
            obj._bulk_image = obj.images.first()
        return obj._bulk_image

    def get_sku(self, obj):
        master = self._master(obj)
        return master.sku if master else None

    def get_price(self, obj):
        master = self._master(obj)
        return str(master.price) if master else None

    def get_on_hand(self, obj):
        if any(v.on_demand for v in obj.variants):
            return None
        return sum(v.on_hand for v in obj.variants)

    def get_image_url(self, obj):
        image = self._image(obj)
        return image.attachment.url if image and image.attachment else None

    def get_thumb_url(self, obj):
        return style_url(self._image(obj), 'mini')

    def get_master(self, obj):
        master = self._master(obj)
        if master is None:
            return None
        return BulkVariantSerializer(master).data
