# catalog/models.py
"""Models for products, their variants and everything hanging off them."""
# Standard library
import logging
import mimetypes
# Django imports
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models, transaction
from django.utils import timezone
# Third party
from imagekit.models import ImageSpecField
from imagekit.processors import ResizeToFit
# Local app imports
from core.utils import unique_slug
from .units import unit_presentation

logger = logging.getLogger(__name__)

UNIT_WEIGHT = "weight"
UNIT_VOLUME = "volume"
UNIT_ITEMS = "items"
SCALED_UNITS = (UNIT_WEIGHT, UNIT_VOLUME)

BLANK_MESSAGE = "can't be blank"


class Taxon(models.Model):
    """A node of the product taxonomy (e.g. Vegetables > Roots)."""
    name = models.CharField(max_length=100)
    permalink = models.SlugField(max_length=255, unique=True, blank=True)
    parent = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.CASCADE,
        related_name="children",
    )

    class Meta:
        verbose_name_plural = "Taxons"
        ordering = ["name"]

    def __str__(self) -> str:
        if self.parent_id:
            return f"{self.parent} > {self.name}"
        return str(self.name)

    def save(self, *args, **kwargs):
        if not self.permalink:
            self.permalink = unique_slug(Taxon, self.name, self)
        super().save(*args, **kwargs)


class ShippingCategory(models.Model):
    name = models.CharField(max_length=100, unique=True)

    class Meta:
        verbose_name_plural = "Shipping categories"

    def __str__(self) -> str:
        return str(self.name)


class OptionType(models.Model):
    """A dimension products vary on, such as size or colour."""
    name = models.CharField(max_length=100, unique=True)
    presentation = models.CharField(max_length=100)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position", "name"]

    def __str__(self) -> str:
        return str(self.presentation)


class OptionValue(models.Model):
    option_type = models.ForeignKey(
        OptionType, on_delete=models.CASCADE, related_name="option_values"
    )
    name = models.CharField(max_length=100)
    presentation = models.CharField(max_length=100)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["option_type__position", "position", "name"]

    def __str__(self) -> str:
        return f"{self.option_type.presentation}: {self.presentation}"


class Property(models.Model):
    """A named attribute shown on products, e.g. "Certified organic"."""
    name = models.CharField(max_length=100, unique=True)
    presentation = models.CharField(max_length=100)

    class Meta:
        verbose_name_plural = "Properties"
        ordering = ["name"]

    def __str__(self) -> str:
        return str(self.name)


class ProductQuerySet(models.QuerySet):

    def supplied_by(self, enterprises):
        return self.filter(supplier__in=enterprises)


class ProductManager(models.Manager.from_queryset(ProductQuerySet)):

    def create_with_variants(self, master=None, **fields):
        """
        Create a product together with its master variant and a standard
        variant copied from the master.
        """
        with transaction.atomic():
            product = self.create(**fields)
            Variant.objects.create(
                product=product, is_master=True, **dict(master or {})
            )
            product.ensure_standard_variant()
        logger.info("Created product %s (%s)", product.pk, product.name)
        return product


class Product(models.Model):
    """A product offered by a supplier enterprise."""
    VARIANT_UNIT_CHOICES = [
        (UNIT_WEIGHT, "Weight"),
        (UNIT_VOLUME, "Volume"),
        (UNIT_ITEMS, "Items"),
    ]

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    permalink = models.SlugField(max_length=255, unique=True, blank=True)
    supplier = models.ForeignKey(
        "enterprise.Enterprise",
        on_delete=models.PROTECT,
        related_name="supplied_products",
    )
    primary_taxon = models.ForeignKey(
        Taxon,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )
    shipping_category = models.ForeignKey(
        ShippingCategory,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )
    variant_unit = models.CharField(max_length=20, choices=VARIANT_UNIT_CHOICES)
    variant_unit_scale = models.FloatField(null=True, blank=True)
    variant_unit_name = models.CharField(max_length=100, blank=True)
    properties = models.ManyToManyField(
        Property, through="catalog.ProductProperty", related_name="products"
    )
    available_on = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProductManager()

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return str(self.name)

    @property
    def master(self):
        return (
            Variant.all_objects
            .filter(product=self, is_master=True)
            .order_by("id")
            .first()
        )

    @property
    def variants(self):
        """Live, non-master variants."""
        return self.variants_including_master.filter(is_master=False)

    @property
    def images(self):
        return Image.objects.filter(
            variant__product=self, variant__is_master=True
        ).order_by("position", "id")

    def clean(self):
        super().clean()
        errors = {}
        if self.variant_unit in SCALED_UNITS and not self.variant_unit_scale:
            errors["variant_unit_scale"] = BLANK_MESSAGE
        if self.variant_unit == UNIT_ITEMS and not self.variant_unit_name:
            errors["variant_unit_name"] = BLANK_MESSAGE
        if errors:
            raise ValidationError(errors)

    def save(self, *args, **kwargs):
        if not self.permalink:
            self.permalink = unique_slug(Product, self.name, self)

        old_variant_unit = None
        if self.pk:
            old_variant_unit = (
                Product.objects.filter(pk=self.pk)
                .values_list("variant_unit", flat=True)
                .first()
            )

        self.full_clean()
        with transaction.atomic():
            super().save(*args, **kwargs)
            if (
                old_variant_unit is not None
                and old_variant_unit != self.variant_unit
                and self.variant_unit == UNIT_ITEMS
            ):
                self.clear_unit_descriptions()

    def clear_unit_descriptions(self):
        """Item-sold products describe size by unit name, not description."""
        updated = Variant.all_objects.filter(product=self).update(
            unit_description=""
        )
        logger.debug(
            "Cleared unit description of %s variant(s) on product %s",
            updated, self.pk,
        )

    def ensure_standard_variant(self):
        """Give the product a non-master variant copied from its master."""
        master = self.master
        if master is None or self.variants.exists():
            return None
        variant = Variant(
            product=self,
            is_master=False,
            position=1,
            **{field: getattr(master, field) for field in Variant.COPYABLE_FIELDS},
        )
        variant.save()
        return variant


class ProductProperty(models.Model):
    # Defined before the "property" field, which shadows the builtin below it
    @property
    def property_name(self):
        return self.property.name

    product = models.ForeignKey(
        Product, on_delete=models.CASCADE, related_name="product_properties"
    )
    property = models.ForeignKey(
        Property, on_delete=models.CASCADE, related_name="product_properties"
    )
    value = models.CharField(max_length=255, blank=True)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name_plural = "Product properties"
        ordering = ["position", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["product", "property"], name="unique_product_property"
            )
        ]

    def __str__(self):
        return f"{self.property.name}: {self.value}"


class VariantQuerySet(models.QuerySet):

    def deleted(self):
        return self.filter(deleted_at__isnull=False)

    def not_deleted(self):
        return self.filter(deleted_at__isnull=True)


class VariantManager(models.Manager.from_queryset(VariantQuerySet)):
    """Default manager: soft-deleted variants are hidden."""

    def get_queryset(self):
        return super().get_queryset().filter(deleted_at__isnull=True)


class Variant(models.Model):
    """A purchasable option of a product. Each product has one master."""
    COPYABLE_FIELDS = (
        "sku", "price", "cost_price", "weight", "height", "width", "depth",
        "on_hand", "on_demand", "unit_value", "unit_description",
        "display_name", "display_as",
    )

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="variants_including_master",
    )
    sku = models.CharField(max_length=255, blank=True, default="")
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=0,
        validators=[MinValueValidator(0)],
    )
    cost_price = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True
    )
    weight = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)
    height = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)
    width = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)
    depth = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)
    is_master = models.BooleanField(default=False)
    position = models.PositiveIntegerField(default=0)
    on_hand = models.IntegerField(default=0)
    on_demand = models.BooleanField(default=False)
    unit_value = models.FloatField(null=True, blank=True)
    unit_description = models.CharField(max_length=255, blank=True, default="")
    display_name = models.CharField(max_length=255, blank=True, default="")
    display_as = models.CharField(max_length=255, blank=True, default="")
    option_values = models.ManyToManyField(
        OptionValue, related_name="variants", blank=True
    )
    deleted_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = VariantManager()
    all_objects = VariantQuerySet.as_manager()

    class Meta:
        ordering = ["position", "id"]

    def __str__(self) -> str:
        label = self.options_text or self.unit_to_display
        if label:
            return f"{self.name} ({label})"
        return str(self.name)

    @property
    def name(self):
        return self.product.name

    @property
    def permalink(self):
        return self.product.permalink

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def options_text(self) -> str:
        values = sorted(
            self.option_values.select_related("option_type"),
            key=lambda ov: (ov.option_type.position, ov.position),
        )
        return ", ".join(
            f"{ov.option_type.presentation}: {ov.presentation}" for ov in values
        )

    @property
    def unit_to_display(self) -> str:
        if self.display_as:
            return self.display_as
        product = self.product
        return unit_presentation(
            product.variant_unit,
            product.variant_unit_scale,
            self.unit_value,
            product.variant_unit_name,
        )

    def clean(self):
        super().clean()
        product = getattr(self, "product", None)
        if product is None:
            return
        if product.variant_unit not in SCALED_UNITS:
            return
        if self.unit_value in (None, ""):
            raise ValidationError({"unit_value": BLANK_MESSAGE})
        try:
            unit_value = float(self.unit_value)
        except (TypeError, ValueError):
            # clean_fields already reported the bad value
            return
        if unit_value <= 0:
            raise ValidationError({"unit_value": "must be greater than 0"})

    def save(self, *args, **kwargs):
        # Partial saves (soft delete, stock moves) skip model validation.
        if not kwargs.get("update_fields"):
            self.full_clean()
        super().save(*args, **kwargs)

    def soft_delete(self):
        self.deleted_at = timezone.now()
        self.save(update_fields=["deleted_at", "updated_at"])


class Image(models.Model):
    """A picture attached to a variant. Product images live on the master."""
    variant = models.ForeignKey(
        Variant, on_delete=models.CASCADE, related_name="images"
    )
    attachment = models.ImageField(
        upload_to="products/%Y/%m/",
        width_field="attachment_width",
        height_field="attachment_height",
    )
    attachment_width = models.PositiveIntegerField(null=True, blank=True)
    attachment_height = models.PositiveIntegerField(null=True, blank=True)
    attachment_content_type = models.CharField(max_length=100, blank=True)
    alt = models.TextField(blank=True)
    position = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    mini = ImageSpecField(
        source="attachment",
        processors=[ResizeToFit(48, 48)],
        format="JPEG",
        options={"quality": 80},
    )
    small = ImageSpecField(
        source="attachment",
        processors=[ResizeToFit(227, 227)],
        format="JPEG",
        options={"quality": 80},
    )
    product_size = ImageSpecField(
        source="attachment",
        processors=[ResizeToFit(240, 240)],
        format="JPEG",
        options={"quality": 85},
    )
    large = ImageSpecField(
        source="attachment",
        processors=[ResizeToFit(600, 600)],
        format="JPEG",
        options={"quality": 85},
    )

    class Meta:
        ordering = ["position", "id"]

    def __str__(self):
        return f"Image {self.pk} of variant {self.variant_id}"

    @property
    def attachment_file_name(self):
        if not self.attachment:
            return ""
        return self.attachment.name.rsplit("/", 1)[-1]

    def save(self, *args, **kwargs):
        if not self.attachment_content_type and self.attachment:
            content_type, _ = mimetypes.guess_type(self.attachment.name)
            self.attachment_content_type = content_type or ""
        super().save(*args, **kwargs)
