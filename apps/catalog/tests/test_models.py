# apps/catalog/tests/test_models.py
"""Tests for products, variants and their validation rules."""
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from apps.catalog.models import Product, ProductProperty, Variant
from apps.orders.tests.factories import (
    OptionTypeFactory,
    OptionValueFactory,
    ProductFactory,
    PropertyFactory,
    SimpleProductFactory,
    SupplierEnterpriseFactory,
    VariantFactory,
)


@pytest.mark.django_db
class TestProductCreation:

    def test_creates_master_and_standard_variant(self):
        product = ProductFactory(price=Decimal("3.50"), sku="CARROT", unit_value=500)

        master = product.master
        assert master.is_master
        assert master.price == Decimal("3.50")

        variants = list(product.variants)
        assert len(variants) == 1
        assert variants[0].sku == "CARROT"
        assert variants[0].unit_value == 500
        assert not variants[0].is_master

    def test_permalink_is_unique(self):
        first = ProductFactory(name="Apple Juice")
        second = ProductFactory(name="Apple Juice")

        assert first.permalink == "apple-juice"
        assert second.permalink == "apple-juice-2"

    def test_weight_products_need_a_scale(self):
        with pytest.raises(ValidationError) as exc:
            ProductFactory(variant_unit_scale=None)

        assert "variant_unit_scale" in exc.value.message_dict

    def test_item_products_need_a_unit_name(self):
        with pytest.raises(ValidationError) as exc:
            SimpleProductFactory(variant_unit_name="")

        assert "variant_unit_name" in exc.value.message_dict

    def test_failed_creation_leaves_nothing_behind(self):
        supplier = SupplierEnterpriseFactory()

        with pytest.raises(ValidationError):
            Product.objects.create_with_variants(
                master={"price": Decimal("1.00"), "unit_value": None},
                name="Broken",
                supplier=supplier,
                variant_unit="weight",
                variant_unit_scale=1,
            )

        assert not Product.objects.filter(name="Broken").exists()


@pytest.mark.django_db
class TestUnitChanges:

    def test_switching_to_items_clears_unit_descriptions(self):
        product = ProductFactory(unit_description="grams")
        variant = product.variants.get()
        assert variant.unit_description == "grams"

        product.variant_unit = "items"
        product.variant_unit_name = "bag"
        product.variant_unit_scale = None
        product.save()

        variant.refresh_from_db()
        assert variant.unit_description == ""
        assert product.master.unit_description == ""

    def test_saving_without_unit_change_keeps_descriptions(self):
        product = SimpleProductFactory(unit_description="large")
        product.name = "Renamed"
        product.save()

        assert product.variants.get().unit_description == "large"


@pytest.mark.django_db
class TestVariantValidation:

    def test_unit_value_required_for_weight(self):
        product = ProductFactory()

        with pytest.raises(ValidationError) as exc:
            VariantFactory(product=product, unit_value=None)

        assert exc.value.message_dict["unit_value"] == ["can't be blank"]

    def test_unit_value_must_be_positive(self):
        product = ProductFactory()

        with pytest.raises(ValidationError) as exc:
            VariantFactory(product=product, unit_value=0)

        assert exc.value.message_dict["unit_value"] == ["must be greater than 0"]

    def test_unit_value_optional_for_items(self):
        product = SimpleProductFactory()

        variant = VariantFactory(product=product, unit_value=None)

        assert variant.pk is not None

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            VariantFactory(price=Decimal("-1.00"))


@pytest.mark.django_db
class TestVariantPresentation:

    def test_options_text_follows_option_type_position(self):
        size = OptionTypeFactory(presentation="Size", position=2)
        colour = OptionTypeFactory(presentation="Colour", position=1)
        variant = VariantFactory()
        variant.option_values.add(
            OptionValueFactory(option_type=size, presentation="Large"),
            OptionValueFactory(option_type=colour, presentation="Red"),
        )

        assert variant.options_text == "Colour: Red, Size: Large"

    def test_unit_to_display_for_weight(self):
        product = ProductFactory(variant_unit_scale=1000)
        variant = VariantFactory(product=product, unit_value=2000)

        assert variant.unit_to_display == "2kg"

    def test_unit_to_display_prefers_display_as(self):
        variant = VariantFactory(display_as="Big box")

        assert variant.unit_to_display == "Big box"

    def test_name_and_permalink_come_from_product(self):
        product = ProductFactory(name="Kale")
        variant = product.variants.get()

        assert variant.name == "Kale"
        assert variant.permalink == "kale"


@pytest.mark.django_db
class TestSoftDelete:

    def test_deleted_variants_hidden_from_default_manager(self):
        variant = VariantFactory()
        variant.soft_delete()

        assert variant.is_deleted
        assert not Variant.objects.filter(pk=variant.pk).exists()
        assert Variant.all_objects.filter(pk=variant.pk).exists()

    def test_deleted_variants_hidden_from_product_variants(self):
        product = ProductFactory()
        extra = VariantFactory(product=product)
        extra.soft_delete()

        assert extra not in product.variants

    def test_master_still_found_when_deleted(self):
        product = ProductFactory()
        master = product.master
        master.soft_delete()

        assert product.master == master


@pytest.mark.django_db
class TestProductProperty:

    def test_property_name_reads_through_to_property(self):
        product = ProductFactory()
        organic = PropertyFactory(name="organic")

        product_property = ProductProperty.objects.create(
            product=product, property=organic, value="certified"
        )

        assert product_property.property_name == "organic"
        assert str(product_property) == "organic: certified"
