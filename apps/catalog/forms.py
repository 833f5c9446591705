# apps/catalog/forms.py
"""Forms behind the admin product pages."""
import logging

from django import forms
from django.db import transaction

from apps.catalog.models import (
    BLANK_MESSAGE,
    SCALED_UNITS,
    Image,
    Product,
    ProductProperty,
    Property,
)

logger = logging.getLogger(__name__)

MASTER_FIELDS = ("sku", "price", "on_hand", "on_demand", "unit_value", "unit_description")


class ProductForm(forms.ModelForm):
    """
    Product fields plus the master variant's price, stock and unit, and an
    optional image for the master.
    """
    sku = forms.CharField(max_length=255, required=False)
    price = forms.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    on_hand = forms.IntegerField(required=False, initial=0)
    on_demand = forms.BooleanField(required=False)
    unit_value = forms.FloatField(required=False)
    unit_description = forms.CharField(max_length=255, required=False)
    image = forms.ImageField(required=False)

    class Meta:
        model = Product
        fields = [
            "name",
            "supplier",
            "description",
            "primary_taxon",
            "shipping_category",
            "variant_unit",
            "variant_unit_scale",
            "variant_unit_name",
            "available_on",
        ]
        widgets = {
            "description": forms.Textarea(attrs={"rows": 4}),
            "available_on": forms.DateTimeInput(attrs={"type": "datetime-local"}),
        }

    def __init__(self, *args, permissions=None, **kwargs):
        super().__init__(*args, **kwargs)
        if permissions is not None:
            self.fields["supplier"].queryset = permissions.managed_enterprises().suppliers()
        master = self.instance.master if self.instance.pk else None
        if master is not None:
            for name in MASTER_FIELDS:
                self.initial.setdefault(name, getattr(master, name))

    def clean(self):
        cleaned_data = super().clean()
        unit = cleaned_data.get("variant_unit")
        unit_value = cleaned_data.get("unit_value")
        if unit in SCALED_UNITS:
            if unit_value is None:
                self.add_error("unit_value", BLANK_MESSAGE)
            elif unit_value <= 0:
                self.add_error("unit_value", "must be greater than 0")
        return cleaned_data

    def master_attributes(self):
        attributes = {name: self.cleaned_data.get(name) for name in MASTER_FIELDS}
        attributes["sku"] = attributes["sku"] or ""
        attributes["on_hand"] = attributes["on_hand"] or 0
        attributes["unit_description"] = attributes["unit_description"] or ""
        return attributes

    def save(self, commit=True):
        with transaction.atomic():
            if self.instance.pk:
                product = super().save()
                master = product.master
                for name, value in self.master_attributes().items():
                    setattr(master, name, value)
                master.save()
            else:
                product = Product.objects.create_with_variants(
                    master=self.master_attributes(),
                    **{name: self.cleaned_data.get(name) for name in self.Meta.fields},
                )
                self.instance = product
                master = product.master

            upload = self.cleaned_data.get("image")
            if upload:
                Image.objects.create(
                    variant=master,
                    attachment=upload,
                    attachment_content_type=getattr(upload, "content_type", "") or "",
                    alt=product.name,
                )
        return product


class ProductPropertyForm(forms.Form):
    property_name = forms.CharField(max_length=100, required=False)
    value = forms.CharField(max_length=255, required=False)


ProductPropertyFormSet = forms.formset_factory(ProductPropertyForm, extra=1)


def product_property_initial(product):
    return [
        {"property_name": pp.property_name, "value": pp.value}
        for pp in product.product_properties.select_related("property")
    ]


def apply_product_properties(product, rows, permissions):
    """
    Attach or update properties by name.

    Administrators may introduce new property names. Anyone else can only
    use properties that already exist; unknown names are skipped.
    """
    applied = []
    for position, row in enumerate(rows):
        name = (row or {}).get("property_name", "").strip()
        if not name:
            continue
        prop = Property.objects.filter(name=name).first()
        if prop is None:
            if not permissions.is_admin:
                logger.info(
                    "Ignoring unknown property '%s' on product %s", name, product.pk
                )
                continue
            prop = Property.objects.create(name=name, presentation=name)
        product_property, _ = ProductProperty.objects.update_or_create(
            product=product,
            property=prop,
            defaults={"value": row.get("value", ""), "position": position},
        )
        applied.append(product_property)
    return applied
