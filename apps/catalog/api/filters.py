"""
Filter sets behind the ``q[...]`` parameters of the catalog endpoints.

Filter names follow the attribute_predicate convention: ``cont`` (contains),
``eq``, ``not_eq``, ``start``, ``gt``, ``lt``, ``gteq``, ``lteq`` and ``in``.
"""
from django_filters import rest_framework as filters

from apps.catalog.models import Product, Variant


class NumberInFilter(filters.BaseInFilter, filters.NumberFilter):
    pass


class CharInFilter(filters.BaseInFilter, filters.CharFilter):
    pass


class VariantFilter(filters.FilterSet):
    """Filter for variants, including the product and option values."""

    id_eq = filters.NumberFilter(field_name='id')
    id_in = NumberInFilter(field_name='id', lookup_expr='in')

    sku_eq = filters.CharFilter(field_name='sku')
    sku_not_eq = filters.CharFilter(field_name='sku', exclude=True)
    sku_cont = filters.CharFilter(field_name='sku', lookup_expr='icontains')
    sku_start = filters.CharFilter(field_name='sku', lookup_expr='istartswith')

    # Price filters
    price_eq = filters.NumberFilter(field_name='price')
    price_gt = filters.NumberFilter(field_name='price', lookup_expr='gt')
    price_lt = filters.NumberFilter(field_name='price', lookup_expr='lt')
    price_gteq = filters.NumberFilter(field_name='price', lookup_expr='gte')
    price_lteq = filters.NumberFilter(field_name='price', lookup_expr='lte')

    # Stock filters
    on_hand_eq = filters.NumberFilter(field_name='on_hand')
    on_hand_gt = filters.NumberFilter(field_name='on_hand', lookup_expr='gt')
    on_hand_lt = filters.NumberFilter(field_name='on_hand', lookup_expr='lt')
    on_demand_eq = filters.BooleanFilter(field_name='on_demand')

    is_master_eq = filters.BooleanFilter(field_name='is_master')
    display_name_cont = filters.CharFilter(
        field_name='display_name', lookup_expr='icontains'
    )
    unit_value_eq = filters.NumberFilter(field_name='unit_value')
    unit_value_gt = filters.NumberFilter(field_name='unit_value', lookup_expr='gt')
    unit_value_lt = filters.NumberFilter(field_name='unit_value', lookup_expr='lt')

    product_id_eq = filters.NumberFilter(field_name='product_id')
    product_id_in = NumberInFilter(field_name='product_id', lookup_expr='in')
    product_name_eq = filters.CharFilter(field_name='product__name')
    product_name_cont = filters.CharFilter(
        field_name='product__name', lookup_expr='icontains'
    )

    # Option values are many-to-many; a variant may match more than once
    option_values_id_in = NumberInFilter(
        field_name='option_values__id', lookup_expr='in', distinct=True
    )
    option_values_presentation_cont = filters.CharFilter(
        field_name='option_values__presentation',
        lookup_expr='icontains',
        distinct=True,
    )

    class Meta:
        model = Variant
        fields = []


class ProductFilter(filters.FilterSet):
    """Filter for the bulk product listing."""

    id_eq = filters.NumberFilter(field_name='id')
    id_in = NumberInFilter(field_name='id', lookup_expr='in')
    name_eq = filters.CharFilter(field_name='name')
    name_cont = filters.CharFilter(field_name='name', lookup_expr='icontains')
    supplier_id_eq = filters.NumberFilter(field_name='supplier_id')
    supplier_id_in = NumberInFilter(field_name='supplier_id', lookup_expr='in')
    primary_taxon_id_eq = filters.NumberFilter(field_name='primary_taxon_id')
    primary_taxon_id_in = NumberInFilter(field_name='primary_taxon_id', lookup_expr='in')
    variant_unit_eq = filters.CharFilter(field_name='variant_unit')
    variant_unit_in = CharInFilter(field_name='variant_unit', lookup_expr='in')
    available_on_gteq = filters.IsoDateTimeFilter(field_name='available_on', lookup_expr='gte')
    available_on_lteq = filters.IsoDateTimeFilter(field_name='available_on', lookup_expr='lte')

    class Meta:
        model = Product
        fields = []
