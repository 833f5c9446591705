"""
Catalog API views: variants, product images and the bulk product listing.
"""
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import Q
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema, OpenApiParameter
from rest_framework import generics, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, PermissionDenied
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.filters import QueryFilterBackend, QuerySortFilter
from apps.api.pagination import ProductPagination, VariantPagination
from apps.api.permissions import IsCatalogManagerOrReadOnly
from apps.catalog.cache import ProductsCache
from apps.catalog.models import Image, Product, Variant
from apps.catalog.services.variant_deleter import VariantDeleter
from apps.enterprise.permissions import EnterprisePermissions
from apps.log.models import ProductLog
from apps.log.signals import ProductLogger

from .filters import ProductFilter, VariantFilter
from .serializers import (
    BulkIndexVariantSerializer,
    ProductImageSerializer,
    ProductImageUploadSerializer,
    VariantSerializer,
)

logger = logging.getLogger(__name__)

TRUE_VALUES = ('1', 'true', 'yes')


def find_product(product_id):
    """Look a product up by id or by permalink."""
    value = str(product_id)
    lookup = Q(permalink=value)
    if value.isdigit():
        lookup |= Q(pk=int(value))
    return get_object_or_404(Product, lookup)


def unwrap(data, key):
    """Accept both {"variant": {...}} and flat request bodies."""
    nested = data.get(key) if hasattr(data, 'get') else None
    return nested if isinstance(nested, dict) else data


def deletion_refused(error):
    return Response(
        {'errors': error.message_dict},
        status=status.HTTP_422_UNPROCESSABLE_ENTITY,
    )


@extend_schema(tags=['Catalog'])
class VariantViewSet(viewsets.ModelViewSet):
    """
    Variants, either across the catalog (/api/variants/) or scoped to one
    product (/api/products/<id or permalink>/variants/).

    Admins may pass show_deleted=1 to include soft-deleted variants.
    """
    serializer_class = VariantSerializer
    permission_classes = [IsCatalogManagerOrReadOnly]
    pagination_class = VariantPagination
    filter_backends = [QueryFilterBackend, QuerySortFilter]
    filterset_class = VariantFilter
    parser_classes = [JSONParser, FormParser, MultiPartParser]
    ordering_fields = [
        'id', 'sku', 'price', 'on_hand', 'unit_value',
        'display_name', 'position', 'product__name',
    ]
    ordering_aliases = {'product_name': 'product__name'}

    def get_product(self):
        if not hasattr(self, '_product'):
            product_id = self.kwargs.get('product_id')
            self._product = find_product(product_id) if product_id else None
        return self._product

    def show_deleted(self):
        requested = self.request.query_params.get('show_deleted', '')
        return (
            requested.lower() in TRUE_VALUES
            and EnterprisePermissions(self.request.user).is_admin
        )

    def get_queryset(self):
        manager = Variant.all_objects if self.show_deleted() else Variant.objects
        queryset = (
            manager
            .select_related('product')
            .prefetch_related('option_values__option_type', 'images')
            .order_by('id')
        )
        product = self.get_product()
        if product is not None:
            queryset = queryset.filter(product=product)
        return queryset

    @extend_schema(parameters=[
        OpenApiParameter('template', str, description='"bulk_index" for compact rows'),
        OpenApiParameter('show_deleted', bool),
        OpenApiParameter('per_page', int),
    ])
    def list(self, request, *args, **kwargs):
        if request.query_params.get('template') == 'bulk_index':
            queryset = self.filter_queryset(self.get_queryset())
            page = self.paginate_queryset(queryset)
            rows = page if page is not None else queryset
            return Response(BulkIndexVariantSerializer(rows, many=True).data)
        return super().list(request, *args, **kwargs)

    @action(detail=False, methods=['get'])
    def new(self, request, *args, **kwargs):
        return Response({
            'attributes': VariantSerializer.STANDARD_ATTRIBUTES,
            'required_attributes': [],
        })

    def create(self, request, *args, **kwargs):
        product = self.get_product()
        if product is None:
            raise NotFound('Variants are created through their product.')
        self.check_object_permissions(request, product)

        serializer = self.get_serializer(data=unwrap(request.data, 'variant'))
        serializer.is_valid(raise_exception=True)
        variant = serializer.save(product=product, is_master=False)
        ProductLogger.info(
            ProductLog.UPDATED,
            f"Added variant {variant.pk} to '{product.name}'",
            variant=variant,
            user=request.user,
        )
        return Response(
            self.get_serializer(variant).data, status=status.HTTP_201_CREATED
        )

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', True)
        variant = self.get_object()
        serializer = self.get_serializer(
            variant, data=unwrap(request.data, 'variant'), partial=partial
        )
        serializer.is_valid(raise_exception=True)
        serializer.save()
        if getattr(variant, '_prefetched_objects_cache', None):
            variant._prefetched_objects_cache = {}
        return Response(serializer.data)

    def destroy(self, request, *args, **kwargs):
        variant = self.get_object()
        try:
            VariantDeleter(request.user).delete(variant)
        except DjangoValidationError as e:
            return deletion_refused(e)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['delete'])
    def soft_delete(self, request, *args, **kwargs):
        if self.get_product() is None:
            raise NotFound()
        return self.destroy(request, *args, **kwargs)


@extend_schema(tags=['Catalog'], request=ProductImageUploadSerializer, responses=ProductImageSerializer)
class ProductImageView(APIView):
    """Create or replace the main image of a product."""
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request, product_id):
        product = get_object_or_404(Product, pk=product_id)
        if not EnterprisePermissions(request.user).can_manage_product(product):
            raise PermissionDenied()

        upload = ProductImageUploadSerializer(data=request.data)
        if not upload.is_valid():
            return Response(
                {'errors': upload.errors},
                status=status.HTTP_422_UNPROCESSABLE_ENTITY,
            )
        attachment = upload.validated_data['file']
        content_type = getattr(attachment, 'content_type', '') or ''

        image = product.images.first()
        if image is None:
            image = Image(variant=product.master, position=0)
            created = True
        else:
            created = False
            if image.attachment:
                image.attachment.delete(save=False)
        image.attachment = attachment
        image.attachment_content_type = content_type
        image.alt = upload.validated_data['alt'] or image.alt
        image.save()

        ProductLogger.info(
            ProductLog.UPDATED,
            f"{'Added' if created else 'Replaced'} image of '{product.name}'",
            product=product,
            user=request.user,
        )
        return Response(
            ProductImageSerializer(image).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


@extend_schema(tags=['Catalog'])
class BulkProductsView(generics.ListAPIView):
    """
    Products the user manages, one cached payload per product.
    """
    pagination_class = ProductPagination
    filter_backends = [QueryFilterBackend, QuerySortFilter]
    filterset_class = ProductFilter
    ordering_fields = ['id', 'name', 'available_on', 'created_at']

    def get_queryset(self):
        return (
            EnterprisePermissions(self.request.user)
            .managed_products()
            .order_by('name', 'id')
        )

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        products = page if page is not None else queryset
        data = [ProductsCache.fetch(product) for product in products]
        if page is not None:
            return self.get_paginated_response(data)
        return Response(data)
