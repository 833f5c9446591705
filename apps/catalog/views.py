# apps/catalog/views.py
"""Admin product pages used by enterprise managers."""
import json
import logging
from urllib.parse import urlencode

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction
from django.http import Http404, JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.views.decorators.http import require_GET, require_POST

from apps.catalog.forms import (
    ProductForm,
    ProductPropertyFormSet,
    apply_product_properties,
    product_property_initial,
)
from apps.catalog.models import Product
from apps.catalog.services.product_set import (
    ProductSet,
    error_messages,
    validate_product_variants,
)
from apps.enterprise.permissions import EnterprisePermissions
from apps.log.models import ProductLog
from apps.log.signals import ProductLogger

logger = logging.getLogger(__name__)

BULK_PRODUCTS_PER_PAGE = 500


def can_create_products(permissions):
    return permissions.is_admin or permissions.managed_enterprises().exists()


@login_required
@require_GET
def product_list(request):
    permissions = EnterprisePermissions(request.user)
    products = (
        permissions.managed_products()
        .select_related("supplier", "primary_taxon")
        .order_by("name")
    )
    return render(request, "catalog/products/index.html", {"products": products})


@login_required
@require_GET
def product_new(request):
    permissions = EnterprisePermissions(request.user)
    if not can_create_products(permissions):
        return redirect("unauthorized")
    form = ProductForm(permissions=permissions)
    return render(request, "catalog/products/new.html", {"form": form})


@login_required
@require_POST
def product_create(request):
    permissions = EnterprisePermissions(request.user)
    if not can_create_products(permissions):
        return redirect("unauthorized")

    form = ProductForm(request.POST, request.FILES, permissions=permissions)
    if not form.is_valid():
        logger.info("Product form rejected: %s", form.errors.as_json())
        return render(request, "catalog/products/new.html", {"form": form})

    product = form.save()
    ProductLogger.info(
        ProductLog.CREATED,
        f"Created product '{product.name}'",
        product=product,
        user=request.user,
    )
    messages.success(request, f"Product \"{product.name}\" has been created.")

    if request.POST.get("button") == "add_another":
        return redirect("product_new")
    return redirect("product_list")


@login_required
def product_edit(request, pk):
    product = get_object_or_404(Product, pk=pk)
    permissions = EnterprisePermissions(request.user)
    if not permissions.can_manage_product(product):
        return redirect("unauthorized")

    if request.method != "POST":
        form = ProductForm(instance=product, permissions=permissions)
        formset = ProductPropertyFormSet(
            prefix="product_properties",
            initial=product_property_initial(product),
        )
        return render(
            request,
            "catalog/products/edit.html",
            {"form": form, "formset": formset, "product": product},
        )

    form = ProductForm(
        request.POST, request.FILES, instance=product, permissions=permissions
    )
    formset = ProductPropertyFormSet(request.POST, prefix="product_properties")
    if form.is_valid() and formset.is_valid():
        try:
            with transaction.atomic():
                product = form.save()
                apply_product_properties(product, formset.cleaned_data, permissions)
                validate_product_variants(product)
        except ValidationError as e:
            form.add_error(None, e)
        else:
            ProductLogger.info(
                ProductLog.UPDATED,
                f"Updated product '{product.name}'",
                product=product,
                user=request.user,
            )
            messages.success(request, f"Product \"{product.name}\" has been updated.")
            return redirect("product_edit", pk=product.pk)

    return render(
        request,
        "catalog/products/edit.html",
        {"form": form, "formset": formset, "product": product},
    )


def bulk_products_url(filters):
    query = {"page": 1, "per_page": BULK_PRODUCTS_PER_PAGE}
    for condition, value in (filters or {}).items():
        query[f"q[{condition}]"] = value
    return f"{reverse('api:bulk-products')}?{urlencode(query)}"


@login_required
@require_POST
def bulk_update(request):
    """
    Apply the bulk product editor's rows.

    The body is JSON: {"products": [...], "filters": {"name_cont": "..."}}.
    On success the client is sent to the refreshed product listing.
    """
    try:
        payload = json.loads(request.body or b"{}")
    except (TypeError, ValueError):
        return JsonResponse({"errors": ["Malformed request body"]}, status=400)
    if not isinstance(payload, dict):
        return JsonResponse({"errors": ["Malformed request body"]}, status=400)

    try:
        product_set = ProductSet(payload.get("products") or [], user=request.user)
        product_set.authorize(EnterprisePermissions(request.user))
    except Product.DoesNotExist as e:
        raise Http404(str(e))
    except ValidationError as e:
        return JsonResponse({"errors": error_messages("products", e)}, status=400)
    except PermissionDenied:
        logger.warning("Bulk update denied for user=%s", request.user.pk)
        return redirect("unauthorized")

    if product_set.save():
        return redirect(bulk_products_url(payload.get("filters")))
    return JsonResponse({"errors": product_set.errors}, status=400)


def unauthorized(request):
    return render(request, "unauthorized.html", status=401)
