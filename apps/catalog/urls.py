from django.urls import path

from . import views

urlpatterns = [
    path("", views.product_list, name="product_list"),
    path("new/", views.product_new, name="product_new"),
    path("create/", views.product_create, name="product_create"),
    path("bulk_update/", views.bulk_update, name="product_bulk_update"),
    path("<int:pk>/edit/", views.product_edit, name="product_edit"),
]
