from django.urls import path

from . import views

urlpatterns = [
    path("", views.account_show, name="account"),
    path("registered_email/", views.registered_email, name="registered_email"),
    path("update/", views.account_update, name="account_update"),
]
