"""
URL configuration for the foodhub project.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.contrib.auth import views as auth_views
from django.urls import include, path
from django.views.generic import RedirectView

from apps.account import views as account_views
from apps.catalog import views as catalog_views

urlpatterns = [
    path("", RedirectView.as_view(pattern_name="account", permanent=False), name="home"),
    path("django-admin/", admin.site.urls),
    path("admin/products/", include("apps.catalog.urls")),
    path("api/", include("apps.api.urls")),
    path("account/", include("apps.account.urls")),
    path("signup/", account_views.signup, name="signup"),
    path(
        "login/",
        auth_views.LoginView.as_view(template_name="registration/login.html"),
        name="login",
    ),
    path("logout/", auth_views.LogoutView.as_view(), name="logout"),
    path("unauthorized/", catalog_views.unauthorized, name="unauthorized"),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
