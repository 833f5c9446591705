"""
URL patterns for Account API endpoints.
"""
from django.urls import path

from .auth_views import (
    CookieTokenObtainView,
    CookieTokenRefreshView,
    CookieTokenLogoutView,
    AuthMeView,
)

urlpatterns = [
    # Cookie-based auth endpoints
    path('auth/login/', CookieTokenObtainView.as_view(), name='auth_login'),
    path('auth/refresh/', CookieTokenRefreshView.as_view(), name='auth_refresh'),
    path('auth/logout/', CookieTokenLogoutView.as_view(), name='auth_logout'),
    path('auth/me/', AuthMeView.as_view(), name='auth_me'),
]
