"""
Custom JWT Authentication with httpOnly cookie support.
"""
from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError


class CookieJWTAuthentication(JWTAuthentication):
    """
    JWT authentication that reads tokens from httpOnly cookies.

    Falls back to Authorization header for API clients.

    Cookie names are configured in settings.SIMPLE_JWT:
    - AUTH_COOKIE: Access token cookie name (default: 'access_token')
    - AUTH_COOKIE_REFRESH: Refresh token cookie name (default: 'refresh_token')
    """

    def authenticate(self, request):
        access_token = request.COOKIES.get(
            settings.SIMPLE_JWT.get('AUTH_COOKIE', 'access_token')
        )

        if access_token:
            try:
                validated_token = self.get_validated_token(access_token)
                return self.get_user(validated_token), validated_token
            except (InvalidToken, TokenError):
                # Stale cookie; the Authorization header may still be valid
                pass

        return super().authenticate(request)
