"""
Cookie-based JWT authentication views.

These views set JWT tokens as httpOnly cookies instead of returning them
in the response body, so browser clients never handle raw tokens.
"""
from django.conf import settings
from django.contrib.auth import get_user_model
from django.middleware.csrf import get_token
from rest_framework import exceptions, serializers, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from rest_framework_simplejwt.tokens import RefreshToken

from apps.enterprise.permissions import EnterprisePermissions

User = get_user_model()


class LoginRateThrottle(AnonRateThrottle):
    """Stricter rate limiting for login attempts."""
    rate = '5/minute'
    scope = 'login'


class EmailOrUsernameTokenSerializer(TokenObtainPairSerializer):
    """
    Accepts either a username or an email address as the identifier.
    Emails are matched case-insensitively.
    """

    def validate(self, attrs):
        identifier = attrs.get(self.username_field, '')
        if '@' in identifier:
            user = User.objects.filter(email__iexact=identifier).order_by('pk').first()
            if user is not None:
                attrs[self.username_field] = user.get_username()
        return super().validate(attrs)


def get_cookie_settings():
    """Get cookie settings from Django settings."""
    jwt_settings = settings.SIMPLE_JWT
    return {
        'httponly': jwt_settings.get('AUTH_COOKIE_HTTP_ONLY', True),
        'secure': jwt_settings.get('AUTH_COOKIE_SECURE', settings.AUTH_COOKIE_SECURE),
        'samesite': jwt_settings.get('AUTH_COOKIE_SAMESITE', settings.AUTH_COOKIE_SAMESITE),
        'path': jwt_settings.get('AUTH_COOKIE_PATH', '/'),
    }


def set_token_cookies(response, access_token, refresh_token=None):
    """Set JWT tokens as httpOnly cookies on response."""
    jwt_settings = settings.SIMPLE_JWT
    cookie_settings = get_cookie_settings()

    response.set_cookie(
        key=jwt_settings.get('AUTH_COOKIE', 'access_token'),
        value=str(access_token),
        max_age=int(jwt_settings['ACCESS_TOKEN_LIFETIME'].total_seconds()),
        **cookie_settings
    )

    if refresh_token:
        response.set_cookie(
            key=jwt_settings.get('AUTH_COOKIE_REFRESH', 'refresh_token'),
            value=str(refresh_token),
            max_age=int(jwt_settings['REFRESH_TOKEN_LIFETIME'].total_seconds()),
            **cookie_settings
        )

    return response


def clear_token_cookies(response):
    """Clear JWT token cookies."""
    jwt_settings = settings.SIMPLE_JWT
    cookie_settings = get_cookie_settings()

    for key in (
        jwt_settings.get('AUTH_COOKIE', 'access_token'),
        jwt_settings.get('AUTH_COOKIE_REFRESH', 'refresh_token'),
    ):
        response.delete_cookie(
            key=key,
            path=cookie_settings['path'],
            samesite=cookie_settings['samesite'],
        )
    return response


def user_payload(user):
    perms = EnterprisePermissions(user)
    return {
        'id': user.id,
        'username': user.username,
        'email': user.email,
        'is_staff': user.is_staff,
        'enterprises': [
            {'id': e.id, 'name': e.name}
            for e in perms.managed_enterprises().order_by('name')
        ],
    }


class CookieTokenObtainView(APIView):
    """
    Login endpoint that sets JWT tokens as httpOnly cookies.

    POST /api/auth/login/
    {"username": "username or email", "password": "password"}
    """
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [LoginRateThrottle]

    def post(self, request):
        serializer = EmailOrUsernameTokenSerializer(data={
            'username': request.data.get('username', ''),
            'password': request.data.get('password', ''),
        })
        try:
            serializer.is_valid(raise_exception=True)
        except (exceptions.AuthenticationFailed, serializers.ValidationError) as e:
            return Response(
                {'detail': 'Invalid username or password.', 'errors': e.detail},
                status=status.HTTP_401_UNAUTHORIZED
            )

        response = Response({
            'user': user_payload(serializer.user),
            'message': 'Login successful',
        })
        set_token_cookies(
            response,
            serializer.validated_data['access'],
            serializer.validated_data['refresh'],
        )
        get_token(request)
        return response


class CookieTokenRefreshView(APIView):
    """
    Refresh endpoint that reads the refresh token from its cookie and sets
    a new access token cookie.

    POST /api/auth/refresh/
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        refresh_token = request.COOKIES.get(
            settings.SIMPLE_JWT.get('AUTH_COOKIE_REFRESH', 'refresh_token')
        )
        if not refresh_token:
            return Response(
                {'detail': 'Refresh token not found', 'code': 'token_not_found'},
                status=status.HTTP_401_UNAUTHORIZED
            )

        try:
            refresh = RefreshToken(refresh_token)
        except TokenError:
            return Response(
                {'detail': 'Session expired. Please sign in again.', 'code': 'token_expired'},
                status=status.HTTP_401_UNAUTHORIZED
            )

        response = Response({'message': 'Token refreshed'})
        set_token_cookies(response, str(refresh.access_token))
        return response


class CookieTokenLogoutView(APIView):
    """
    Logout endpoint that clears the token cookies.

    POST /api/auth/logout/
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        response = Response({'message': 'Logged out successfully'})
        clear_token_cookies(response)
        return response


class AuthMeView(APIView):
    """
    Current user with the enterprises they manage.

    GET /api/auth/me/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({'user': user_payload(request.user)})
