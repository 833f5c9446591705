import logging
from django.contrib.auth.signals import user_logged_in, user_logged_out, user_login_failed
from django.dispatch import receiver
from .models import ProductLog

logger = logging.getLogger(__name__)


class ProductLogger:
    """Helper to log catalog events to DB and console."""

    @staticmethod
    def _create(log_type, event, message, product=None, variant=None, user=None):
        if product is None and variant is not None:
            product = variant.product
        enterprise = getattr(product, "supplier", None)
        if user is not None and not getattr(user, "is_authenticated", False):
            user = None
        return ProductLog.objects.create(
            event=event,
            message=message,
            log_type=log_type,
            product=product,
            variant=variant,
            enterprise=enterprise,
            user=user,
        )

    @staticmethod
    def info(event, message: str, product=None, variant=None, user=None):
        logger.info("[Product %s] %s", event, message)
        return ProductLogger._create(
            ProductLog.INFO, event, message, product, variant, user
        )

    @staticmethod
    def warning(event, message: str, product=None, variant=None, user=None):
        logger.warning("[Product %s] %s", event, message)
        return ProductLogger._create(
            ProductLog.WARNING, event, message, product, variant, user
        )


def get_client_ip(request):
    """Get the client IP address from the request."""
    if request is None:
        return None
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        ip = x_forwarded_for.split(',')[0]
    else:
        ip = request.META.get('REMOTE_ADDR')
    return ip


def get_user_agent(request):
    if request is None:
        return ''
    return request.META.get('HTTP_USER_AGENT', '')[:500]


@receiver(user_logged_in)
def log_user_login(sender, request, user, **kwargs):
    """Log successful user login."""
    from .models import UserLoginLog

    UserLoginLog.objects.create(
        user=user,
        action=UserLoginLog.LOGIN,
        ip_address=get_client_ip(request),
        user_agent=get_user_agent(request),
    )


@receiver(user_logged_out)
def log_user_logout(sender, request, user, **kwargs):
    """Log user logout."""
    if user:
        from .models import UserLoginLog

        UserLoginLog.objects.create(
            user=user,
            action=UserLoginLog.LOGOUT,
            ip_address=get_client_ip(request),
            user_agent=get_user_agent(request),
        )


@receiver(user_login_failed)
def log_user_login_failed(sender, credentials, request=None, **kwargs):
    """Log failed login attempts."""
    from .models import UserLoginLog

    UserLoginLog.objects.create(
        username_attempted=credentials.get('username', '')[:150],
        action=UserLoginLog.FAILED_LOGIN,
        ip_address=get_client_ip(request),
        user_agent=get_user_agent(request),
    )
