# apps/account/tasks/email.py
"""Asynchronous tasks for sending emails."""
# Standard library imports
import logging

# Django imports
from django.contrib.auth import get_user_model
from django.contrib.auth.tokens import default_token_generator
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils.encoding import force_bytes
from django.utils.http import urlsafe_base64_encode
from django.conf import settings
from celery import shared_task
# First-party imports
from apps.log.models import EmailLog


logger = logging.getLogger(__name__)

User = get_user_model()


# ---------------------------
# Email Helpers
# ---------------------------

def build_email_context(user):
    """Generate UID and token for emails."""
    token = default_token_generator.make_token(user)
    uid = urlsafe_base64_encode(force_bytes(user.pk))
    protocol = "https" if settings.USE_HTTPS else "http"

    return {
        "user": user,
        "domain": settings.DOMAIN_NAME,
        "uid": uid,
        "token": token,
        "protocol": protocol,
    }


def has_email_been_sent(user, email_type) -> bool:
    """Check if the email has already been sent to this user"""
    return EmailLog.objects.filter(user=user, email_type=email_type).exists()


def create_email_log(user, email_type):
    """Create a log entry for a sent email"""
    logger.info("[EmailLog] Creating user_id=%s, email_type=%s", user.id, email_type)
    return EmailLog.objects.create(user=user, email_type=email_type)


def build_email_content(user, html_template, text_template) -> tuple[str, str]:
    """Render HTML and text content for the email"""
    context = build_email_context(user)
    html_content = render_to_string(html_template, context)
    text_content = render_to_string(text_template, context)
    return html_content, text_content


def send_email_message(subject, html_content, text_content, to_email):
    """Send the actual email to the recipient"""
    msg = EmailMultiAlternatives(
        subject,
        text_content,
        settings.DEFAULT_FROM_EMAIL,
        [to_email],
    )
    msg.attach_alternative(html_content, "text/html")
    msg.send()
    logger.info("[Email] Sent to=%s subject=%s", to_email, subject)


def send_email(user, subject, html_template, text_template, email_type) -> bool:
    """Send an email if it hasn't already been sent and log it"""
    if not user.email:
        logger.warning("[Email] skipped - no address user_id=%s", user.id)
        return False
    if has_email_been_sent(user, email_type):
        logger.info("[Email] skipped - already sent user_id=%s, email_type=%s", user.id, email_type)
        return False

    html_content, text_content = build_email_content(user, html_template, text_template)
    send_email_message(subject, html_content, text_content, user.email)
    create_email_log(user, email_type)
    return True


# ---------------------------
# Signup Tasks
# ---------------------------

@shared_task
def send_welcome_email(user_id):
    """Send the welcome email to a newly signed up user."""
    try:
        user = User.objects.get(pk=user_id)
    except User.DoesNotExist:
        logger.warning("[Email] welcome skipped - user %s not found", user_id)
        return False

    return send_email(
        user=user,
        subject="Welcome to FoodHub!",
        html_template="account/emails/welcome.html",
        text_template="account/emails/welcome.txt",
        email_type=EmailLog.WELCOME,
    )
