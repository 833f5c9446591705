# apps/account/views.py
"""Customer account pages."""
import logging

from django.contrib import messages
from django.contrib.auth import get_user_model, login
from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_POST

from apps.enterprise.models import Enterprise

from .forms import AccountUpdateForm, SignupForm
from .tasks.email import send_welcome_email

logger = logging.getLogger(__name__)

User = get_user_model()


@login_required
def account_show(request):
    """Completed orders of the user and the shops they were placed with."""
    orders = (
        request.user.orders.complete()
        .filter(distributor__isnull=False)
        .select_related("distributor")
        .order_by("-completed_at")
    )
    shops = (
        Enterprise.objects
        .filter(distributed_orders__in=orders)
        .distinct()
        .order_by("name")
    )
    return render(
        request,
        "account/show.html",
        {"orders": orders, "shops": shops, "form": AccountUpdateForm(user=request.user)},
    )


@require_POST
def registered_email(request):
    email = request.POST.get("email", "").strip()
    registered = bool(email) and User.objects.filter(email__iexact=email).exists()
    return JsonResponse({"registered": registered})


def signup(request):
    if request.method == "POST":
        form = SignupForm(request.POST)
        if form.is_valid():
            user = form.save()
            login(request, user, backend="django.contrib.auth.backends.ModelBackend")
            send_welcome_email.delay(user.pk)
            logger.info("New customer account user_id=%s", user.pk)
            messages.success(request, "Welcome! Your account has been created.")
            return redirect("account")
    else:
        form = SignupForm()
    return render(request, "account/signup.html", {"form": form})


@login_required
def account_update(request):
    if request.method == "POST":
        form = AccountUpdateForm(request.POST, user=request.user)
        if form.is_valid():
            user = form.save()
            if form.cleaned_data.get("password"):
                # Changing the password would otherwise end this session
                login(request, user, backend="django.contrib.auth.backends.ModelBackend")
            messages.success(request, "Account updated.")
            return redirect("account")
    else:
        form = AccountUpdateForm(user=request.user)
    return render(request, "account/edit.html", {"form": form})
