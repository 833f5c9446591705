# apps/account/forms.py
"""Forms for signing up and updating a customer account."""
# Django imports
from django import forms
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password

User = get_user_model()

TAKEN_MESSAGE = "has already been taken"
MISMATCH_MESSAGE = "doesn't match Password"


def email_taken(email, exclude=None) -> bool:
    users = User.objects.filter(email__iexact=email)
    if exclude is not None:
        users = users.exclude(pk=exclude.pk)
    return users.exists()


class PasswordConfirmationMixin:
    """Checks password against password_confirmation."""

    def clean(self):
        cleaned_data = super().clean()
        password = cleaned_data.get("password")
        confirmation = cleaned_data.get("password_confirmation")
        if password and password != confirmation:
            self.add_error("password_confirmation", MISMATCH_MESSAGE)
        return cleaned_data


class SignupForm(PasswordConfirmationMixin, forms.Form):
    email = forms.EmailField(
        widget=forms.EmailInput(attrs={'placeholder': 'you@example.com'})
    )
    password = forms.CharField(widget=forms.PasswordInput)
    password_confirmation = forms.CharField(widget=forms.PasswordInput)

    def clean_email(self):
        email = self.cleaned_data["email"].strip()
        if email_taken(email):
            raise forms.ValidationError(TAKEN_MESSAGE)
        return email

    def clean_password(self):
        password = self.cleaned_data["password"]
        validate_password(password)
        return password

    def save(self):
        email = self.cleaned_data["email"]
        return User.objects.create_user(
            username=email[:150],
            email=email,
            password=self.cleaned_data["password"],
        )


class AccountUpdateForm(PasswordConfirmationMixin, forms.Form):
    """Change email and, optionally, password."""
    email = forms.EmailField()
    password = forms.CharField(widget=forms.PasswordInput, required=False)
    password_confirmation = forms.CharField(widget=forms.PasswordInput, required=False)

    def __init__(self, *args, user=None, **kwargs):
        self.user = user
        kwargs.setdefault("initial", {"email": getattr(user, "email", "")})
        super().__init__(*args, **kwargs)

    def clean_email(self):
        email = self.cleaned_data["email"].strip()
        if email_taken(email, exclude=self.user):
            raise forms.ValidationError(TAKEN_MESSAGE)
        return email

    def clean_password(self):
        password = self.cleaned_data.get("password")
        if password:
            validate_password(password, self.user)
        return password

    def save(self):
        self.user.email = self.cleaned_data["email"]
        password = self.cleaned_data.get("password")
        if password:
            self.user.set_password(password)
        self.user.save()
        return self.user
