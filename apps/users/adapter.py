# users/adapter.py
from allauth.account.adapter import DefaultAccountAdapter
from django.conf import settings
from django.core.exceptions import ValidationError


class CustomAccountAdapter(DefaultAccountAdapter):
    """Shared credential rules for the REST sign-up and the allauth pages."""

    min_password_length = 6

    def clean_email(self, email):
        return super().clean_email(email).strip().lower()

    def clean_password(self, password, user=None):
        if len(password or "") < self.min_password_length:
            raise ValidationError(f"Password must be at least {self.min_password_length} characters")
        return super().clean_password(password, user=user)

    def get_login_redirect_url(self, request):
        """Back-office staff land on the admin site, everybody else on the app."""
        if request.user.is_authenticated and request.user.role == "admin":
            return "/admin/"
        return settings.LOGIN_REDIRECT_URL
