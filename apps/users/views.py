# users/views.py
import logging

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.mixins import ApiErrorMixin

from . import services
from .models import User
from .serializers import LoginSerializer, RegisterSerializer, UserSerializer

logger = logging.getLogger(__name__)


class RegisterView(ApiErrorMixin, APIView):
    """Create a student or teacher account and sign it in."""
    permission_classes = [AllowAny]
    authentication_classes = []
    error_message = "Registration failed"

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        if not serializer.is_valid():
            logger.warning("Registration rejected for %s: %s", request.data.get("email"), serializer.errors)
            raise ValidationError(serializer.errors)
        user = services.register_user(serializer.validated_data)
        return Response(
            {"token": services.issue_token(user), "user": UserSerializer(user).data},
            status=status.HTTP_201_CREATED,
        )


class LoginView(ApiErrorMixin, APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    error_message = "Login failed"
    invalid_message = "Invalid credentials"

    def get_user(self, email, password):
        try:
            user = User.objects.get_by_email(email)
        except User.DoesNotExist:
            return None
        if not user.check_password(password):
            return None
        return user

    def is_allowed(self, user):
        return True

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"message": self.invalid_message}, status=status.HTTP_401_UNAUTHORIZED)

        user = self.get_user(serializer.validated_data["email"], serializer.validated_data["password"])
        if user is None or not self.is_allowed(user):
            logger.warning("Failed login attempt for %s", serializer.validated_data["email"])
            return Response({"message": self.invalid_message}, status=status.HTTP_401_UNAUTHORIZED)
        if user.is_banned:
            logger.warning("Banned user %s attempted to log in", user.email)
            return Response({"message": "Account has been suspended"}, status=status.HTTP_403_FORBIDDEN)

        return Response({"token": services.issue_token(user), "user": UserSerializer(user).data})


class MeView(ApiErrorMixin, APIView):
    error_message = "Failed to get user"

    def get(self, request):
        user = request.user
        return Response({"user": UserSerializer(user).data, "profile": services.serialize_profile(user)})
