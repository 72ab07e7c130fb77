import logging

from rest_framework import exceptions, permissions
from rest_framework.authentication import TokenAuthentication

logger = logging.getLogger(__name__)


class BearerTokenAuthentication(TokenAuthentication):
    """
    Token authentication reading `Authorization: Bearer <token>`.
    Inactive (banned) users are rejected by the parent class.
    """
    keyword = 'Bearer'

    def authenticate_credentials(self, key):
        try:
            return super().authenticate_credentials(key)
        except exceptions.AuthenticationFailed as exc:
            if exc.detail == 'User inactive or deleted.':
                raise exceptions.AuthenticationFailed('Account has been suspended')
            raise exceptions.AuthenticationFailed('Invalid token')


class IsAdminRole(permissions.BasePermission):
    """
    Allows access only to users whose role is admin
    """
    message = 'Admin access required'

    def has_permission(self, request, view):
        user = request.user
        if user and user.is_authenticated and user.role == 'admin':
            return True
        logger.warning(
            "Unauthorized admin API access attempt by %s on %s",
            getattr(user, 'email', 'anonymous'), request.path,
        )
        return False

