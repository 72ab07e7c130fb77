from django.db import transaction

from .filters import RequirementFilter
from .models import Requirement


def list_requirements(params):
    queryset = Requirement.objects.filter(is_active=True).select_related('user').order_by('-created_at')
    return RequirementFilter(params, queryset=queryset).qs


@transaction.atomic
def create_requirement(user, serializer):
    """A user keeps a single active requirement; posting a new one retires the old ones."""
    Requirement.objects.filter(user=user, is_active=True).update(is_active=False)
    return serializer.save(user=user, user_type=user.role, is_active=True)


def get_active_requirement(user):
    return Requirement.objects.filter(user=user, is_active=True).order_by('-created_at').first()


def deactivate_requirements(user):
    return Requirement.objects.filter(user=user, is_active=True).update(is_active=False)
