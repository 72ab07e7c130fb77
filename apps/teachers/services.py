# teachers/services.py
import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.http import Http404
from django.utils import timezone

from apps.core.utils import any_overlap_ci, parse_bool, split_csv

from .models import KycDocument, TeacherProfile

logger = logging.getLogger(__name__)

User = get_user_model()

KYC_MESSAGES = {
    'pending': "Your KYC is already under review. Please wait for approval.",
    'approved': "Your KYC is already approved.",
}


def search_teachers(params):
    """Teacher users joined with their profile, location-verified first."""
    queryset = (
        User.objects.filter(role=User.Role.TEACHER, is_banned=False)
        .select_related('teacher_profile')
        .order_by('-is_location_verified', '-created_at')
    )
    if parse_bool(params.get('verified')):
        queryset = queryset.filter(is_location_verified=True)

    location = (params.get('location') or '').strip()
    if location:
        queryset = queryset.filter(city__icontains=location)

    teachers = list(queryset)
    subjects = split_csv(params.get('subjects'))
    if subjects:
        teachers = [t for t in teachers if any_overlap_ci(_subjects_of(t), subjects)]
    return teachers


def _subjects_of(user):
    profile = getattr(user, 'teacher_profile', None)
    return profile.get_subjects_list() if profile else []


def get_teacher_profile(user):
    try:
        return TeacherProfile.objects.get(user=user)
    except TeacherProfile.DoesNotExist:
        raise Http404("Teacher profile not found")


def submit_kyc(user, aadhaar=None, pan=None, selfie=None):
    """
    Queue identity documents for review. A teacher may resubmit only after a
    rejection.
    """
    teacher = get_teacher_profile(user)
    existing = teacher.kyc_documents.order_by('-submitted_at').first()
    if existing is not None and existing.status in KYC_MESSAGES:
        raise ValueError(KYC_MESSAGES[existing.status])

    document = KycDocument.objects.create(
        teacher=teacher,
        aadhaar_card=aadhaar,
        pan_card=pan,
        selfie=selfie,
    )
    logger.info("KYC submitted by %s", user.email)
    return document


@transaction.atomic
def update_kyc_status(teacher, status):
    """Record a review decision on every document of the teacher."""
    if status not in dict(TeacherProfile.KYC_STATUS_CHOICES):
        raise ValueError("Invalid KYC status")

    teacher.kyc_documents.update(status=status, reviewed_at=timezone.now())
    teacher.kyc_status = status
    update_fields = ['kyc_status', 'updated_at']
    if status == 'approved':
        teacher.is_verified = True
        update_fields.append('is_verified')
    teacher.save(update_fields=update_fields)
    logger.info("KYC for %s marked %s", teacher.user.email, status)
    return teacher
