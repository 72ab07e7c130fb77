# users/services.py
import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone
from rest_framework.authtoken.models import Token

from apps.core.geo import haversine_km, reverse_geocode
from apps.core.utils import as_amount
from apps.students.models import StudentProfile
from apps.students.serializers import StudentProfileSerializer
from apps.teachers.models import TeacherProfile
from apps.teachers.serializers import TeacherProfileSerializer

from .models import User, to_coordinate
from .serializers import UserBasicUpdateSerializer

logger = logging.getLogger(__name__)

DEFAULT_MONTHLY_FEE = 5000
ADDRESS_KEYS = ("fullAddress", "street", "city", "state", "pinCode")


def issue_token(user):
    token, _ = Token.objects.get_or_create(user=user)
    return token.key


@transaction.atomic
def register_user(data):
    """Create the account and its role profile from validated sign-up data."""
    user = User.objects.create_user(
        email=data["email"],
        password=data["password"],
        first_name=data["firstName"],
        last_name=data.get("lastName", ""),
        mobile=data.get("mobile", ""),
        role=data["userType"],
    )
    if user.is_student:
        StudentProfile.objects.create(
            user=user,
            student_class=data.get("class", ""),
            school_name=data.get("schoolName", ""),
        )
    else:
        TeacherProfile.objects.create(
            user=user,
            subjects=data.get("subjects") or [],
            bio=data.get("bio", ""),
            qualification=data["qualification"],
            experience=data.get("experience", ""),
        )
    logger.info("Registered %s account %s", user.role, user.email)
    return user


def get_profile_serializer_class(user):
    if user.is_student:
        return StudentProfileSerializer
    if user.is_teacher:
        return TeacherProfileSerializer
    return None


def serialize_profile(user):
    profile = user.get_profile()
    serializer_class = get_profile_serializer_class(user)
    if profile is None or serializer_class is None:
        return None
    return serializer_class(profile).data


def build_profile_payload(user):
    """Flat view of the editable profile: basic account fields plus role fields."""
    payload = {
        "id": str(user.id),
        "email": user.email,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "mobile": user.mobile,
        "userType": user.role,
        "profileImage": user.profile_image_url,
    }
    profile = user.get_profile()
    if user.is_student and profile is not None:
        payload.update({
            "class": profile.student_class,
            "schoolName": profile.school_name,
            "budgetMin": as_amount(profile.budget_min, "2000"),
            "budgetMax": as_amount(profile.budget_max, "10000"),
            "preferredSubjects": profile.preferred_subjects or [],
        })
    elif user.is_teacher and profile is not None:
        payload.update({
            "subjects": profile.subjects or [],
            "qualification": profile.qualification,
            "experience": profile.experience,
            "bio": profile.bio,
            "monthlyFee": as_amount(profile.monthly_fee, str(DEFAULT_MONTHLY_FEE)),
        })
    return payload


def _non_empty(value):
    return value not in (None, "", [])


@transaction.atomic
def update_profile(user, data, skip_empty=False):
    """
    Apply profile edits. With `skip_empty` only non-empty values are applied,
    otherwise every supplied key is written.
    """
    if skip_empty:
        data = {key: value for key, value in data.items() if _non_empty(value)}

    basic = UserBasicUpdateSerializer(user, data=data, partial=True)
    basic.is_valid(raise_exception=True)
    basic.save()

    profile = user.get_profile()
    serializer_class = get_profile_serializer_class(user)
    if profile is not None and serializer_class is not None:
        serializer = serializer_class(profile, data=data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
    return user


def set_profile_image(user, image):
    if user.profile_image:
        user.profile_image.delete(save=False)
    user.profile_image = image
    user.save(update_fields=["profile_image", "updated_at"])
    return user.profile_image_url


def _fill_missing_address(latitude, longitude, address):
    if all(address.get(key) for key in ("fullAddress", "city", "state")):
        return address
    geocoded = reverse_geocode(latitude, longitude)
    for key in ADDRESS_KEYS:
        if not address.get(key):
            address[key] = geocoded.get(key, "")
    return address


@transaction.atomic
def update_location(user, data):
    """
    Persist a captured location and mark it verified. Missing address parts
    are completed by reverse geocoding; the role profile gets a copy.
    """
    latitude, longitude = data["latitude"], data["longitude"]
    address = _fill_missing_address(latitude, longitude, {key: data.get(key) or "" for key in ADDRESS_KEYS})

    user.latitude = to_coordinate(latitude)
    user.longitude = to_coordinate(longitude)
    user.full_address = address["fullAddress"] or f"{latitude}, {longitude}"
    user.street = address["street"]
    user.city = address["city"]
    user.state = address["state"]
    user.pin_code = address["pinCode"]
    user.is_location_verified = True
    user.save()

    profile = user.get_profile()
    if profile is not None:
        profile.copy_address_from(user)
        update_fields = ["city", "state", "pin_code", "street", "updated_at"]
        if user.is_teacher:
            profile.is_verified = True
            update_fields.append("is_verified")
        profile.save(update_fields=update_fields)
    return user


def update_live_location(user, data):
    if "isLiveSharing" in data:
        user.is_live_sharing = data["isLiveSharing"]
    if "latitude" in data:
        user.latitude = to_coordinate(data["latitude"])
        user.longitude = to_coordinate(data["longitude"])
    if data.get("fullAddress"):
        user.full_address = data["fullAddress"]
    user.live_location_updated_at = timezone.now()
    user.save()
    return user


def set_online_status(user, is_online):
    """Accepts a User or a user id; unknown ids are ignored."""
    if not isinstance(user, User):
        try:
            user = User.objects.filter(pk=user).first()
        except ValidationError:
            return None
        if user is None:
            return None
    user.set_online_status(is_online)
    return user


def resolve_target_role(user, requested=None):
    if requested in (User.Role.STUDENT, User.Role.TEACHER):
        return requested
    return user.counterpart_role


def _candidates(user, role):
    return (
        User.objects.filter(role=role, is_banned=False, latitude__isnull=False, longitude__isnull=False)
        .exclude(pk=user.pk)
        .select_related("teacher_profile", "student_profile")
    )


def _within_radius(user, queryset, radius):
    results = []
    for candidate in queryset:
        distance = haversine_km(user.latitude, user.longitude, candidate.latitude, candidate.longitude)
        if distance <= radius:
            results.append((distance, candidate))
    results.sort(key=lambda pair: pair[0])
    return results


def _nearby_entry(candidate, distance):
    subjects, class_info, rating = [], "", None
    monthly_fee = DEFAULT_MONTHLY_FEE
    profile = candidate.get_profile()
    if candidate.is_teacher and profile is not None:
        subjects = profile.subjects or []
        monthly_fee = int(profile.monthly_fee) if profile.monthly_fee else DEFAULT_MONTHLY_FEE
        rating = float(profile.rating)
    elif candidate.is_student and profile is not None:
        class_info = profile.student_class
    return {
        "id": str(candidate.id),
        "name": candidate.get_full_name(),
        "profileImage": candidate.profile_image_url,
        "city": candidate.city,
        "state": candidate.state,
        "pinCode": candidate.pin_code,
        "fullAddress": candidate.full_address,
        "latitude": str(candidate.latitude),
        "longitude": str(candidate.longitude),
        "distance": round(distance, 1),
        "userType": candidate.role,
        "isVerified": candidate.is_location_verified,
        "monthlyFee": monthly_fee,
        "rating": rating,
        "subjects": subjects,
        "class": class_info,
    }


def nearby_users(user, radius=None):
    """Location-verified users of the opposite role within `radius` km, closest first."""
    if not user.has_coordinates:
        return []
    radius = radius or settings.DEFAULT_NEARBY_RADIUS_KM
    queryset = _candidates(user, user.counterpart_role).filter(is_location_verified=True)
    return [_nearby_entry(candidate, distance) for distance, candidate in _within_radius(user, queryset, radius)]


def _live_entry(candidate, distance):
    fallback_address = f"{candidate.latitude}, {candidate.longitude}"
    return {
        "id": str(candidate.id),
        "firstName": candidate.first_name,
        "lastName": candidate.last_name,
        "name": candidate.get_full_name(),
        "userType": candidate.role,
        "profileImage": candidate.profile_image_url,
        "latitude": str(candidate.latitude),
        "longitude": str(candidate.longitude),
        "fullAddress": candidate.full_address,
        "city": candidate.city,
        "state": candidate.state,
        "isLocationVerified": candidate.is_location_verified,
        "distance": round(distance, 1),
        "currentLocation": {
            "city": candidate.city or "Unknown",
            "state": candidate.state or "Unknown",
            "fullAddress": candidate.full_address or fallback_address,
        },
        "lastLocationUpdate": candidate.live_location_updated_at,
    }


def nearby_live_users(user, radius=None, target_role=None):
    """Users currently sharing their live location within `radius` km."""
    if not user.has_coordinates:
        return []
    radius = radius or settings.DEFAULT_LIVE_RADIUS_KM
    role = resolve_target_role(user, target_role)
    queryset = _candidates(user, role).filter(is_live_sharing=True)
    return [_live_entry(candidate, distance) for distance, candidate in _within_radius(user, queryset, radius)]


def user_card(user):
    """Compact summary of a user shown in request lists and recommendations."""
    profile = user.get_profile()
    card = {
        "id": str(user.id),
        "name": user.get_full_name(),
        "profileImage": user.profile_image_url,
        "userType": user.role,
        "city": user.city,
        "subjects": [],
        "rating": None,
        "isVerified": user.is_location_verified,
        "qualification": "",
        "class": "",
    }
    if user.is_teacher and profile is not None:
        card.update({
            "subjects": profile.subjects or [],
            "rating": float(profile.rating),
            "isVerified": profile.is_verified,
            "qualification": profile.qualification,
        })
    elif user.is_student and profile is not None:
        card["class"] = profile.student_class
    return card
