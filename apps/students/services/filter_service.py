# students/services/filter_service.py
from django.contrib.auth import get_user_model

from apps.core.utils import any_overlap_ci, contains_ci, parse_bool, split_csv

User = get_user_model()


class StudentFilterService:
    @staticmethod
    def filter_students(request_get_params):
        """Student users joined with their profile, location-verified first."""
        queryset = (
            User.objects.filter(role=User.Role.STUDENT, is_banned=False)
            .select_related("student_profile")
            .order_by("-is_location_verified", "-created_at")
        )

        if parse_bool(request_get_params.get("verified")):
            queryset = queryset.filter(is_location_verified=True)

        location = (request_get_params.get("location") or "").strip()
        if location:
            queryset = queryset.filter(city__icontains=location)

        students = list(queryset)

        student_class = (request_get_params.get("class") or "").strip()
        if student_class and student_class != "all":
            return [s for s in students if contains_ci(StudentFilterService._class_of(s), student_class)]

        classes = split_csv(request_get_params.get("classes"))
        if classes:
            return [s for s in students if any_overlap_ci([StudentFilterService._class_of(s)], classes)]

        return students

    @staticmethod
    def _class_of(user):
        profile = getattr(user, "student_profile", None)
        return profile.student_class if profile else ""
