# users/models.py
import uuid
from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .managers import CustomUserManager

COORDINATE_QUANTUM = Decimal("0.00000001")


def to_coordinate(value):
    """Quantize a latitude/longitude to the 8 decimal places stored in the DB."""
    if value is None or value == "":
        return None
    return Decimal(str(value)).quantize(COORDINATE_QUANTUM, rounding=ROUND_HALF_UP)


class User(AbstractUser):
    """Custom User model using email as the primary identifier"""

    class Role(models.TextChoices):
        STUDENT = "student", "Student"
        TEACHER = "teacher", "Teacher"
        ADMIN = "admin", "Administrator"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    username = None  # disable username field
    email = models.EmailField(_("email address"), unique=True)
    first_name = models.CharField(_("first name"), max_length=150)

    mobile = models.CharField(_("mobile number"), max_length=20, blank=True)
    profile_image = models.ImageField(upload_to="profiles/", blank=True, null=True)

    role = models.CharField(max_length=20, choices=Role.choices, default=Role.STUDENT)

    # Presence
    is_online = models.BooleanField(default=False)
    last_seen = models.DateTimeField(default=timezone.now)

    # Geolocation
    is_location_verified = models.BooleanField(default=False)
    latitude = models.DecimalField(max_digits=10, decimal_places=8, null=True, blank=True)
    longitude = models.DecimalField(max_digits=11, decimal_places=8, null=True, blank=True)
    full_address = models.TextField(blank=True)
    street = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=120, blank=True)
    state = models.CharField(max_length=120, blank=True)
    pin_code = models.CharField(max_length=20, blank=True)
    is_live_sharing = models.BooleanField(default=False)
    live_location_updated_at = models.DateTimeField(blank=True, null=True)

    # Moderation
    is_banned = models.BooleanField(default=False)
    ban_reason = models.CharField(max_length=255, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Login with email
    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["first_name"]

    objects = CustomUserManager()

    class Meta:
        db_table = "users"
        verbose_name = "User"
        verbose_name_plural = "Users"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["role", "is_location_verified"]),
            models.Index(fields=["role", "is_live_sharing"]),
        ]

    def __str__(self):
        return self.get_full_name() or self.email

    def get_full_name(self):
        """Return first_name + last_name with fallback to email."""
        full_name = f"{self.first_name} {self.last_name or ''}".strip()
        return full_name if full_name else self.email

    # Role-based checks
    @property
    def is_student(self): return self.role == self.Role.STUDENT
    @property
    def is_teacher(self): return self.role == self.Role.TEACHER
    @property
    def is_admin(self): return self.role == self.Role.ADMIN

    @property
    def counterpart_role(self):
        """Students look for teachers; everybody else looks for students."""
        if self.is_student:
            return self.Role.TEACHER
        return self.Role.STUDENT

    @property
    def has_coordinates(self):
        return self.latitude is not None and self.longitude is not None

    @property
    def profile_image_url(self):
        if self.profile_image:
            return self.profile_image.url
        return settings.DEFAULT_PROFILE_IMAGES.get(self.role, "")

    @property
    def recently_online(self):
        """Online flag that ignores stale presence older than the online window."""
        if not self.is_online or not self.last_seen:
            return False
        window = timedelta(minutes=settings.ONLINE_WINDOW_MINUTES)
        return self.last_seen > timezone.now() - window

    def get_profile(self):
        """Return the role-specific profile, or None for admins and incomplete accounts."""
        if self.is_student:
            return getattr(self, "student_profile", None)
        if self.is_teacher:
            return getattr(self, "teacher_profile", None)
        return None

    def set_online_status(self, is_online):
        """Presence changes in either direction count as the user being seen."""
        self.is_online = is_online
        self.last_seen = timezone.now()
        self.save(update_fields=["is_online", "last_seen", "updated_at"])

    def ban(self, reason=""):
        self.is_banned = True
        self.is_active = False
        self.is_online = False
        self.ban_reason = reason
        self.save(update_fields=["is_banned", "is_active", "is_online", "ban_reason", "updated_at"])

    def unban(self):
        self.is_banned = False
        self.is_active = True
        self.ban_reason = ""
        self.save(update_fields=["is_banned", "is_active", "ban_reason", "updated_at"])
