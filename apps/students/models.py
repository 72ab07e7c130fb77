from django.conf import settings
from django.db import models


class StudentProfile(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='student_profile',
    )
    student_class = models.CharField(max_length=50, blank=True)
    school_name = models.CharField(max_length=255, blank=True)

    # Address (mirrors the user's verified location)
    city = models.CharField(max_length=120, blank=True)
    state = models.CharField(max_length=120, blank=True)
    pin_code = models.CharField(max_length=20, blank=True)
    street = models.CharField(max_length=255, blank=True)
    village = models.CharField(max_length=255, blank=True)

    budget_min = models.DecimalField(max_digits=10, decimal_places=2, default=1.00)
    budget_max = models.DecimalField(max_digits=10, decimal_places=2, default=10.00)
    preferred_subjects = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'student_profiles'
        verbose_name = 'Student Profile'
        verbose_name_plural = 'Student Profiles'

    def __str__(self):
        return f"{self.user.get_full_name()} ({self.student_class or 'no class'})"

    def copy_address_from(self, user):
        self.city = user.city
        self.state = user.state
        self.pin_code = user.pin_code
        self.street = user.street
