from django.conf import settings
from django.db import models
from django.utils import timezone


class TeacherProfile(models.Model):
    KYC_STATUS_CHOICES = (
        ('pending', 'Pending'),
        ('approved', 'Approved'),
        ('rejected', 'Rejected'),
    )

    GENDER_CHOICES = (
        ('male', 'Male'),
        ('female', 'Female'),
        ('other', 'Other'),
    )

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='teacher_profile',
    )
    subjects = models.JSONField(default=list, blank=True)
    bio = models.TextField(blank=True)
    qualification = models.CharField(max_length=255)
    experience = models.CharField(max_length=100, blank=True)

    # Address (mirrors the user's verified location)
    city = models.CharField(max_length=120, blank=True)
    state = models.CharField(max_length=120, blank=True)
    pin_code = models.CharField(max_length=20, blank=True)
    street = models.CharField(max_length=255, blank=True)
    village = models.CharField(max_length=255, blank=True)

    age = models.PositiveIntegerField(blank=True, null=True)
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES, blank=True)

    kyc_status = models.CharField(max_length=20, choices=KYC_STATUS_CHOICES, default='approved')
    is_verified = models.BooleanField(default=True)
    rating = models.DecimalField(max_digits=3, decimal_places=2, default=3.00)
    student_count = models.PositiveIntegerField(default=0)
    monthly_fee = models.DecimalField(max_digits=10, decimal_places=2, default=1.00)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'teacher_profiles'
        verbose_name = 'Teacher Profile'
        verbose_name_plural = 'Teacher Profiles'
        indexes = [
            models.Index(fields=['kyc_status']),
            models.Index(fields=['is_verified']),
        ]

    def __str__(self):
        return f"{self.user.get_full_name()} - {self.qualification}"

    def get_subjects_list(self):
        """Return subjects as a list of strings"""
        return [str(s) for s in (self.subjects or [])]

    def copy_address_from(self, user):
        self.city = user.city
        self.state = user.state
        self.pin_code = user.pin_code
        self.street = user.street


class KycDocument(models.Model):
    STATUS_CHOICES = TeacherProfile.KYC_STATUS_CHOICES

    teacher = models.ForeignKey(
        TeacherProfile,
        on_delete=models.CASCADE,
        related_name='kyc_documents',
    )
    aadhaar_card = models.FileField(upload_to='kyc/aadhaar/', blank=True, null=True)
    pan_card = models.FileField(upload_to='kyc/pan/', blank=True, null=True)
    selfie = models.ImageField(upload_to='kyc/selfie/', blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending')
    submitted_at = models.DateTimeField(default=timezone.now)
    reviewed_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        db_table = 'kyc_documents'
        ordering = ['-submitted_at']
        verbose_name = 'KYC Document'
        verbose_name_plural = 'KYC Documents'

    def __str__(self):
        return f"KYC {self.get_status_display()} - {self.teacher.user.email}"
