from django.conf import settings
from django.db import models


class Requirement(models.Model):
    TYPE_CHOICES = (
        ('online', 'Online'),
        ('offline', 'Offline'),
        ('both', 'Both'),
    )

    FEE_TYPE_CHOICES = (
        ('per_hour', 'Per Hour'),
        ('per_day', 'Per Day'),
        ('per_month', 'Per Month'),
        ('per_subject', 'Per Subject'),
    )

    USER_TYPE_CHOICES = (
        ('student', 'Student'),
        ('teacher', 'Teacher'),
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='requirements',
    )
    user_type = models.CharField(max_length=20, choices=USER_TYPE_CHOICES)
    subjects = models.JSONField(default=list)
    classes = models.JSONField(default=list, blank=True)
    location = models.CharField(max_length=255)
    city = models.CharField(max_length=120, blank=True)
    state = models.CharField(max_length=120, blank=True)
    pin_code = models.CharField(max_length=20, blank=True)
    street = models.CharField(max_length=255, blank=True)
    village = models.CharField(max_length=255, blank=True)
    type = models.CharField(max_length=10, choices=TYPE_CHOICES, default='both')
    fee = models.DecimalField(max_digits=10, decimal_places=2, blank=True, null=True)
    fee_type = models.CharField(max_length=20, choices=FEE_TYPE_CHOICES, default='per_month')
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'requirements'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['is_active', 'user_type']),
            models.Index(fields=['user', 'is_active']),
        ]

    def __str__(self):
        return f"{self.user.get_full_name()} - {', '.join(self.subjects or [])} ({self.location})"
