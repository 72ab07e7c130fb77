import uuid
from datetime import timedelta

from django.conf import settings
from django.db import models
from django.utils import timezone


def default_message_expiry():
    return timezone.now() + timedelta(days=settings.MESSAGE_TTL_DAYS)


class Message(models.Model):
    ATTACHMENT_TYPE_CHOICES = (
        ('image', 'Image'),
        ('file', 'File'),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    from_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='sent_messages',
    )
    to_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='received_messages',
    )
    content = models.TextField()
    attachment = models.CharField(max_length=500, blank=True)
    attachment_type = models.CharField(max_length=20, choices=ATTACHMENT_TYPE_CHOICES, blank=True)
    is_read = models.BooleanField(default=False)
    is_liked = models.BooleanField(default=False)
    expires_at = models.DateTimeField(default=default_message_expiry)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'communications_message'
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['from_user', 'to_user', 'created_at']),
            models.Index(fields=['to_user', 'is_read']),
            models.Index(fields=['expires_at']),
        ]

    def __str__(self):
        return f"{self.from_user} -> {self.to_user}: {self.content[:40]}"

    def is_participant(self, user):
        return user.pk in (self.from_user_id, self.to_user_id)

    def partner_of(self, user):
        return self.to_user if self.from_user_id == user.pk else self.from_user

    @property
    def is_expired(self):
        return self.expires_at < timezone.now()


class SupportMessage(models.Model):
    STATUS_CHOICES = (
        ('open', 'Open'),
        ('closed', 'Closed'),
        ('replied', 'Replied'),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='support_messages',
    )
    user_name = models.CharField(max_length=255)
    user_email = models.EmailField()
    subject = models.CharField(max_length=255, default='Support Request')
    message = models.TextField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='open')
    admin_reply = models.TextField(blank=True, null=True)
    replied_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'communications_support_message'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'created_at']),
            models.Index(fields=['status']),
        ]

    def __str__(self):
        return f"{self.subject} - {self.user_email} ({self.status})"

    def reply(self, text):
        self.admin_reply = text
        self.status = 'replied'
        self.replied_at = timezone.now()
        self.save(update_fields=['admin_reply', 'status', 'replied_at'])
        return self
