# communications/services.py
import logging
import os
import uuid
from datetime import timedelta

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import PermissionDenied, ValidationError
from django.core.files.storage import default_storage
from django.db.models import Q
from django.http import Http404
from django.utils import timezone

from .models import Message, SupportMessage

logger = logging.getLogger(__name__)

User = get_user_model()

CHAT_UPLOAD_DIR = 'chat'


def _get_user(user_id):
    try:
        return User.objects.get(pk=user_id)
    except (User.DoesNotExist, ValidationError):
        raise Http404("User not found")


def create_message(from_user, to_user_id, content, attachment='', attachment_type=''):
    content = (content or '').strip()
    if not content:
        raise ValueError("Message content is required")
    to_user = _get_user(to_user_id)
    return Message.objects.create(
        from_user=from_user,
        to_user=to_user,
        content=content,
        attachment=attachment or '',
        attachment_type=attachment_type or '',
    )


def get_conversation(user, other_user_id):
    """Messages exchanged between two users, oldest first."""
    return (
        Message.objects.filter(
            Q(from_user=user, to_user_id=other_user_id) | Q(from_user_id=other_user_id, to_user=user)
        )
        .order_by('created_at')
    )


def toggle_like(user, message_id):
    try:
        message = Message.objects.get(pk=message_id)
    except Message.DoesNotExist:
        raise Http404("Message not found")
    if not message.is_participant(user):
        raise PermissionDenied("Not authorized to like this message")
    message.is_liked = not message.is_liked
    message.save(update_fields=['is_liked'])
    return message


def mark_messages_read(user, from_user_id):
    return Message.objects.filter(from_user_id=from_user_id, to_user=user, is_read=False).update(is_read=True)


def get_conversations(user):
    """One entry per conversation partner with the latest message, newest first."""
    messages = (
        Message.objects.filter(Q(from_user=user) | Q(to_user=user))
        .select_related('from_user', 'to_user')
        .order_by('-created_at')
    )
    conversations = {}
    for message in messages:
        partner = message.partner_of(user)
        entry = conversations.get(partner.pk)
        if entry is None:
            entry = conversations[partner.pk] = {
                'userId': str(partner.pk),
                'name': partner.get_full_name(),
                'profileImage': partner.profile_image_url,
                'lastMessage': message.content,
                'lastMessageAt': message.created_at,
                'unreadCount': 0,
                'isVerified': partner.is_location_verified,
                'isOnline': partner.is_online,
            }
        if message.to_user_id == user.pk and not message.is_read:
            entry['unreadCount'] += 1
    return sorted(conversations.values(), key=lambda c: c['lastMessageAt'], reverse=True)


def store_chat_image(upload):
    """Save a chat attachment; returns (storage name, public path)."""
    extension = os.path.splitext(upload.name)[1].lower()
    name = default_storage.save(f"{CHAT_UPLOAD_DIR}/{uuid.uuid4().hex}{extension}", upload)
    return name, f"{settings.MEDIA_URL}{name}"


def delete_stored_file(name):
    if default_storage.exists(name):
        default_storage.delete(name)
        logger.info("Auto-deleted uploaded file %s", name)
        return True
    return False


def cleanup_expired_messages(now=None):
    """Delete messages past their expiry that are also older than the retention window."""
    now = now or timezone.now()
    cutoff = now - timedelta(days=settings.MESSAGE_TTL_DAYS)
    deleted, _ = Message.objects.filter(expires_at__lt=now, created_at__lt=cutoff).delete()
    return deleted


def create_support_message(user, message, subject=None):
    message = (message or '').strip()
    if not message:
        raise ValueError("Message is required")
    return SupportMessage.objects.create(
        user=user,
        user_name=user.get_full_name(),
        user_email=user.email,
        subject=(subject or '').strip() or 'Support Request',
        message=message,
        status='open',
    )


def get_user_support_messages(user):
    return SupportMessage.objects.filter(user=user).order_by('-created_at')
