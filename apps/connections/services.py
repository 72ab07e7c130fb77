# connections/services.py
import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import PermissionDenied
from django.db import transaction
from django.http import Http404

from apps.communications.services import create_message

from .models import UserRequest

logger = logging.getLogger(__name__)

User = get_user_model()

ACCEPTED_AUTO_REPLY = "I am available now. You can start chatting with me!"


def send_request(sender, receiver_id, message=''):
    if str(receiver_id) == str(sender.pk):
        raise ValueError("You cannot send a request to yourself")
    receiver = User.objects.filter(pk=receiver_id).first()
    if receiver is None:
        raise Http404("User not found")
    request = UserRequest.objects.create(sender=sender, receiver=receiver, message=message or '')
    logger.info("Connection request %s sent from %s to %s", request.pk, sender.email, receiver.email)
    return request


def sent_requests(user):
    return (
        UserRequest.objects.filter(sender=user)
        .select_related('receiver__teacher_profile', 'receiver__student_profile')
        .order_by('-created_at')
    )


def received_requests(user):
    return (
        UserRequest.objects.filter(receiver=user)
        .select_related('sender__teacher_profile', 'sender__student_profile')
        .order_by('-created_at')
    )


@transaction.atomic
def update_request_status(user, request_id, status):
    """
    Only the receiver may answer a request. Accepting sends the automatic
    availability message to the sender; the created message is returned
    alongside the request so callers can push it.
    """
    request = UserRequest.objects.select_related('sender', 'receiver').filter(pk=request_id).first()
    if request is None:
        raise Http404("Request not found")
    if request.receiver_id != user.pk:
        raise PermissionDenied("Not authorized")

    request.status = status
    request.save(update_fields=['status'])

    auto_message = None
    if status == UserRequest.STATUS_ACCEPTED:
        auto_message = create_message(request.receiver, request.sender_id, ACCEPTED_AUTO_REPLY)
    logger.info("Connection request %s marked %s by %s", request.pk, status, user.email)
    return request, auto_message
