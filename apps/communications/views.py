# communications/views.py
import logging

from django.conf import settings
from kombu.exceptions import OperationalError
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.mixins import ApiErrorMixin
from apps.users.serializers import ImageUploadSerializer

from . import realtime, services
from .serializers import MessageSerializer, SupportMessageSerializer
from .tasks import delete_uploaded_file

logger = logging.getLogger(__name__)


class ConversationMessagesView(ApiErrorMixin, APIView):
    """Chat history with one user (GET) and sending to that user (POST)."""
    error_message = "Failed to process messages"

    def get(self, request, user_id):
        messages = services.get_conversation(request.user, user_id)
        return Response(MessageSerializer(messages, many=True).data)

    def post(self, request, user_id):
        message = services.create_message(
            request.user,
            user_id,
            request.data.get('content'),
            attachment=request.data.get('attachment'),
            attachment_type=request.data.get('attachmentType'),
        )
        realtime.notify_new_message(message)
        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)


class MessageLikeView(ApiErrorMixin, APIView):
    error_message = "Failed to toggle like"

    def post(self, request, message_id):
        message = services.toggle_like(request.user, message_id)
        return Response(MessageSerializer(message).data)


class MarkMessagesReadView(ApiErrorMixin, APIView):
    error_message = "Failed to mark messages as read"

    def post(self, request, user_id):
        services.mark_messages_read(request.user, user_id)
        return Response({"message": "Messages marked as read"})


class ConversationListView(ApiErrorMixin, APIView):
    error_message = "Failed to get conversations"

    def get(self, request):
        return Response(services.get_conversations(request.user))


class ChatImageUploadView(ApiErrorMixin, APIView):
    """Chat attachments are temporary: deletion is queued as soon as they are stored."""
    parser_classes = [MultiPartParser, FormParser]
    error_message = "Failed to upload image"

    def post(self, request):
        upload = request.FILES.get('image')
        if upload is None:
            return Response({"message": "No file uploaded"}, status=status.HTTP_400_BAD_REQUEST)

        serializer = ImageUploadSerializer(data={"image": upload})
        serializer.is_valid(raise_exception=True)
        name, image_path = services.store_chat_image(serializer.validated_data["image"])

        countdown = settings.MESSAGE_IMAGE_TTL_HOURS * 60 * 60
        try:
            delete_uploaded_file.apply_async(args=[name], countdown=countdown)
        except OperationalError as exc:
            logger.error("Could not schedule deletion of %s: %s", name, exc)

        return Response({"imagePath": image_path})


class UserSupportMessagesView(ApiErrorMixin, APIView):
    error_message = "Failed to fetch support messages"

    def get(self, request):
        messages = services.get_user_support_messages(request.user)
        return Response(SupportMessageSerializer(messages, many=True).data)


class SupportMessageCreateView(ApiErrorMixin, APIView):
    error_message = "Failed to create support message"

    def post(self, request):
        support_message = services.create_support_message(
            request.user,
            request.data.get('message'),
            subject=request.data.get('subject'),
        )
        return Response(SupportMessageSerializer(support_message).data)
