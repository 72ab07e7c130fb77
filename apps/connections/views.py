from rest_framework.response import Response
from rest_framework.views import APIView

from apps.communications import realtime
from apps.core.mixins import ApiErrorMixin

from . import services
from .serializers import (
    ReceivedRequestSerializer,
    RequestStatusSerializer,
    SendRequestSerializer,
    SentRequestSerializer,
    UserRequestSerializer,
)


class SendRequestView(ApiErrorMixin, APIView):
    error_message = "Failed to send request"

    def post(self, request):
        serializer = SendRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user_request = services.send_request(
            request.user,
            serializer.validated_data['receiverId'],
            serializer.validated_data['message'],
        )
        return Response({
            "message": "Request sent successfully",
            "request": UserRequestSerializer(user_request).data,
        })


class SentRequestsView(ApiErrorMixin, APIView):
    error_message = "Failed to get sent requests"

    def get(self, request):
        return Response(SentRequestSerializer(services.sent_requests(request.user), many=True).data)


class ReceivedRequestsView(ApiErrorMixin, APIView):
    error_message = "Failed to get received requests"

    def get(self, request):
        return Response(ReceivedRequestSerializer(services.received_requests(request.user), many=True).data)


class UpdateRequestView(ApiErrorMixin, APIView):
    """Receiver accepts or rejects a connection request."""
    error_message = "Failed to update request"

    def patch(self, request, request_id):
        serializer = RequestStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user_request, auto_message = services.update_request_status(
            request.user, request_id, serializer.validated_data['status'],
        )
        if auto_message is not None:
            realtime.notify_new_message(auto_message)
        return Response({
            "message": "Request updated successfully",
            "request": UserRequestSerializer(user_request).data,
        })
