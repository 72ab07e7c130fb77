import logging

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.communications.models import SupportMessage
from apps.communications.realtime import broadcast_support_reply
from apps.communications.serializers import SupportMessageSerializer
from apps.core.mixins import ApiErrorMixin
from apps.core.permissions_api import IsAdminRole
from apps.core.utils import parse_int
from apps.users.serializers import UserSerializer
from apps.users.views import LoginView
from utils.utils import export_csv_response, export_excel_response

from . import services

logger = logging.getLogger(__name__)


class AdminAPIView(ApiErrorMixin, APIView):
    permission_classes = [IsAuthenticated, IsAdminRole]


class AdminCreateView(ApiErrorMixin, APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    error_message = "Failed to create admin"

    def post(self, request):
        admin = services.create_admin(request.data)
        return Response(
            {"message": "Admin created successfully", "admin": UserSerializer(admin).data},
            status=status.HTTP_201_CREATED,
        )


class AdminLoginView(LoginView):
    error_message = "Admin login failed"
    invalid_message = "Invalid admin credentials"

    def is_allowed(self, user):
        return user.is_admin


class AdminStatsView(AdminAPIView):
    error_message = "Failed to get admin stats"

    def get(self, request):
        return Response(services.admin_stats())


class AdminUsersView(AdminAPIView):
    error_message = "Failed to get users"

    def get(self, request):
        users = services.list_users(
            user_type=request.query_params.get('userType'),
            page=parse_int(request.query_params.get('page'), 1),
            limit=parse_int(request.query_params.get('limit'), services.DEFAULT_PAGE_SIZE),
        )
        return Response([services.user_with_profile(user, UserSerializer(user).data) for user in users])


class AdminTeachersView(AdminAPIView):
    error_message = "Failed to get teachers"

    def get(self, request):
        return Response(services.teachers_detailed())


class AdminSupportMessagesView(AdminAPIView):
    error_message = "Failed to get support messages"

    def get(self, request):
        messages = SupportMessage.objects.order_by('-created_at')
        return Response(SupportMessageSerializer(messages, many=True).data)


class AdminConversationsView(AdminAPIView):
    error_message = "Failed to get conversations"

    def get(self, request):
        return Response(services.all_conversations())


class BanUserView(AdminAPIView):
    error_message = "Failed to ban user"

    def post(self, request, user_id):
        services.ban_user(user_id, request.data.get('reason'))
        return Response({"message": "User banned successfully"})


class UnbanUserView(AdminAPIView):
    error_message = "Failed to unban user"

    def post(self, request, user_id):
        services.unban_user(user_id)
        return Response({"message": "User unbanned successfully"})


class ChangePasswordView(AdminAPIView):
    error_message = "Failed to change password"

    def put(self, request):
        services.change_password(
            request.user,
            request.data.get('currentPassword'),
            request.data.get('newPassword'),
        )
        return Response({"message": "Password changed successfully"})


class DeleteUserView(AdminAPIView):
    error_message = "Failed to delete user"

    def delete(self, request, user_id):
        success, message = services.delete_user_completely(user_id)
        code = status.HTTP_200_OK if success else status.HTTP_400_BAD_REQUEST
        return Response({"message": message, "success": success}, status=code)


class SupportMessageReplyView(AdminAPIView):
    error_message = "Failed to reply to support message"

    def put(self, request, message_id):
        support_message = services.reply_support_message(message_id, request.data.get('adminReply'))
        broadcast_support_reply(support_message)
        return Response({"message": "Reply sent successfully"})


class SupportConversationsView(AdminAPIView):
    error_message = "Failed to get support conversations"

    def get(self, request):
        return Response(services.support_conversations())


class SupportThreadView(AdminAPIView):
    error_message = "Failed to get support messages"

    def get(self, request, user_id):
        return Response(SupportMessageSerializer(services.support_thread(user_id), many=True).data)


class SupportThreadReplyView(AdminAPIView):
    """Answer a user's support thread by replying to their latest message."""
    error_message = "Failed to send reply"

    def post(self, request, user_id):
        support_message = services.reply_to_latest_support_message(user_id, request.data.get('message'))
        if support_message is None:
            return Response({"success": False})
        broadcast_support_reply(support_message)
        return Response({"success": True, "messageId": str(support_message.id)})


class TeacherKycReviewView(AdminAPIView):
    error_message = "Failed to update KYC status"

    def post(self, request, user_id):
        teacher = services.review_teacher_kyc(user_id, request.data.get('status'))
        return Response({
            "message": "KYC status updated successfully",
            "kycStatus": teacher.kyc_status,
            "isVerified": teacher.is_verified,
        })


class UserExportView(AdminAPIView):
    error_message = "Failed to export users"

    def get(self, request):
        format_type = request.query_params.get('format', 'csv')
        rows = services.export_rows(request.query_params.get('userType'))
        filename = "users_export"
        logger.info("User export (%s, %d rows) by %s", format_type, len(rows), request.user.email)

        if format_type == 'csv':
            return export_csv_response(services.EXPORT_COLUMNS, rows, filename)
        elif format_type == 'excel':
            return export_excel_response(services.EXPORT_COLUMNS, rows, filename, sheet_name='Users')
        return Response({"message": "Invalid format specified"}, status=status.HTTP_400_BAD_REQUEST)
