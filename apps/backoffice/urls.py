from django.urls import path

from . import views

urlpatterns = [
    path('create', views.AdminCreateView.as_view(), name='admin_create'),
    path('login', views.AdminLoginView.as_view(), name='admin_login'),
    path('stats', views.AdminStatsView.as_view(), name='admin_stats'),
    path('users', views.AdminUsersView.as_view(), name='admin_users'),
    path('users/export', views.UserExportView.as_view(), name='admin_users_export'),
    path('users/<uuid:user_id>/ban', views.BanUserView.as_view(), name='admin_user_ban'),
    path('users/<uuid:user_id>/unban', views.UnbanUserView.as_view(), name='admin_user_unban'),
    path('users/<uuid:user_id>/delete', views.DeleteUserView.as_view(), name='admin_user_delete'),
    path('teachers', views.AdminTeachersView.as_view(), name='admin_teachers'),
    path('teachers/<uuid:user_id>/kyc', views.TeacherKycReviewView.as_view(), name='admin_teacher_kyc'),
    path('conversations', views.AdminConversationsView.as_view(), name='admin_conversations'),
    path('change-password', views.ChangePasswordView.as_view(), name='admin_change_password'),
    path('support-messages', views.AdminSupportMessagesView.as_view(), name='admin_support_messages'),
    path('support-messages/<uuid:message_id>/reply', views.SupportMessageReplyView.as_view(),
         name='admin_support_message_reply'),
    path('support-conversations', views.SupportConversationsView.as_view(),
         name='admin_support_conversations'),
    path('support-conversations/<uuid:user_id>/messages', views.SupportThreadView.as_view(),
         name='admin_support_thread'),
    path('support-conversations/<uuid:user_id>/reply', views.SupportThreadReplyView.as_view(),
         name='admin_support_thread_reply'),
]
