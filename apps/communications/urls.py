from django.urls import path

from . import views

urlpatterns = [
    # Chat
    path('messages/<uuid:user_id>', views.ConversationMessagesView.as_view(), name='messages'),
    path('messages/<uuid:message_id>/like', views.MessageLikeView.as_view(), name='message_like'),
    path('messages/<uuid:user_id>/read', views.MarkMessagesReadView.as_view(), name='messages_read'),
    path('conversations', views.ConversationListView.as_view(), name='conversations'),
    path('upload/image', views.ChatImageUploadView.as_view(), name='upload_image'),

    # Support
    path('support/user-messages', views.UserSupportMessagesView.as_view(), name='support_user_messages'),
    path('support/message', views.SupportMessageCreateView.as_view(), name='support_message'),
]
