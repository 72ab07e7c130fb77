from rest_framework import serializers

from .models import Message, SupportMessage


class MessageSerializer(serializers.ModelSerializer):
    fromUserId = serializers.UUIDField(source='from_user_id', read_only=True)
    toUserId = serializers.UUIDField(source='to_user_id', read_only=True)
    attachmentType = serializers.CharField(source='attachment_type', required=False, allow_blank=True)
    isRead = serializers.BooleanField(source='is_read', read_only=True)
    isLiked = serializers.BooleanField(source='is_liked', read_only=True)
    expiresAt = serializers.DateTimeField(source='expires_at', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Message
        fields = [
            'id', 'fromUserId', 'toUserId', 'content', 'attachment', 'attachmentType',
            'isRead', 'isLiked', 'expiresAt', 'createdAt',
        ]
        read_only_fields = ['id']
        extra_kwargs = {
            'attachment': {'required': False, 'allow_blank': True},
        }


class SupportMessageSerializer(serializers.ModelSerializer):
    userId = serializers.UUIDField(source='user_id', read_only=True)
    userName = serializers.CharField(source='user_name', read_only=True)
    userEmail = serializers.EmailField(source='user_email', read_only=True)
    adminReply = serializers.CharField(source='admin_reply', read_only=True)
    repliedAt = serializers.DateTimeField(source='replied_at', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = SupportMessage
        fields = [
            'id', 'userId', 'userName', 'userEmail', 'subject', 'message',
            'status', 'adminReply', 'repliedAt', 'createdAt',
        ]
        read_only_fields = ['id', 'status']
