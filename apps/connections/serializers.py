from rest_framework import serializers

from apps.users.services import user_card

from .models import UserRequest


class UserRequestSerializer(serializers.ModelSerializer):
    senderId = serializers.UUIDField(source='sender_id', read_only=True)
    receiverId = serializers.UUIDField(source='receiver_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = UserRequest
        fields = ['id', 'senderId', 'receiverId', 'status', 'message', 'createdAt']
        read_only_fields = fields


class SentRequestSerializer(UserRequestSerializer):
    toUser = serializers.SerializerMethodField()

    class Meta(UserRequestSerializer.Meta):
        fields = UserRequestSerializer.Meta.fields + ['toUser']

    def get_toUser(self, obj):
        return user_card(obj.receiver)


class ReceivedRequestSerializer(UserRequestSerializer):
    fromUser = serializers.SerializerMethodField()

    class Meta(UserRequestSerializer.Meta):
        fields = UserRequestSerializer.Meta.fields + ['fromUser']

    def get_fromUser(self, obj):
        return user_card(obj.sender)


class SendRequestSerializer(serializers.Serializer):
    receiverId = serializers.UUIDField()
    message = serializers.CharField(required=False, allow_blank=True, default='')


class RequestStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=UserRequest.STATUS_CHOICES)
