from django.contrib.auth import get_user_model
from rest_framework import serializers

from .models import Review

User = get_user_model()


class ReviewSerializer(serializers.ModelSerializer):
    fromUserId = serializers.UUIDField(source='from_user_id', read_only=True)
    toUserId = serializers.PrimaryKeyRelatedField(source='to_user', queryset=User.objects.all())
    rating = serializers.IntegerField(min_value=1, max_value=5)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Review
        fields = ['id', 'fromUserId', 'toUserId', 'rating', 'comment', 'createdAt']
        read_only_fields = ['id']

    def validate(self, attrs):
        request = self.context.get('request')
        if request is not None and attrs['to_user'].pk == request.user.pk:
            raise serializers.ValidationError("You cannot review yourself")
        return attrs
