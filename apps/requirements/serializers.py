from rest_framework import serializers

from apps.core.serializers import StringListField

from .models import Requirement


class RequirementUserSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    firstName = serializers.CharField(source='first_name')
    lastName = serializers.CharField(source='last_name')
    profileImage = serializers.CharField(source='profile_image_url')
    email = serializers.EmailField()
    isLocationVerified = serializers.BooleanField(source='is_location_verified')
    latitude = serializers.DecimalField(max_digits=10, decimal_places=8)
    longitude = serializers.DecimalField(max_digits=11, decimal_places=8)
    fullAddress = serializers.CharField(source='full_address')


class RequirementSerializer(serializers.ModelSerializer):
    userId = serializers.UUIDField(source='user_id', read_only=True)
    userType = serializers.CharField(source='user_type', read_only=True)
    subjects = StringListField(allow_empty=False)
    classes = StringListField(required=False)
    pinCode = serializers.CharField(source='pin_code', max_length=20, required=False, allow_blank=True)
    feeType = serializers.ChoiceField(source='fee_type', choices=Requirement.FEE_TYPE_CHOICES, required=False)
    isActive = serializers.BooleanField(source='is_active', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Requirement
        fields = [
            'id', 'userId', 'userType', 'subjects', 'classes', 'location',
            'city', 'state', 'pinCode', 'street', 'village',
            'type', 'fee', 'feeType', 'description', 'isActive', 'createdAt',
        ]
        read_only_fields = ['id']


class RequirementListSerializer(RequirementSerializer):
    user = RequirementUserSerializer(read_only=True)

    class Meta(RequirementSerializer.Meta):
        fields = RequirementSerializer.Meta.fields + ['user']
