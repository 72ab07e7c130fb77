from allauth.account.adapter import get_adapter
from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from apps.core.serializers import ClassFieldMixin, StringListField

from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Public representation of an account; never includes the password."""
    firstName = serializers.CharField(source='first_name')
    lastName = serializers.CharField(source='last_name', allow_blank=True, required=False)
    userType = serializers.CharField(source='role', read_only=True)
    profileImage = serializers.CharField(source='profile_image_url', read_only=True)
    isOnline = serializers.BooleanField(source='is_online', read_only=True)
    lastSeen = serializers.DateTimeField(source='last_seen', read_only=True)
    isLocationVerified = serializers.BooleanField(source='is_location_verified', read_only=True)
    fullAddress = serializers.CharField(source='full_address', read_only=True)
    pinCode = serializers.CharField(source='pin_code', read_only=True)
    isLiveSharing = serializers.BooleanField(source='is_live_sharing', read_only=True)
    liveLocationUpdatedAt = serializers.DateTimeField(source='live_location_updated_at', read_only=True)
    isBanned = serializers.BooleanField(source='is_banned', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'email', 'firstName', 'lastName', 'userType', 'profileImage', 'mobile',
            'isOnline', 'lastSeen', 'isLocationVerified', 'latitude', 'longitude',
            'fullAddress', 'street', 'city', 'state', 'pinCode',
            'isLiveSharing', 'liveLocationUpdatedAt', 'isBanned', 'createdAt', 'updatedAt',
        ]
        read_only_fields = ['id', 'email', 'latitude', 'longitude', 'street', 'city', 'state']


class UserBasicUpdateSerializer(serializers.ModelSerializer):
    firstName = serializers.CharField(source='first_name', max_length=150)
    lastName = serializers.CharField(source='last_name', max_length=150, allow_blank=True)
    mobile = serializers.CharField(max_length=20, allow_blank=True)

    class Meta:
        model = User
        fields = ['firstName', 'lastName', 'mobile']


class RegisterSerializer(ClassFieldMixin, serializers.Serializer):
    """Student/teacher sign-up, including the first version of the role profile."""
    USER_TYPES = (
        (User.Role.STUDENT, 'Student'),
        (User.Role.TEACHER, 'Teacher'),
    )

    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        min_length=6,
        error_messages={'min_length': 'Password must be at least 6 characters'},
    )
    firstName = serializers.CharField(max_length=150)
    lastName = serializers.CharField(max_length=150, required=False, allow_blank=True, default='')
    mobile = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    userType = serializers.ChoiceField(choices=USER_TYPES)

    # Student profile
    studentClass = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')
    schoolName = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')

    # Teacher profile
    subjects = StringListField(required=False, default=list)
    bio = serializers.CharField(required=False, allow_blank=True, default='')
    qualification = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    experience = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')

    def validate_email(self, value):
        value = value.strip().lower()
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("User already exists")
        return value

    def validate_password(self, value):
        try:
            return get_adapter().clean_password(value)
        except DjangoValidationError as exc:
            raise serializers.ValidationError(list(exc.messages))

    def validate(self, attrs):
        if attrs['userType'] == User.Role.TEACHER and not attrs.get('qualification'):
            raise serializers.ValidationError({'qualification': "Qualification is required"})
        return attrs


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)


class LocationSerializer(serializers.Serializer):
    latitude = serializers.FloatField(min_value=-90, max_value=90)
    longitude = serializers.FloatField(min_value=-180, max_value=180)
    fullAddress = serializers.CharField(required=False, allow_blank=True)
    street = serializers.CharField(required=False, allow_blank=True, max_length=255)
    city = serializers.CharField(required=False, allow_blank=True, max_length=120)
    state = serializers.CharField(required=False, allow_blank=True, max_length=120)
    pinCode = serializers.CharField(required=False, allow_blank=True, max_length=20)

    def to_internal_value(self, data):
        if data.get('latitude') in (None, '') or data.get('longitude') in (None, ''):
            raise serializers.ValidationError({'latitude': ["Latitude and longitude are required"]})
        return super().to_internal_value(data)


class LiveLocationSerializer(serializers.Serializer):
    isLiveSharing = serializers.BooleanField(required=False)
    latitude = serializers.FloatField(required=False, min_value=-90, max_value=90)
    longitude = serializers.FloatField(required=False, min_value=-180, max_value=180)
    fullAddress = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if ('latitude' in attrs) != ('longitude' in attrs):
            raise serializers.ValidationError("Latitude and longitude are required")
        return attrs


class ImageUploadSerializer(serializers.Serializer):
    image = serializers.ImageField()

    def validate_image(self, value):
        if value.size > settings.MAX_UPLOAD_SIZE:
            raise serializers.ValidationError("File too large")
        return value
