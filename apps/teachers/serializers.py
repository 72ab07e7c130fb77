from rest_framework import serializers

from apps.core.serializers import StringListField

from .models import KycDocument, TeacherProfile


class TeacherProfileSerializer(serializers.ModelSerializer):
    userId = serializers.UUIDField(source='user_id', read_only=True)
    subjects = StringListField(required=False)
    pinCode = serializers.CharField(source='pin_code', read_only=True)
    kycStatus = serializers.CharField(source='kyc_status', read_only=True)
    isVerified = serializers.BooleanField(source='is_verified', read_only=True)
    studentCount = serializers.IntegerField(source='student_count', read_only=True)
    monthlyFee = serializers.DecimalField(source='monthly_fee', max_digits=10, decimal_places=2, required=False)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = TeacherProfile
        fields = [
            'id', 'userId', 'subjects', 'bio', 'qualification', 'experience',
            'city', 'state', 'pinCode', 'street', 'village', 'age', 'gender',
            'kycStatus', 'isVerified', 'rating', 'studentCount', 'monthlyFee', 'createdAt',
        ]
        read_only_fields = ['id', 'city', 'state', 'street', 'village', 'rating']
        extra_kwargs = {
            'qualification': {'required': False},
        }


class TeacherSearchResultSerializer(serializers.Serializer):
    """Row of the teacher search: user columns joined with the teacher profile."""
    id = serializers.UUIDField()
    name = serializers.CharField(source='first_name')
    lastName = serializers.CharField(source='last_name')
    profileImage = serializers.CharField(source='profile_image_url')
    subjects = serializers.ListField(source='teacher_profile.subjects', default=list)
    qualification = serializers.CharField(source='teacher_profile.qualification', default=None)
    experience = serializers.CharField(source='teacher_profile.experience', default=None)
    bio = serializers.CharField(source='teacher_profile.bio', default=None)
    city = serializers.CharField()
    state = serializers.CharField()
    pinCode = serializers.CharField(source='pin_code')
    fullAddress = serializers.CharField(source='full_address')
    latitude = serializers.DecimalField(max_digits=10, decimal_places=8)
    longitude = serializers.DecimalField(max_digits=11, decimal_places=8)
    rating = serializers.DecimalField(source='teacher_profile.rating', max_digits=3, decimal_places=2, default=None)
    studentCount = serializers.IntegerField(source='teacher_profile.student_count', default=0)
    isVerified = serializers.BooleanField(source='is_location_verified')
    isLocationVerified = serializers.BooleanField(source='is_location_verified')
    isOnline = serializers.BooleanField(source='is_online')
    userType = serializers.CharField(source='role')
    monthlyFee = serializers.DecimalField(source='teacher_profile.monthly_fee', max_digits=10, decimal_places=2, default=None)


class KycDocumentSerializer(serializers.ModelSerializer):
    teacherId = serializers.IntegerField(source='teacher_id', read_only=True)
    aadhaarCard = serializers.FileField(source='aadhaar_card', read_only=True)
    panCard = serializers.FileField(source='pan_card', read_only=True)
    submittedAt = serializers.DateTimeField(source='submitted_at', read_only=True)
    reviewedAt = serializers.DateTimeField(source='reviewed_at', read_only=True)

    class Meta:
        model = KycDocument
        fields = ['id', 'teacherId', 'aadhaarCard', 'panCard', 'selfie', 'status', 'submittedAt', 'reviewedAt']
        read_only_fields = fields
