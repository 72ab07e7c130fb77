from rest_framework import serializers

from apps.core.serializers import ClassFieldMixin, StringListField

from .models import StudentProfile


class StudentProfileSerializer(ClassFieldMixin, serializers.ModelSerializer):
    userId = serializers.UUIDField(source='user_id', read_only=True)
    studentClass = serializers.CharField(source='student_class', max_length=50, required=False, allow_blank=True)
    schoolName = serializers.CharField(source='school_name', max_length=255, required=False, allow_blank=True)
    pinCode = serializers.CharField(source='pin_code', read_only=True)
    budgetMin = serializers.DecimalField(source='budget_min', max_digits=10, decimal_places=2, required=False)
    budgetMax = serializers.DecimalField(source='budget_max', max_digits=10, decimal_places=2, required=False)
    preferredSubjects = StringListField(source='preferred_subjects', required=False)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = StudentProfile
        fields = [
            'id', 'userId', 'studentClass', 'schoolName',
            'city', 'state', 'pinCode', 'street', 'village',
            'budgetMin', 'budgetMax', 'preferredSubjects', 'createdAt',
        ]
        read_only_fields = ['id', 'city', 'state', 'street', 'village']

    def validate(self, attrs):
        instance = self.instance
        budget_min = attrs.get('budget_min', getattr(instance, 'budget_min', None))
        budget_max = attrs.get('budget_max', getattr(instance, 'budget_max', None))
        if budget_min is not None and budget_max is not None and budget_min > budget_max:
            raise serializers.ValidationError({'budgetMax': "Maximum budget must not be less than minimum budget"})
        return attrs


class StudentSearchResultSerializer(ClassFieldMixin, serializers.Serializer):
    """Row of the student search: user columns joined with the student profile."""
    id = serializers.UUIDField()
    name = serializers.CharField(source='first_name')
    lastName = serializers.CharField(source='last_name')
    profileImage = serializers.CharField(source='profile_image_url')
    studentClass = serializers.CharField(source='student_profile.student_class', default=None)
    schoolName = serializers.CharField(source='student_profile.school_name', default=None)
    budgetMin = serializers.DecimalField(source='student_profile.budget_min', max_digits=10, decimal_places=2, default=None)
    budgetMax = serializers.DecimalField(source='student_profile.budget_max', max_digits=10, decimal_places=2, default=None)
    preferredSubjects = serializers.ListField(source='student_profile.preferred_subjects', default=list)
    city = serializers.CharField()
    state = serializers.CharField()
    pinCode = serializers.CharField(source='pin_code')
    fullAddress = serializers.CharField(source='full_address')
    latitude = serializers.DecimalField(max_digits=10, decimal_places=8)
    longitude = serializers.DecimalField(max_digits=11, decimal_places=8)
    isVerified = serializers.BooleanField(source='is_location_verified')
    isLocationVerified = serializers.BooleanField(source='is_location_verified')
    isOnline = serializers.BooleanField(source='is_online')
    userType = serializers.CharField(source='role')
