from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.mixins import ApiErrorMixin

from .serializers import StudentSearchResultSerializer
from .services.filter_service import StudentFilterService


class StudentSearchView(ApiErrorMixin, APIView):
    """Search students by class, classes, city and verification."""
    error_message = "Failed to search students"

    def get(self, request):
        students = StudentFilterService.filter_students(request.query_params)
        return Response(StudentSearchResultSerializer(students, many=True).data)
