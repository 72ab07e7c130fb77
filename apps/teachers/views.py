from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.mixins import ApiErrorMixin

from . import services
from .serializers import KycDocumentSerializer, TeacherSearchResultSerializer


class TeacherSearchView(ApiErrorMixin, APIView):
    """Search teachers by subjects, city and verification."""
    error_message = "Failed to search teachers"

    def get(self, request):
        teachers = services.search_teachers(request.query_params)
        return Response(TeacherSearchResultSerializer(teachers, many=True).data)


class KycSubmitView(ApiErrorMixin, APIView):
    parser_classes = [MultiPartParser, FormParser]
    error_message = "KYC submission failed"

    def post(self, request):
        document = services.submit_kyc(
            request.user,
            aadhaar=request.FILES.get('aadhaar'),
            pan=request.FILES.get('pan'),
            selfie=request.FILES.get('selfie'),
        )
        return Response({"message": "KYC submitted successfully", "kyc": KycDocumentSerializer(document).data})
