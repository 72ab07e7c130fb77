from django.http import JsonResponse
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.mixins import ApiErrorMixin

from . import services
from .serializers import RequirementListSerializer, RequirementSerializer


class RequirementListCreateView(ApiErrorMixin, APIView):
    """
    GET lists active requirements (filters: userType, subjects, location).
    POST publishes the caller's requirement; DELETE withdraws it.
    """
    error_message = "Failed to process requirement"

    def get(self, request):
        requirements = services.list_requirements(request.query_params)
        return Response(RequirementListSerializer(requirements, many=True).data)

    def post(self, request):
        serializer = RequirementSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        requirement = services.create_requirement(request.user, serializer)
        return Response(RequirementSerializer(requirement).data, status=status.HTTP_201_CREATED)

    def delete(self, request):
        services.deactivate_requirements(request.user)
        return Response({"message": "Requirement deleted successfully"})


class MyRequirementView(ApiErrorMixin, APIView):
    error_message = "Failed to get user requirement"

    def get(self, request):
        requirement = services.get_active_requirement(request.user)
        if requirement is None:
            return JsonResponse(None, safe=False)
        return Response(RequirementSerializer(requirement).data)
