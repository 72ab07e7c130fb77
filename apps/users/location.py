# users/location.py
from django.conf import settings
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.mixins import ApiErrorMixin
from apps.core.utils import parse_float

from . import services
from .serializers import LiveLocationSerializer, LocationSerializer, UserSerializer


class UpdateLocationView(ApiErrorMixin, APIView):
    """Save the caller's captured coordinates; address parts are geocoded when missing."""
    error_message = "Failed to update location"

    def post(self, request):
        serializer = LocationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = services.update_location(request.user, serializer.validated_data)
        return Response({"message": "Location updated successfully", "user": UserSerializer(user).data})


class LiveLocationView(ApiErrorMixin, APIView):
    error_message = "Failed to update live location"

    def post(self, request):
        serializer = LiveLocationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = services.update_live_location(request.user, serializer.validated_data)
        return Response({"message": "Live location updated successfully", "user": UserSerializer(user).data})


class NearbyUsersView(ApiErrorMixin, APIView):
    error_message = "Failed to get nearby users"

    def get(self, request, radius=None):
        default = settings.DEFAULT_NEARBY_RADIUS_KM
        radius = parse_float(radius, default) or default
        return Response(services.nearby_users(request.user, radius))


class NearbyLiveUsersView(ApiErrorMixin, APIView):
    error_message = "Failed to get nearby live users"

    def get(self, request):
        default = settings.DEFAULT_LIVE_RADIUS_KM
        radius = parse_float(request.query_params.get("radius"), default) or default
        target = request.query_params.get("targetUserType")
        return Response(services.nearby_live_users(request.user, radius, target))
