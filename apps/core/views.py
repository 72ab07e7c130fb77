from rest_framework.response import Response
from rest_framework.views import APIView

from . import dashboard
from .mixins import ApiErrorMixin


class DashboardStatsView(ApiErrorMixin, APIView):
    error_message = "Failed to get dashboard stats"

    def get(self, request):
        return Response(dashboard.dashboard_stats(request.user))


class RecommendationsView(ApiErrorMixin, APIView):
    error_message = "Failed to get recommendations"

    def get(self, request, user_type):
        return Response(dashboard.recommendations(request.user, user_type))


class RecentActivityView(ApiErrorMixin, APIView):
    error_message = "Failed to get recent activity"

    def get(self, request):
        return Response(dashboard.recent_activity(request.user))
