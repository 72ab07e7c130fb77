from django.urls import path

from .views import DashboardStatsView, RecentActivityView, RecommendationsView

urlpatterns = [
    path('stats/dashboard', DashboardStatsView.as_view(), name='dashboard_stats'),
    path('recommendations/<str:user_type>', RecommendationsView.as_view(), name='recommendations'),
    path('activity/recent', RecentActivityView.as_view(), name='recent_activity'),
]
