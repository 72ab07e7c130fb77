from django.urls import path

from . import views

urlpatterns = [
    path('reviews', views.ReviewCreateView.as_view(), name='reviews_create'),
    path('reviews/<uuid:user_id>', views.UserReviewsView.as_view(), name='reviews_for_user'),
]
