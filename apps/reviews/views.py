from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.mixins import ApiErrorMixin

from .models import Review
from .serializers import ReviewSerializer


class UserReviewsView(ApiErrorMixin, APIView):
    """Public list of reviews a user has received, newest first."""
    permission_classes = [AllowAny]
    error_message = "Failed to get reviews"

    def get(self, request, user_id):
        reviews = Review.objects.filter(to_user_id=user_id).order_by('-created_at')
        return Response(ReviewSerializer(reviews, many=True).data)


class ReviewCreateView(ApiErrorMixin, APIView):
    error_message = "Failed to create review"

    def post(self, request):
        serializer = ReviewSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        review = serializer.save(from_user=request.user)
        return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)
