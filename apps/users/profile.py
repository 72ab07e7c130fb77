# users/profile.py
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.mixins import ApiErrorMixin

from . import services
from .serializers import ImageUploadSerializer


class UserProfileView(ApiErrorMixin, APIView):
    """
    GET returns the flat profile of the signed-in user.
    PUT writes every supplied field; POST only applies non-empty values.
    """
    error_message = "Failed to update profile"

    def get(self, request):
        return Response(services.build_profile_payload(request.user))

    def put(self, request):
        services.update_profile(request.user, request.data, skip_empty=False)
        return Response({"message": "Profile updated successfully"})

    def post(self, request):
        services.update_profile(request.user, request.data, skip_empty=True)
        return Response({"message": "Profile updated successfully"})


class ProfileImageUploadView(ApiErrorMixin, APIView):
    """Replace the profile photo. The multipart field name differs per endpoint."""
    parser_classes = [MultiPartParser, FormParser]
    file_field = "image"
    error_message = "Failed to upload image"

    def post(self, request):
        upload = request.FILES.get(self.file_field)
        if upload is None:
            return Response({"message": "No file uploaded"}, status=status.HTTP_400_BAD_REQUEST)

        serializer = ImageUploadSerializer(data={"image": upload})
        serializer.is_valid(raise_exception=True)
        image_url = services.set_profile_image(request.user, serializer.validated_data["image"])
        return Response(self.build_response(image_url))

    def build_response(self, image_url):
        return {"imagePath": image_url}


class AuthProfilePhotoUploadView(ProfileImageUploadView):
    file_field = "profileImage"
    error_message = "Failed to upload profile photo"

    def build_response(self, image_url):
        return {"message": "Profile photo updated successfully", "profileImage": image_url}
