# users/urls.py
from django.urls import path, re_path

from .location import LiveLocationView, NearbyLiveUsersView, NearbyUsersView, UpdateLocationView
from .profile import AuthProfilePhotoUploadView, ProfileImageUploadView, UserProfileView
from .views import LoginView, MeView, RegisterView

urlpatterns = [
    # Authentication
    path('auth/register', RegisterView.as_view(), name='auth_register'),
    path('auth/login', LoginView.as_view(), name='auth_login'),
    path('auth/me', MeView.as_view(), name='auth_me'),
    path('auth/upload-profile', AuthProfilePhotoUploadView.as_view(), name='auth_upload_profile'),
    path('auth/update-location', UpdateLocationView.as_view(), name='auth_update_location'),

    # Profile
    path('profile', UserProfileView.as_view(), name='profile'),
    path('profile/upload-image', ProfileImageUploadView.as_view(), name='profile_upload_image'),

    # Location
    path('user/location', UpdateLocationView.as_view(), name='user_location'),
    path('user/live-location', LiveLocationView.as_view(), name='user_live_location'),
    re_path(r'^nearby-users/(?P<radius>[^/]+)$', NearbyUsersView.as_view(), name='nearby_users'),
    path('nearby-users', NearbyUsersView.as_view(), name='nearby_users_default'),
    path('nearby/live-users', NearbyLiveUsersView.as_view(), name='nearby_live_users'),
]
