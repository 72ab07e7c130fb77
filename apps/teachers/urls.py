from django.urls import path

from . import views

urlpatterns = [
    path('search/teachers', views.TeacherSearchView.as_view(), name='search_teachers'),
    path('kyc/submit', views.KycSubmitView.as_view(), name='kyc_submit'),
]
