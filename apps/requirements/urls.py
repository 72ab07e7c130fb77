from django.urls import path

from . import views

urlpatterns = [
    path('requirements', views.RequirementListCreateView.as_view(), name='requirements'),
    path('requirements/my', views.MyRequirementView.as_view(), name='requirements_my'),
]
