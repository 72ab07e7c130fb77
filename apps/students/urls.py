from django.urls import path

from . import views

urlpatterns = [
    path('search/students', views.StudentSearchView.as_view(), name='search_students'),
]
