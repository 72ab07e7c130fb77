from django.urls import path

from . import views

urlpatterns = [
    path('user/request', views.SendRequestView.as_view(), name='user_request_send'),
    path('user/requests/sent', views.SentRequestsView.as_view(), name='user_requests_sent'),
    path('user/requests/received', views.ReceivedRequestsView.as_view(), name='user_requests_received'),
    path('user/request/<uuid:request_id>', views.UpdateRequestView.as_view(), name='user_request_update'),
]
