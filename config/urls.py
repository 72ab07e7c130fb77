from django.urls import path, include
from django.contrib import admin
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    path('admin/', admin.site.urls),

    # Authentication
    path('accounts/', include('allauth.urls')),

    # API
    path('api/', include('apps.users.urls')),
    path('api/', include('apps.core.urls')),
    path('api/', include('apps.students.urls')),
    path('api/', include('apps.teachers.urls')),
    path('api/', include('apps.requirements.urls')),
    path('api/', include('apps.communications.urls')),
    path('api/', include('apps.reviews.urls')),
    path('api/', include('apps.connections.urls')),
    path('api/admin/', include('apps.backoffice.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
