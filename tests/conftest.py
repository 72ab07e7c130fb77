import io

import pytest
import requests
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image
from rest_framework.test import APIClient

from apps.communications import realtime
from apps.students.models import StudentProfile
from apps.teachers.models import TeacherProfile
from apps.users.models import User
from apps.users.services import issue_token

DELHI = (28.6139, 77.2090)
NEAR_DELHI = (28.7041, 77.1025)
MUMBAI = (19.0760, 72.8777)


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = str(tmp_path / "media")
    return settings.MEDIA_ROOT


@pytest.fixture(autouse=True)
def offline_geocoding(monkeypatch):
    def refuse(*args, **kwargs):
        raise requests.ConnectionError("network disabled in tests")

    monkeypatch.setattr("apps.core.geo.requests.get", refuse)


@pytest.fixture(autouse=True)
def socket_events(monkeypatch):
    """Captured Socket.IO emits as (event, data, kwargs) tuples."""
    emitted = []

    def fake_emit(event, data=None, **kwargs):
        emitted.append((event, data, kwargs))

    monkeypatch.setattr(realtime.sio, "emit", fake_emit)
    realtime.registry.clear()
    yield emitted
    realtime.registry.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db):
    def _make(email, role=User.Role.STUDENT, password="secret123", coords=None, profile=None, **fields):
        fields.setdefault("first_name", email.split("@")[0].title())
        if coords is not None:
            fields.update(latitude=coords[0], longitude=coords[1], is_location_verified=True)
        user = User.objects.create_user(email=email, password=password, role=role, **fields)
        profile = dict(profile or {})
        if role == User.Role.STUDENT:
            StudentProfile.objects.create(user=user, **profile)
        elif role == User.Role.TEACHER:
            profile.setdefault("qualification", "M.Sc")
            TeacherProfile.objects.create(user=user, **profile)
        return User.objects.get(pk=user.pk)

    return _make


@pytest.fixture
def client_for():
    def _client(user):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_token(user)}")
        return client

    return _client


@pytest.fixture
def student(make_user):
    return make_user("asha@example.com", role=User.Role.STUDENT, last_name="Rao", profile={"student_class": "10th"})


@pytest.fixture
def teacher(make_user):
    return make_user(
        "vikram@example.com",
        role=User.Role.TEACHER,
        last_name="Singh",
        profile={"subjects": ["Mathematics", "Physics"], "qualification": "M.Sc"},
    )


@pytest.fixture
def admin_user(db):
    return User.objects.create_admin(email="admin@example.com", password="adminpass", first_name="Root")


@pytest.fixture
def png_file():
    def _png(name="photo.png"):
        buffer = io.BytesIO()
        Image.new("RGB", (4, 4), color="red").save(buffer, format="PNG")
        return SimpleUploadedFile(name, buffer.getvalue(), content_type="image/png")

    return _png
