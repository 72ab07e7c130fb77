import pytest

from apps.users.models import User

pytestmark = pytest.mark.django_db


def test_student_profile_defaults(client_for, student):
    response = client_for(student).get("/api/profile")

    assert response.status_code == 200
    body = response.json()
    assert body["firstName"] == "Asha"
    assert body["userType"] == "student"
    assert body["class"] == "10th"
    assert body["budgetMin"] == "1.00"
    assert body["budgetMax"] == "10.00"
    assert body["preferredSubjects"] == []


def test_teacher_profile_payload(client_for, teacher):
    body = client_for(teacher).get("/api/profile").json()

    assert body["subjects"] == ["Mathematics", "Physics"]
    assert body["qualification"] == "M.Sc"
    assert body["monthlyFee"] == "1.00"


def test_put_updates_every_supplied_field(client_for, student):
    response = client_for(student).put("/api/profile", {
        "firstName": "Asha",
        "lastName": "",
        "mobile": "9000000000",
        "class": "11th",
        "budgetMin": "2500",
        "budgetMax": "8000",
        "preferredSubjects": ["Biology"],
    }, format="json")

    assert response.status_code == 200
    assert response.json() == {"message": "Profile updated successfully"}
    student.refresh_from_db()
    assert student.last_name == ""
    assert student.mobile == "9000000000"
    assert student.student_profile.student_class == "11th"
    assert student.student_profile.preferred_subjects == ["Biology"]


def test_post_skips_empty_values(client_for, student):
    response = client_for(student).post("/api/profile", {
        "lastName": "",
        "mobile": "9111111111",
        "schoolName": "",
    }, format="json")

    assert response.status_code == 200
    student.refresh_from_db()
    assert student.last_name == "Rao"
    assert student.mobile == "9111111111"


def test_budget_range_is_validated(client_for, student):
    response = client_for(student).post(
        "/api/profile", {"budgetMin": "9000", "budgetMax": "1000"}, format="json"
    )

    assert response.status_code == 400
    student.refresh_from_db()
    assert str(student.student_profile.budget_min) == "1.00"


def test_upload_image_requires_file(client_for, student):
    response = client_for(student).post("/api/profile/upload-image", {}, format="multipart")

    assert response.status_code == 400
    assert response.json() == {"message": "No file uploaded"}


def test_upload_image_stores_profile_photo(client_for, student, png_file):
    response = client_for(student).post(
        "/api/profile/upload-image", {"image": png_file()}, format="multipart"
    )

    assert response.status_code == 200
    image_path = response.json()["imagePath"]
    assert image_path.startswith("/uploads/profiles/")
    assert User.objects.get(pk=student.pk).profile_image_url == image_path


def test_auth_upload_profile_uses_profile_image_field(client_for, teacher, png_file):
    response = client_for(teacher).post(
        "/api/auth/upload-profile", {"profileImage": png_file()}, format="multipart"
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Profile photo updated successfully"
    assert body["profileImage"].startswith("/uploads/profiles/")


def test_upload_rejects_non_image(client_for, student):
    from django.core.files.uploadedfile import SimpleUploadedFile

    upload = SimpleUploadedFile("notes.txt", b"plain text", content_type="text/plain")
    response = client_for(student).post("/api/profile/upload-image", {"image": upload}, format="multipart")

    assert response.status_code == 400
