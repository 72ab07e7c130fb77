import pytest

from apps.communications.models import Message, SupportMessage
from apps.communications.services import create_message, create_support_message
from apps.requirements.models import Requirement
from apps.teachers.models import KycDocument
from apps.users.models import User

pytestmark = pytest.mark.django_db


@pytest.fixture
def admin_client(client_for, admin_user):
    return client_for(admin_user)


def test_create_admin(api_client):
    response = api_client.post(
        "/api/admin/create",
        {"email": "boss@example.com", "password": "bosspass", "firstName": "Boss"},
        format="json",
    )

    assert response.status_code == 201
    assert response.json()["message"] == "Admin created successfully"
    admin = User.objects.get(email="boss@example.com")
    assert admin.role == "admin"
    assert admin.is_staff is True


@pytest.mark.parametrize("payload", [
    {"email": "boss@example.com", "password": "bosspass"},
    {"email": "boss@example.com", "firstName": "Boss"},
    {"password": "bosspass", "firstName": "Boss"},
])
def test_create_admin_required_fields(api_client, payload):
    response = api_client.post("/api/admin/create", payload, format="json")

    assert response.status_code == 400
    assert response.json() == {"message": "Email, password, and first name are required"}


def test_create_admin_existing(api_client, admin_user):
    response = api_client.post(
        "/api/admin/create",
        {"email": "admin@example.com", "password": "x" * 8, "firstName": "Again"},
        format="json",
    )

    assert response.status_code == 400
    assert response.json() == {"message": "Admin already exists"}


def test_admin_login(api_client, admin_user, student):
    response = api_client.post(
        "/api/admin/login", {"email": "admin@example.com", "password": "adminpass"}, format="json"
    )
    assert response.status_code == 200
    assert response.json()["user"]["userType"] == "admin"

    response = api_client.post(
        "/api/admin/login", {"email": "asha@example.com", "password": "secret123"}, format="json"
    )
    assert response.status_code == 401
    assert response.json() == {"message": "Invalid admin credentials"}


def test_admin_endpoints_require_admin_role(client_for, student, api_client):
    response = client_for(student).get("/api/admin/stats")
    assert response.status_code == 403
    assert response.json() == {"message": "Admin access required"}

    response = api_client.get("/api/admin/stats")
    assert response.status_code == 401


def test_stats(admin_client, student, teacher):
    create_message(student, teacher.id, "hello")
    create_support_message(student, "help")
    Requirement.objects.create(user=student, user_type="student", subjects=["Maths"], location="Pune")

    assert admin_client.get("/api/admin/stats").json() == {
        "totalUsers": 2,
        "students": 1,
        "teachers": 1,
        "admins": 1,
        "totalMessages": 1,
        "supportMessages": 1,
        "totalRequirements": 1,
    }


def test_users_listing(admin_client, student, teacher, make_user):
    make_user("extra@example.com")
    student.set_online_status(True)

    users = admin_client.get("/api/admin/users").json()
    assert len(users) == 3
    assert "admin@example.com" not in {u["email"] for u in users}
    by_email = {u["email"]: u for u in users}
    assert by_email["asha@example.com"]["isOnline"] is True
    assert by_email["asha@example.com"]["profile"]["class"] == "10th"
    assert by_email["vikram@example.com"]["profile"]["qualification"] == "M.Sc"

    teachers = admin_client.get("/api/admin/users?userType=teacher").json()
    assert [u["email"] for u in teachers] == ["vikram@example.com"]

    page = admin_client.get("/api/admin/users?page=2&limit=2").json()
    assert len(page) == 1


def test_stale_presence_is_reported_offline(admin_client, student, settings):
    from datetime import timedelta

    from django.utils import timezone

    User.objects.filter(pk=student.pk).update(is_online=True, last_seen=timezone.now() - timedelta(minutes=30))

    users = admin_client.get("/api/admin/users").json()

    assert users[0]["isOnline"] is False


def test_teachers_detailed(admin_client, teacher):
    (row,) = admin_client.get("/api/admin/teachers").json()

    assert row["email"] == "vikram@example.com"
    assert row["subjects"] == ["Mathematics", "Physics"]
    assert row["kycStatus"] == "approved"
    assert row["isVerified"] is True


def test_conversations_monitoring(admin_client, student, teacher):
    create_message(student, teacher.id, "hello")

    (row,) = admin_client.get("/api/admin/conversations").json()

    assert row["content"] == "hello"
    assert row["fromUser"] == {"id": str(student.id), "name": "Asha Rao", "profileImage": student.profile_image_url}
    assert row["toUser"]["name"] == "Vikram Singh"


def test_ban_and_unban(admin_client, student):
    response = admin_client.post(f"/api/admin/users/{student.id}/ban", {"reason": "spam"}, format="json")
    assert response.json() == {"message": "User banned successfully"}
    student.refresh_from_db()
    assert student.is_banned is True
    assert student.is_active is False
    assert student.ban_reason == "spam"

    response = admin_client.post(f"/api/admin/users/{student.id}/unban")
    assert response.json() == {"message": "User unbanned successfully"}
    student.refresh_from_db()
    assert student.is_banned is False
    assert student.is_active is True


def test_ban_default_reason(admin_client, student):
    admin_client.post(f"/api/admin/users/{student.id}/ban")

    student.refresh_from_db()
    assert student.ban_reason == "Admin action"


def test_change_password(admin_client, admin_user):
    response = admin_client.put("/api/admin/change-password", {"currentPassword": "adminpass"}, format="json")
    assert response.json() == {"message": "Current password and new password are required"}

    response = admin_client.put(
        "/api/admin/change-password", {"currentPassword": "nope", "newPassword": "newpass1"}, format="json"
    )
    assert response.status_code == 400
    assert response.json() == {"message": "Current password is incorrect"}

    response = admin_client.put(
        "/api/admin/change-password", {"currentPassword": "adminpass", "newPassword": "newpass1"}, format="json"
    )
    assert response.json() == {"message": "Password changed successfully"}
    admin_user.refresh_from_db()
    assert admin_user.check_password("newpass1")


def test_delete_user_removes_related_data(admin_client, student, teacher):
    create_message(student, teacher.id, "hello")
    create_support_message(student, "help")

    response = admin_client.delete(f"/api/admin/users/{student.id}/delete")

    assert response.json() == {"message": "Successfully deleted student account: Asha Rao", "success": True}
    assert not User.objects.filter(pk=student.pk).exists()
    assert not Message.objects.exists()
    assert not SupportMessage.objects.exists()


def test_delete_user_refusals(admin_client, admin_user):
    response = admin_client.delete(f"/api/admin/users/{admin_user.id}/delete")
    assert response.status_code == 400
    assert response.json() == {"message": "Cannot delete admin users", "success": False}

    response = admin_client.delete("/api/admin/users/00000000-0000-0000-0000-000000000000/delete")
    assert response.json() == {"message": "User not found", "success": False}


def test_support_reply_broadcasts(admin_client, student, socket_events):
    support = create_support_message(student, "help")

    response = admin_client.put(f"/api/admin/support-messages/{support.id}/reply", {}, format="json")
    assert response.json() == {"message": "Admin reply is required"}

    response = admin_client.put(
        f"/api/admin/support-messages/{support.id}/reply", {"adminReply": "Done"}, format="json"
    )
    assert response.json() == {"message": "Reply sent successfully"}
    support.refresh_from_db()
    assert support.status == "replied"
    assert support.replied_at is not None
    assert socket_events[-1][0] == "supportReply"

    messages = admin_client.get("/api/admin/support-messages").json()
    assert messages[0]["adminReply"] == "Done"


def test_support_conversations(admin_client, student, teacher):
    create_support_message(student, "first")
    create_support_message(teacher, "teacher question")
    create_support_message(student, "second")

    conversations = admin_client.get("/api/admin/support-conversations").json()
    assert [c["userId"] for c in conversations] == [str(student.id), str(teacher.id)]
    assert conversations[0]["lastMessage"] == "second"
    assert conversations[0]["messageCount"] == 2
    assert conversations[0]["hasReply"] is False

    thread = admin_client.get(f"/api/admin/support-conversations/{student.id}/messages").json()
    assert [m["message"] for m in thread] == ["first", "second"]


def test_support_conversation_reply(admin_client, student):
    create_support_message(student, "first")
    latest = create_support_message(student, "second")

    response = admin_client.post(f"/api/admin/support-conversations/{student.id}/reply", {}, format="json")
    assert response.json() == {"message": "Reply message is required"}

    response = admin_client.post(
        f"/api/admin/support-conversations/{student.id}/reply", {"message": "On it"}, format="json"
    )
    assert response.json() == {"success": True, "messageId": str(latest.id)}
    latest.refresh_from_db()
    assert latest.admin_reply == "On it"


def test_teacher_kyc_review(admin_client, teacher):
    KycDocument.objects.create(teacher=teacher.teacher_profile)

    response = admin_client.post(f"/api/admin/teachers/{teacher.id}/kyc", {"status": "rejected"}, format="json")

    assert response.status_code == 200
    assert response.json()["kycStatus"] == "rejected"
    assert KycDocument.objects.get().status == "rejected"

    response = admin_client.post(f"/api/admin/teachers/{teacher.id}/kyc", {"status": "bogus"}, format="json")
    assert response.status_code == 400


def test_export_csv(admin_client, student, teacher):
    response = admin_client.get("/api/admin/users/export?format=csv")

    assert response.status_code == 200
    assert response["Content-Type"] == "text/csv"
    assert 'filename="users_export.csv"' in response["Content-Disposition"]
    content = response.content.decode()
    assert content.splitlines()[0].startswith("ID,First Name,Last Name,Email")
    assert "asha@example.com" in content
    assert "admin@example.com" not in content


def test_export_excel(admin_client, student):
    response = admin_client.get("/api/admin/users/export?format=excel")

    assert response.status_code == 200
    assert response.content[:2] == b"PK"
    assert 'filename="users_export.xlsx"' in response["Content-Disposition"]


def test_export_unknown_format(admin_client):
    response = admin_client.get("/api/admin/users/export?format=pdf")

    assert response.status_code == 400
