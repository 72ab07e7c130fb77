import pytest

from apps.communications.models import Message
from apps.communications import realtime
from apps.connections.models import UserRequest
from apps.connections.services import ACCEPTED_AUTO_REPLY

pytestmark = pytest.mark.django_db


def send_request(client, receiver, message="Please teach me"):
    return client.post("/api/user/request", {"receiverId": str(receiver.id), "message": message}, format="json")


def test_send_request(client_for, student, teacher):
    response = send_request(client_for(student), teacher)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Request sent successfully"
    assert body["request"]["status"] == "pending"
    assert body["request"]["senderId"] == str(student.id)
    assert body["request"]["receiverId"] == str(teacher.id)


def test_cannot_request_self(client_for, student):
    response = send_request(client_for(student), student)

    assert response.status_code == 400
    assert response.json() == {"message": "You cannot send a request to yourself"}


def test_sent_and_received_lists(client_for, student, teacher):
    send_request(client_for(student), teacher)

    sent = client_for(student).get("/api/user/requests/sent").json()
    assert sent[0]["toUser"]["id"] == str(teacher.id)
    assert sent[0]["toUser"]["subjects"] == ["Mathematics", "Physics"]
    assert sent[0]["toUser"]["qualification"] == "M.Sc"

    received = client_for(teacher).get("/api/user/requests/received").json()
    assert received[0]["fromUser"]["id"] == str(student.id)
    assert received[0]["fromUser"]["class"] == "10th"

    assert client_for(teacher).get("/api/user/requests/sent").json() == []


def test_accept_sends_availability_message(client_for, student, teacher, socket_events):
    send_request(client_for(student), teacher)
    request = UserRequest.objects.get()
    realtime.registry.register(str(student.id), "sid-student")

    response = client_for(teacher).patch(f"/api/user/request/{request.id}", {"status": "accepted"}, format="json")

    assert response.status_code == 200
    assert response.json()["message"] == "Request updated successfully"
    assert response.json()["request"]["status"] == "accepted"
    message = Message.objects.get()
    assert message.from_user_id == teacher.id
    assert message.to_user_id == student.id
    assert message.content == ACCEPTED_AUTO_REPLY
    assert socket_events[-1][0] == "message_received"


def test_reject_sends_nothing(client_for, student, teacher):
    send_request(client_for(student), teacher)
    request = UserRequest.objects.get()

    response = client_for(teacher).patch(f"/api/user/request/{request.id}", {"status": "rejected"}, format="json")

    assert response.json()["request"]["status"] == "rejected"
    assert not Message.objects.exists()


def test_only_receiver_may_update(client_for, student, teacher):
    send_request(client_for(student), teacher)
    request = UserRequest.objects.get()

    response = client_for(student).patch(f"/api/user/request/{request.id}", {"status": "accepted"}, format="json")

    assert response.status_code == 403
    request.refresh_from_db()
    assert request.status == "pending"


def test_update_missing_request(client_for, teacher):
    response = client_for(teacher).patch(
        "/api/user/request/00000000-0000-0000-0000-000000000000", {"status": "accepted"}, format="json"
    )

    assert response.status_code == 404
    assert response.json() == {"message": "Request not found"}


def test_update_rejects_unknown_status(client_for, student, teacher):
    send_request(client_for(student), teacher)
    request = UserRequest.objects.get()

    response = client_for(teacher).patch(f"/api/user/request/{request.id}", {"status": "maybe"}, format="json")

    assert response.status_code == 400
