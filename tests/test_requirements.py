import pytest

from apps.requirements.models import Requirement
from apps.users.models import User

pytestmark = pytest.mark.django_db


def post_requirement(client, **overrides):
    payload = {
        "subjects": ["Mathematics", "Science"],
        "classes": ["9th", "10th"],
        "location": "Andheri, Mumbai",
        "city": "Mumbai",
        "type": "offline",
        "fee": "3000",
        "feeType": "per_month",
        "description": "Need weekend classes",
    }
    payload.update(overrides)
    return client.post("/api/requirements", payload, format="json")


def test_create_requirement(client_for, student):
    response = post_requirement(client_for(student))

    assert response.status_code == 201
    body = response.json()
    assert body["userId"] == str(student.id)
    assert body["userType"] == "student"
    assert body["isActive"] is True
    assert body["feeType"] == "per_month"


def test_create_requirement_accepts_csv_subjects(client_for, student):
    response = post_requirement(client_for(student), subjects="Maths, English")

    assert response.status_code == 201
    assert response.json()["subjects"] == ["Maths", "English"]


@pytest.mark.parametrize("overrides", [{"subjects": []}, {"location": ""}])
def test_create_requirement_validation(client_for, student, overrides):
    response = post_requirement(client_for(student), **overrides)

    assert response.status_code == 400
    assert not Requirement.objects.exists()


def test_new_requirement_replaces_previous(client_for, student):
    client = client_for(student)
    post_requirement(client, description="first")
    post_requirement(client, description="second")

    active = Requirement.objects.filter(user=student, is_active=True)
    assert active.count() == 1
    assert active.get().description == "second"

    response = client.get("/api/requirements/my")
    assert response.json()["description"] == "second"


def test_my_requirement_is_null_without_posting(client_for, student):
    response = client_for(student).get("/api/requirements/my")

    assert response.status_code == 200
    assert response["Content-Type"] == "application/json"
    assert response.content == b"null"
    assert response.json() is None


def test_delete_deactivates(client_for, student):
    client = client_for(student)
    post_requirement(client)

    response = client.delete("/api/requirements")

    assert response.json() == {"message": "Requirement deleted successfully"}
    assert not Requirement.objects.filter(user=student, is_active=True).exists()
    assert client.get("/api/requirements").json() == []


def test_list_filters(client_for, student, teacher, make_user):
    other = make_user("other@example.com", role=User.Role.STUDENT)
    post_requirement(client_for(student), subjects=["Physics"], location="Pune")
    post_requirement(client_for(other), subjects=["History"], location="Mumbai")
    post_requirement(client_for(teacher), subjects=["Mathematics"], location="Pune")

    client = client_for(teacher)
    everything = client.get("/api/requirements").json()
    assert len(everything) == 3
    assert everything[0]["user"]["id"] == str(teacher.id)

    students_only = client.get("/api/requirements?userType=student").json()
    assert {r["userId"] for r in students_only} == {str(student.id), str(other.id)}

    in_pune = client.get("/api/requirements?location=pun").json()
    assert {r["userId"] for r in in_pune} == {str(student.id), str(teacher.id)}

    physics = client.get("/api/requirements?subjects=phys,chem").json()
    assert [r["userId"] for r in physics] == [str(student.id)]
