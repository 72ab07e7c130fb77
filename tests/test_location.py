import pytest

from apps.users import services
from apps.users.models import User

from .conftest import DELHI, MUMBAI, NEAR_DELHI

pytestmark = pytest.mark.django_db


def test_update_location_with_full_address(client_for, teacher, monkeypatch):
    monkeypatch.setattr(services, "reverse_geocode", pytest.fail)
    teacher.teacher_profile.is_verified = False
    teacher.teacher_profile.save()

    response = client_for(teacher).post("/api/user/location", {
        "latitude": 28.6139,
        "longitude": 77.209,
        "fullAddress": "Connaught Place, New Delhi",
        "street": "Janpath",
        "city": "New Delhi",
        "state": "Delhi",
        "pinCode": "110001",
    }, format="json")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Location updated successfully"
    assert body["user"]["isLocationVerified"] is True
    assert body["user"]["city"] == "New Delhi"

    teacher.refresh_from_db()
    profile = teacher.teacher_profile
    profile.refresh_from_db()
    assert str(teacher.latitude) == "28.61390000"
    assert profile.city == "New Delhi"
    assert profile.pin_code == "110001"
    assert profile.street == "Janpath"
    assert profile.is_verified is True


def test_update_location_geocodes_missing_parts(client_for, student, monkeypatch):
    calls = []

    def fake_geocode(latitude, longitude):
        calls.append((latitude, longitude))
        return {
            "fullAddress": "Bandra West, Mumbai",
            "street": "Hill Road",
            "city": "Mumbai",
            "state": "Maharashtra",
            "pinCode": "400050",
        }

    monkeypatch.setattr(services, "reverse_geocode", fake_geocode)

    response = client_for(student).post(
        "/api/auth/update-location", {"latitude": MUMBAI[0], "longitude": MUMBAI[1], "city": "Bombay"}, format="json"
    )

    assert response.status_code == 200
    assert calls == [MUMBAI]
    student.refresh_from_db()
    assert student.city == "Bombay"
    assert student.state == "Maharashtra"
    assert student.full_address == "Bandra West, Mumbai"
    assert student.student_profile.pin_code == "400050"


def test_update_location_without_providers_keeps_coordinates(client_for, student):
    response = client_for(student).post("/api/user/location", {"latitude": 12.5, "longitude": 77.25}, format="json")

    assert response.status_code == 200
    student.refresh_from_db()
    assert student.full_address == "12.500000, 77.250000"
    assert student.is_location_verified is True


@pytest.mark.parametrize("payload", [{}, {"latitude": 28.6}, {"longitude": 77.2}, {"latitude": "", "longitude": 77.2}])
def test_update_location_requires_coordinates(client_for, student, payload):
    response = client_for(student).post("/api/user/location", payload, format="json")

    assert response.status_code == 400
    assert response.json()["message"] == "Latitude and longitude are required"


def test_live_location_toggle(client_for, teacher):
    response = client_for(teacher).post(
        "/api/user/live-location",
        {"isLiveSharing": True, "latitude": NEAR_DELHI[0], "longitude": NEAR_DELHI[1]},
        format="json",
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Live location updated successfully"
    teacher.refresh_from_db()
    assert teacher.is_live_sharing is True
    assert teacher.live_location_updated_at is not None
    assert float(teacher.latitude) == pytest.approx(NEAR_DELHI[0])


@pytest.fixture
def neighbourhood(make_user):
    me = make_user("me@example.com", coords=DELHI, profile={"student_class": "9th"})
    near = make_user(
        "near@example.com",
        role=User.Role.TEACHER,
        coords=NEAR_DELHI,
        city="Delhi",
        profile={"subjects": ["Chemistry"], "monthly_fee": 4500, "rating": 4.5},
    )
    closer = make_user("closer@example.com", role=User.Role.TEACHER, coords=(28.62, 77.21))
    far = make_user("far@example.com", role=User.Role.TEACHER, coords=MUMBAI)
    unverified = make_user("unverified@example.com", role=User.Role.TEACHER, latitude=28.61, longitude=77.20)
    banned = make_user("banned@example.com", role=User.Role.TEACHER, coords=DELHI)
    banned.ban("spam")
    classmate = make_user("classmate@example.com", coords=DELHI)
    return {
        "me": me, "near": near, "closer": closer, "far": far,
        "unverified": unverified, "banned": banned, "classmate": classmate,
    }


def test_nearby_users_sorted_and_filtered(client_for, neighbourhood):
    response = client_for(neighbourhood["me"]).get("/api/nearby-users/50")

    assert response.status_code == 200
    results = response.json()
    assert [r["id"] for r in results] == [str(neighbourhood["closer"].id), str(neighbourhood["near"].id)]

    near = results[1]
    assert near["userType"] == "teacher"
    assert near["subjects"] == ["Chemistry"]
    assert near["monthlyFee"] == 4500
    assert near["rating"] == 4.5
    assert near["isVerified"] is True
    assert near["distance"] == round(near["distance"], 1)
    assert 10 < near["distance"] < 20


def test_nearby_users_default_radius_for_bad_value(client_for, neighbourhood):
    response = client_for(neighbourhood["me"]).get("/api/nearby-users/abc")

    assert response.status_code == 200
    assert len(response.json()) == 2


def test_nearby_users_default_route(client_for, neighbourhood):
    response = client_for(neighbourhood["me"]).get("/api/nearby-users")

    assert len(response.json()) == 2


def test_nearby_users_small_radius(client_for, neighbourhood):
    response = client_for(neighbourhood["me"]).get("/api/nearby-users/5")

    assert [r["id"] for r in response.json()] == [str(neighbourhood["closer"].id)]


def test_nearby_users_for_teacher_lists_students(client_for, neighbourhood):
    results = client_for(neighbourhood["near"]).get("/api/nearby-users/50").json()

    assert {r["id"] for r in results} == {str(neighbourhood["me"].id), str(neighbourhood["classmate"].id)}
    assert all(r["rating"] is None for r in results)
    assert results[0]["class"] in ("9th", "")


def test_nearby_users_without_coordinates(client_for, student, neighbourhood):
    response = client_for(student).get("/api/nearby-users/100")

    assert response.json() == []


def test_nearby_live_users(client_for, neighbourhood):
    near = neighbourhood["near"]
    near.is_live_sharing = True
    near.save()
    far = neighbourhood["far"]
    far.is_live_sharing = True
    far.save()

    results = client_for(neighbourhood["me"]).get("/api/nearby/live-users?radius=20").json()

    assert [r["id"] for r in results] == [str(near.id)]
    assert results[0]["currentLocation"] == {
        "city": "Delhi",
        "state": "Unknown",
        "fullAddress": f"{near.latitude}, {near.longitude}",
    }


def test_nearby_live_users_default_radius_and_target(client_for, neighbourhood):
    classmate = neighbourhood["classmate"]
    classmate.is_live_sharing = True
    classmate.save()

    client = client_for(neighbourhood["me"])

    assert client.get("/api/nearby/live-users").json() == []
    results = client.get("/api/nearby/live-users?targetUserType=student").json()
    assert [r["id"] for r in results] == [str(classmate.id)]


def test_set_online_status_stamps_last_seen(student):
    services.set_online_status(str(student.id), False)

    student.refresh_from_db()
    assert student.is_online is False
    assert student.last_seen is not None


def test_set_online_status_stamps_last_seen_when_going_online(student):
    services.set_online_status(student, True)

    student.refresh_from_db()
    assert student.is_online is True
    assert student.last_seen is not None
    assert student.recently_online


def test_set_online_status_ignores_unknown_ids(db):
    assert services.set_online_status("not-a-uuid", True) is None
