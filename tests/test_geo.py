import pytest
import requests

from apps.core import geo


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


def route(responses):
    """requests.get replacement answering by URL; exceptions are raised."""
    calls = []

    def fake_get(url, **kwargs):
        calls.append(url)
        answer = responses[url]
        if isinstance(answer, Exception):
            raise answer
        return answer

    fake_get.calls = calls
    return fake_get


@pytest.fixture
def urls(settings):
    settings.GEOCODING_PRIMARY_URL = "https://primary.test/reverse"
    settings.GEOCODING_FALLBACK_URL = "https://fallback.test/reverse"
    return settings.GEOCODING_PRIMARY_URL, settings.GEOCODING_FALLBACK_URL


def test_haversine_same_point_is_zero():
    assert geo.haversine_km(28.6139, 77.2090, 28.6139, 77.2090) == 0


def test_haversine_delhi_to_mumbai():
    distance = geo.haversine_km(28.6139, 77.2090, 19.0760, 72.8777)
    assert 1140 < distance < 1160


def test_haversine_accepts_strings_and_decimals():
    from decimal import Decimal

    assert geo.haversine_km("0", "0", Decimal("0"), Decimal("1")) == pytest.approx(111.19, abs=0.01)


def test_reverse_geocode_uses_primary_provider(monkeypatch, urls):
    primary, _ = urls
    fake_get = route({primary: FakeResponse({
        "locality": "Connaught Place",
        "city": "New Delhi",
        "principalSubdivision": "Delhi",
        "postcode": "110001",
        "localityInfo": {"administrative": [{"name": "India"}]},
    })})
    monkeypatch.setattr(geo.requests, "get", fake_get)

    address = geo.reverse_geocode(28.6315, 77.2167)

    assert address["fullAddress"] == "Connaught Place"
    assert address["street"] == "India"
    assert address["city"] == "New Delhi"
    assert address["state"] == "Delhi"
    assert address["pinCode"] == "110001"
    assert address["accuracy"] == 0
    assert fake_get.calls == [primary]


def test_reverse_geocode_builds_address_without_locality(monkeypatch, urls):
    primary, _ = urls
    monkeypatch.setattr(geo.requests, "get", route({primary: FakeResponse({
        "city": "Pune",
        "principalSubdivisionCode": "IN-MH",
        "countryName": "India",
        "postalCode": 411001,
    })}))

    address = geo.reverse_geocode(18.52, 73.85)

    assert address["fullAddress"] == "Pune, , India"
    assert address["state"] == "IN-MH"
    assert address["pinCode"] == "411001"
    assert address["street"] == ""


def test_reverse_geocode_falls_back_to_nominatim(monkeypatch, urls):
    primary, fallback = urls
    fake_get = route({
        primary: FakeResponse({}, status_code=503),
        fallback: FakeResponse({
            "display_name": "MG Road, Bengaluru, Karnataka, India",
            "address": {"road": "MG Road", "town": "Bengaluru", "state": "Karnataka", "postcode": "560001"},
        }),
    })
    monkeypatch.setattr(geo.requests, "get", fake_get)

    address = geo.reverse_geocode(12.9716, 77.5946)

    assert fake_get.calls == [primary, fallback]
    assert address["fullAddress"] == "MG Road, Bengaluru, Karnataka, India"
    assert address["street"] == "MG Road"
    assert address["city"] == "Bengaluru"
    assert address["state"] == "Karnataka"
    assert address["pinCode"] == "560001"


def test_reverse_geocode_returns_coordinates_when_both_fail(urls):
    address = geo.reverse_geocode(12.5, 77.25)

    assert address == {
        "latitude": 12.5,
        "longitude": 77.25,
        "accuracy": 0,
        "fullAddress": "12.500000, 77.250000",
        "street": "",
        "city": "",
        "state": "",
        "pinCode": "",
    }


def test_reverse_geocode_ignores_non_object_payloads(monkeypatch, urls):
    primary, fallback = urls
    fake_get = route({primary: FakeResponse([]), fallback: FakeResponse(["unexpected"])})
    monkeypatch.setattr(geo.requests, "get", fake_get)

    address = geo.reverse_geocode(12.5, 77.25)

    assert fake_get.calls == [primary, fallback]
    assert address["fullAddress"] == "12.500000, 77.250000"
    assert address["city"] == ""


def test_directions_url_with_coordinates():
    url = geo.google_maps_directions_url(28.6, 77.2, 28.7, 77.1)
    assert url == "https://www.google.com/maps/dir/28.6,77.2/28.7,77.1"


def test_directions_url_with_address():
    url = geo.google_maps_directions_url(28.6, 77.2, dest_address="India Gate, New Delhi")
    assert url == "https://www.google.com/maps/dir/28.6,77.2/India%20Gate%2C%20New%20Delhi"


def test_directions_url_requires_destination():
    with pytest.raises(ValueError, match="Destination location not available"):
        geo.google_maps_directions_url(28.6, 77.2)


@pytest.mark.parametrize("code, fragment", [
    (1, "denied"),
    (2, "unavailable"),
    (3, "timed out"),
    (99, "unknown"),
    ("bogus", "unknown"),
])
def test_geolocation_error_messages(code, fragment):
    assert fragment in geo.geolocation_error_message(code)
