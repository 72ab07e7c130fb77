# apps/core/geo.py
"""
Geolocation helpers shared by every app.

Distances are great-circle distances on a spherical Earth. Addresses come
from the public BigDataCloud reverse-geocoding API, falling back to
OpenStreetMap Nominatim when the first provider fails.
"""
import logging
import math
from urllib.parse import quote

import requests
from django.conf import settings

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371

GEOLOCATION_ERROR_MESSAGES = {
    1: "Location access denied. Please enable location permissions in your browser settings.",
    2: "Location information is unavailable. Please check your GPS or network connection.",
    3: "Location request timed out. Please try again.",
}
UNKNOWN_GEOLOCATION_ERROR = "An unknown error occurred while retrieving your location."


def haversine_km(lat1, lng1, lat2, lng2):
    """Distance in kilometres between two (lat, lng) points."""
    lat1, lng1, lat2, lng2 = (float(v) for v in (lat1, lng1, lat2, lng2))
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def geolocation_error_message(code):
    """Map a browser GeolocationPositionError code to a user-facing message."""
    try:
        code = int(code)
    except (TypeError, ValueError):
        return UNKNOWN_GEOLOCATION_ERROR
    return GEOLOCATION_ERROR_MESSAGES.get(code, UNKNOWN_GEOLOCATION_ERROR)


def _first(mapping, *keys):
    for key in keys:
        value = mapping.get(key)
        if value:
            return value
    return ""


def _default_address(latitude, longitude):
    return {
        "latitude": latitude,
        "longitude": longitude,
        "accuracy": 0,
        "fullAddress": f"{latitude:.6f}, {longitude:.6f}",
        "street": "",
        "city": "",
        "state": "",
        "pinCode": "",
    }


def _json_object(data):
    if not isinstance(data, dict):
        raise ValueError(f"Unexpected geocoding payload: {type(data).__name__}")
    return data


def _from_bigdatacloud(data, address):
    data = _json_object(data)
    full_address = data.get("locality") or ", ".join(
        str(part or "") for part in (data.get("city"), data.get("principalSubdivision"), data.get("countryName"))
    ).strip(", ")

    locality_info = data.get("localityInfo")
    administrative = (locality_info.get("administrative") if isinstance(locality_info, dict) else None) or []
    street = ""
    if administrative and isinstance(administrative[0], dict):
        street = administrative[0].get("name") or ""

    address.update({
        "fullAddress": full_address or address["fullAddress"],
        "street": street or _first(data, "locality", "district"),
        "city": _first(data, "city", "locality", "district"),
        "state": _first(data, "principalSubdivision", "principalSubdivisionCode"),
        "pinCode": str(_first(data, "postcode", "postalCode")),
    })
    return address


def _from_nominatim(data, address, latitude, longitude):
    parts = _json_object(data).get("address")
    if not isinstance(parts, dict):
        parts = {}
    address.update({
        "fullAddress": data.get("display_name") or f"{latitude}, {longitude}",
        "street": _first(parts, "road", "house_number", "suburb", "neighbourhood"),
        "city": _first(parts, "city", "town", "village", "municipality", "county"),
        "state": _first(parts, "state", "province", "state_district"),
        "pinCode": str(_first(parts, "postcode", "postal_code")),
    })
    return address


def reverse_geocode(latitude, longitude):
    """
    Turn coordinates into an address dict.

    Never raises: when both providers fail the coordinates themselves are
    returned as the full address and every other part is empty.
    """
    latitude = float(latitude)
    longitude = float(longitude)
    address = _default_address(latitude, longitude)
    timeout = settings.GEOCODING_TIMEOUT

    try:
        response = requests.get(
            settings.GEOCODING_PRIMARY_URL,
            params={"latitude": latitude, "longitude": longitude, "localityLanguage": "en"},
            timeout=timeout,
        )
        response.raise_for_status()
        return _from_bigdatacloud(response.json(), address)
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Primary geocoding failed for %s,%s: %s", latitude, longitude, exc)

    try:
        response = requests.get(
            settings.GEOCODING_FALLBACK_URL,
            params={"format": "json", "lat": latitude, "lon": longitude, "addressdetails": 1},
            headers={"User-Agent": settings.GEOCODING_USER_AGENT},
            timeout=timeout,
        )
        response.raise_for_status()
        return _from_nominatim(response.json(), address, latitude, longitude)
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Fallback geocoding failed for %s,%s: %s", latitude, longitude, exc)

    return address


def google_maps_directions_url(origin_lat, origin_lng, dest_lat=None, dest_lng=None, dest_address=None):
    """Directions link from the origin to either coordinates or a free-text address."""
    if dest_lat is not None and dest_lng is not None:
        destination = f"{dest_lat},{dest_lng}"
    elif dest_address:
        destination = quote(dest_address)
    else:
        raise ValueError("Destination location not available")
    return f"https://www.google.com/maps/dir/{origin_lat},{origin_lng}/{destination}"
