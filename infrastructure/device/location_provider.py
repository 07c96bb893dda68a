import logging
from dataclasses import dataclass
from typing import List, Literal

import requests

log = logging.getLogger(__name__)

PermissionStatus = Literal["granted", "denied"]

DEFAULT_IP_GEO_URL = "https://ipapi.co/json/"
DEFAULT_NOMINATIM_URL = "https://nominatim.openstreetmap.org/reverse"
USER_AGENT = "lampy-client/1.0"


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Address:
    city: str = ""
    subregion: str = ""
    region: str = ""
    country: str = ""


class IpLocationProvider:
    """
    Location capability for a browser-hosted client: the user grants consent in the UI,
    the fix comes from IP geolocation and the address from Nominatim reverse geocoding.
    """

    def __init__(
        self,
        consent_given: bool,
        ip_geo_url: str = DEFAULT_IP_GEO_URL,
        nominatim_url: str = DEFAULT_NOMINATIM_URL,
        timeout: float = 10,
    ):
        self.consent_given = consent_given
        self.ip_geo_url = ip_geo_url
        self.nominatim_url = nominatim_url
        self.timeout = timeout

    def request_permission(self) -> PermissionStatus:
        return "granted" if self.consent_given else "denied"

    def current_position(self) -> Coordinates:
        try:
            resp = requests.get(self.ip_geo_url, timeout=self.timeout)
        except requests.RequestException as e:
            log.error(f"❌ IP geolocation request failed: {e}")
            raise RuntimeError(f"Location lookup network error: {e}") from e

        if resp.status_code != 200:
            raise RuntimeError(f"Location lookup failed: HTTP {resp.status_code}")
        try:
            data = resp.json()
            return Coordinates(latitude=float(data["latitude"]), longitude=float(data["longitude"]))
        except (KeyError, TypeError, ValueError) as e:
            raise RuntimeError("Location lookup returned no coordinates") from e

    def reverse_geocode(self, coords: Coordinates) -> List[Address]:
        try:
            resp = requests.get(
                self.nominatim_url,
                params={"lat": coords.latitude, "lon": coords.longitude, "format": "jsonv2"},
                headers={"User-Agent": USER_AGENT},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RuntimeError(f"Reverse geocoding network error: {e}") from e

        if resp.status_code != 200:
            log.warning(f"⚠️ Reverse geocoding failed: HTTP {resp.status_code}")
            return []

        try:
            raw = resp.json().get("address") or {}
        except ValueError as e:
            raise RuntimeError("Reverse geocoding returned an unreadable body") from e
        if not raw:
            return []
        return [
            Address(
                city=raw.get("city") or raw.get("town") or raw.get("village") or "",
                subregion=raw.get("county") or raw.get("state_district") or "",
                region=raw.get("state") or "",
                country=raw.get("country") or "",
            )
        ]
