"""Location capture: permission, fix, reverse geocoding and submission."""

import logging

from infrastructure.device.location_provider import Address, Coordinates, IpLocationProvider
from infrastructure.http.lampy_api_client import ApiError, LampyApiClient
from infrastructure.repositories.sqlite_session_repository import SQLiteSessionRepository
from use_cases import auth_flow
from use_cases.flow_result import FlowResult, proceed, retry

log = logging.getLogger(__name__)

LOCATION_ENDPOINT = "/users/location"
NEXT_SCREEN = "photo_upload"

LOCATION_NOT_PROVIDED = "Location not provided"
LOCATION_DETECTED = "Location detected"
LOCATION_DETECTION_FAILED = "Location detection failed"

PERMISSION_DENIED_MESSAGE = (
    "Location access is required to provide personalized counselor recommendations. "
    "You can continue without it or grant permission later."
)
FIX_FAILED_MESSAGE = "Failed to get your current location. Please try again or enter manually."


def format_coordinates(coords: Coordinates) -> str:
    return f"{coords.latitude:.4f}, {coords.longitude:.4f}"


def format_address(address: Address) -> str:
    """'City, Region, Country' with empty leading/trailing components dropped."""
    parts = [address.city or address.subregion, address.region, address.country]
    while parts and not parts[0]:
        parts.pop(0)
    while parts and not parts[-1]:
        parts.pop()
    return ", ".join(parts)


def describe_position(provider: IpLocationProvider, coords: Coordinates) -> str:
    try:
        addresses = provider.reverse_geocode(coords)
    except RuntimeError as e:
        log.warning(f"Reverse geocoding failed, falling back to coordinates: {e}")
        return format_coordinates(coords)

    if not addresses:
        return format_coordinates(coords)
    return format_address(addresses[0]) or LOCATION_DETECTED


def detect_location(provider: IpLocationProvider) -> FlowResult:
    """
    Resolves the device location into a display string.
    PROCEED carries the string in `data["location"]`; the caller still has to submit it.
    """
    if provider.request_permission() != "granted":
        return retry(PERMISSION_DENIED_MESSAGE, data={"permission": "denied"})

    try:
        coords = provider.current_position()
    except RuntimeError as e:
        log.error(f"Error getting location: {e}")
        return retry(FIX_FAILED_MESSAGE, data={"permission": "granted", "location": LOCATION_DETECTION_FAILED})

    location = describe_position(provider, coords)
    return proceed(NEXT_SCREEN, data={"permission": "granted", "location": location})


def submit_location(client: LampyApiClient, store: SQLiteSessionRepository, location: str) -> FlowResult:
    if not location or not location.strip():
        return retry("Please allow location access or wait for location detection to complete.")

    token = auth_flow.require_token(store)
    if isinstance(token, FlowResult):
        return token

    try:
        client.post(LOCATION_ENDPOINT, {"location": location.strip()}, token)
    except ApiError as e:
        log.error(f"Location update error: {e.message}")
        return retry(e.message or "Failed to update location. Please try again.")

    return proceed(NEXT_SCREEN, message="Your location has been saved successfully.")


def skip_location(client: LampyApiClient, store: SQLiteSessionRepository) -> FlowResult:
    """Submits the sentinel and always advances; submission failures only get logged."""
    token = store.get_token()
    try:
        client.post(LOCATION_ENDPOINT, {"location": LOCATION_NOT_PROVIDED}, token)
    except ApiError as e:
        log.warning(f"Skip location error: {e.message}")
    return proceed(NEXT_SCREEN)
