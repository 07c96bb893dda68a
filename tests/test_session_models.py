import pytest

from use_cases.session_models import BookedSession, BookingRequest, Counsellor, UserProfile


def test_counsellor_from_api_defaults() -> None:
    counsellor = Counsellor.from_api({"id": 3, "name": "Kavya", "rating": None, "specialties": None})
    assert counsellor.rating == 0.0
    assert counsellor.specialties == ()
    assert counsellor.available is True
    assert counsellor.image_url is None


def test_counsellor_requires_id() -> None:
    with pytest.raises(KeyError):
        Counsellor.from_api({"name": "No id"})


def test_user_profile_from_api() -> None:
    profile = UserProfile.from_api({"id": 1, "name": "Asha", "email": "a@b.com", "age_verified": 1})
    assert profile.age_verified is True
    assert profile.location == ""


@pytest.mark.parametrize("status,cancellable", [
    ("pending", True),
    ("confirmed", True),
    ("completed", False),
    ("cancelled", False),
])
def test_booked_session_cancellable(status, cancellable) -> None:
    session = BookedSession.from_api({"id": 1, "status": status})
    assert session.is_cancellable is cancellable


def test_booking_payload_field_names() -> None:
    payload = BookingRequest(counsellor_id=2, session_date="2024-03-15T04:30:00Z", duration=60, notes="n").to_payload()
    assert set(payload) == {"counsellor_id", "session_date", "duration", "notes"}
