"""Domain DTOs shared across application layers."""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Literal, Optional, Tuple

BookingStatus = Literal["pending", "confirmed", "completed", "cancelled"]

CONSULTATION_TOPICS: Tuple[str, ...] = (
    "Stress Management",
    "Mental Health Concerns",
    "Career Guidance",
    "Relationship Issues",
    "Personal Growth",
    "Grief or Loss",
    "Decision-Making Support",
)
MAX_PREFERENCES = 3


@dataclass(frozen=True)
class Session:
    token: str
    user: Dict[str, Any]


@dataclass(frozen=True)
class UserProfile:
    id: Optional[int]
    name: str
    email: str
    location: str = ""
    consultation_preferences: Tuple[str, ...] = ()
    is_verified: bool = False
    photo_verified: bool = False
    age_verified: bool = False
    profile_photo_url: str = ""
    verification_photo_url: str = ""
    age_verification_photo_url: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "UserProfile":
        return cls(
            id=data.get("id"),
            name=data.get("name") or "",
            email=data.get("email") or "",
            location=data.get("location") or "",
            consultation_preferences=tuple(data.get("consultation_preferences") or ()),
            is_verified=bool(data.get("is_verified")),
            photo_verified=bool(data.get("photo_verified")),
            age_verified=bool(data.get("age_verified")),
            profile_photo_url=data.get("profile_photo_url") or "",
            verification_photo_url=data.get("verification_photo_url") or "",
            age_verification_photo_url=data.get("age_verification_photo_url") or "",
        )


@dataclass(frozen=True)
class Counsellor:
    id: int
    name: str
    role: str = ""
    experience: str = ""
    qualification: str = ""
    rating: float = 0.0
    total_ratings: int = 0
    specialties: Tuple[str, ...] = ()
    price: str = ""
    image_url: Optional[str] = None
    available: bool = True

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Counsellor":
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            role=data.get("role") or "",
            experience=data.get("experience") or "",
            qualification=data.get("qualification") or "",
            rating=float(data.get("rating") or 0.0),
            total_ratings=int(data.get("total_ratings") or 0),
            specialties=tuple(data.get("specialties") or ()),
            price=str(data.get("price") or ""),
            image_url=data.get("image_url") or None,
            available=bool(data.get("available", True)),
        )


@dataclass(frozen=True)
class BookingRequest:
    counsellor_id: int
    session_date: str
    duration: int
    notes: str

    def to_payload(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BookedSession:
    id: int
    counsellor_id: int
    session_date: str
    duration: int
    status: BookingStatus
    notes: str = ""
    counsellor: Optional[Counsellor] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "BookedSession":
        counsellor_raw = data.get("counsellor")
        counsellor = None
        if isinstance(counsellor_raw, dict) and counsellor_raw.get("id"):
            counsellor = Counsellor.from_api(counsellor_raw)
        return cls(
            id=data["id"],
            counsellor_id=data.get("counsellor_id") or 0,
            session_date=data.get("session_date") or "",
            duration=int(data.get("duration") or 0),
            status=data.get("status") or "pending",
            notes=data.get("notes") or "",
            counsellor=counsellor,
        )

    @property
    def is_cancellable(self) -> bool:
        return self.status in ("pending", "confirmed")


@dataclass(frozen=True)
class PhotoAsset:
    content: bytes


@dataclass
class UploadForm:
    """Mutable per-screen upload state: selected photo plus the in-flight flag."""

    photo: Optional[PhotoAsset] = None
    uploading: bool = False
