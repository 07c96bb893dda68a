"""Application layer contracts for the onboarding and booking flows."""

from .flow_result import ENTRY_SCREEN, FlowResult, FlowStatus
from .session_models import (
    CONSULTATION_TOPICS,
    MAX_PREFERENCES,
    BookedSession,
    BookingRequest,
    Counsellor,
    PhotoAsset,
    Session,
    UploadForm,
    UserProfile,
)
from .upload_flow import UploadKind

__all__ = [
    "BookedSession",
    "BookingRequest",
    "CONSULTATION_TOPICS",
    "Counsellor",
    "ENTRY_SCREEN",
    "FlowResult",
    "FlowStatus",
    "MAX_PREFERENCES",
    "PhotoAsset",
    "Session",
    "UploadForm",
    "UploadKind",
    "UserProfile",
]
