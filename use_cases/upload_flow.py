"""Photo and document uploads: profile photo, pose verification, ID document."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict

from infrastructure.http.lampy_api_client import ApiError, LampyApiClient
from infrastructure.repositories.sqlite_session_repository import SQLiteSessionRepository
from use_cases import auth_flow
from use_cases.flow_result import FlowResult, proceed, retry
from use_cases.session_models import UploadForm

log = logging.getLogger(__name__)

NOT_ACKNOWLEDGED_MESSAGE = "Upload was not acknowledged by the server. Please try again."


def _is_pending(response: Any) -> bool:
    return isinstance(response, dict) and response.get("status") == "pending"


def _has_image_url(response: Any) -> bool:
    return isinstance(response, dict) and bool(response.get("image_url"))


class UploadKind(str, Enum):
    PROFILE_PHOTO = "profile_photo"
    POSE_VERIFICATION = "pose_verification"
    ID_DOCUMENT = "id_document"


@dataclass(frozen=True)
class UploadTarget:
    endpoint: str
    field_name: str
    filename: str
    next_screen: str
    missing_photo_message: str
    success_message: str
    failure_message: str
    is_acknowledged: Callable[[Any], bool]


UPLOAD_TARGETS: Dict[UploadKind, UploadTarget] = {
    UploadKind.PROFILE_PHOTO: UploadTarget(
        endpoint="/users/upload-photo",
        field_name="photo",
        filename="photo.jpg",
        next_screen="photo_verification",
        missing_photo_message="Please select or take a photo first.",
        success_message="Your profile photo has been uploaded successfully.",
        failure_message="Failed to upload photo. Please try again.",
        is_acknowledged=_has_image_url,
    ),
    UploadKind.POSE_VERIFICATION: UploadTarget(
        endpoint="/auth/verify-photo",
        field_name="photo",
        filename="verification_photo.jpg",
        next_screen="age_verification",
        missing_photo_message="Please take your verification photo first.",
        success_message="Your photo has been submitted for verification. Our team will review it shortly.",
        failure_message="Failed to upload verification photo. Please try again.",
        is_acknowledged=_is_pending,
    ),
    UploadKind.ID_DOCUMENT: UploadTarget(
        endpoint="/auth/verify-age",
        field_name="id_document",
        filename="id_document.jpg",
        next_screen="preferences",
        missing_photo_message="Please upload a valid ID document to continue.",
        success_message=(
            "Your ID document has been submitted for age verification. Our team will review it shortly."
        ),
        failure_message="Failed to upload ID document. Please try again.",
        is_acknowledged=_is_pending,
    ),
}


def can_submit(form: UploadForm) -> bool:
    return form.photo is not None and not form.uploading


def submit_upload(
    client: LampyApiClient,
    store: SQLiteSessionRepository,
    kind: UploadKind,
    form: UploadForm,
) -> FlowResult:
    """
    Sends the selected photo to the target endpoint.
    `form.uploading` is held while the request runs and always released; `form.photo` is
    never cleared so a failed upload can be retried as is.
    """
    target = UPLOAD_TARGETS[kind]
    if form.photo is None:
        return retry(target.missing_photo_message)
    if form.uploading:
        return retry("Upload already in progress.")

    token = auth_flow.require_token(store)
    if isinstance(token, FlowResult):
        return token

    form.uploading = True
    try:
        response = client.post_file(
            target.endpoint,
            target.field_name,
            form.photo.content,
            target.filename,
            token,
        )
    except ApiError as e:
        log.error(f"{kind.value} upload error: {e.message}")
        return retry(e.message or target.failure_message)
    finally:
        form.uploading = False

    if not target.is_acknowledged(response):
        log.warning(f"{kind.value} upload returned no acknowledgement: {response!r}")
        return retry(NOT_ACKNOWLEDGED_MESSAGE)

    return proceed(target.next_screen, message=target.success_message, data=response)


def skip_upload(kind: UploadKind) -> FlowResult:
    return proceed(UPLOAD_TARGETS[kind].next_screen)
