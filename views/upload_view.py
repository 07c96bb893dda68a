import streamlit as st
import auth
from use_cases import upload_flow
from use_cases.session_models import PhotoAsset
from use_cases.upload_flow import UploadKind
from utils import session_manager

SCREEN_COPY = {
    UploadKind.PROFILE_PHOTO: {
        "title": "🖼️ Profile photo",
        "intro": "Add a clear photo of yourself so counsellors know who they are talking to.",
        "button": "UPLOAD PHOTO",
        "allow_gallery": True,
    },
    UploadKind.POSE_VERIFICATION: {
        "title": "🤳 Photo verification",
        "intro": (
            "Hold your camera at arm's length and copy the pose shown. "
            "Make sure your face is clearly visible and well-lit. "
            "Your verification photo is used only for identity verification and is not shown on your profile."
        ),
        "button": "SUBMIT MY PHOTO",
        "allow_gallery": False,
    },
    UploadKind.ID_DOCUMENT: {
        "title": "🪪 Age verification",
        "intro": (
            "To verify your age, please upload a valid ID with your photo and date of birth. "
            "Accepted IDs: Aadhaar Card, PAN Card, Driving License, Passport, School/College ID."
        ),
        "button": "SUBMIT FOR VERIFICATION",
        "allow_gallery": True,
    },
}


def render_upload_screen(kind: UploadKind):
    copy = SCREEN_COPY[kind]
    form = st.session_state.upload_forms[kind.value]

    st.title(copy["title"])
    st.write(copy["intro"])

    source = "Take photo"
    if copy["allow_gallery"]:
        source = st.radio("Photo source", ["Take photo", "Choose from gallery"], horizontal=True, key=f"src_{kind.value}")

    if source == "Take photo":
        picked = st.camera_input("Camera", key=f"cam_{kind.value}")
    else:
        picked = st.file_uploader("Gallery", type=["jpg", "jpeg", "png"], key=f"file_{kind.value}")

    if picked is not None:
        form.photo = PhotoAsset(content=picked.getvalue())

    if form.photo is not None:
        st.image(form.photo.content, caption="Selected photo", width=260)
    else:
        st.caption("No photo selected yet.")

    if st.button(
        copy["button"],
        type="primary",
        disabled=not upload_flow.can_submit(form),
    ):
        with st.spinner("Uploading..."):
            result = upload_flow.submit_upload(auth.get_api_client(), auth.get_session_store(), kind, form)
        session_manager.apply_result(result)

    if kind != UploadKind.PROFILE_PHOTO and st.button("Skip for now"):
        session_manager.apply_result(upload_flow.skip_upload(kind), success_level="info")
