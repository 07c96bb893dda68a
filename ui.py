import streamlit as st

ONBOARDING_STEPS = [
    ("location", "Location"),
    ("photo_upload", "Photo"),
    ("photo_verification", "Verification"),
    ("age_verification", "Age check"),
    ("preferences", "Preferences"),
    ("counsellors", "Counsellors"),
]


def setup_style():
    st.markdown("""
    <style>
        @import url('https://fonts.googleapis.com/css2?family=Manrope:wght@400;600;700;800&display=swap');

        :root {
            --lampy-deep: #002C75;
            --lampy-accent: #00E5FF;
            --text-main: #f3f8ff;
        }

        html, body, .stApp {
            font-family: 'Manrope', sans-serif;
            color: var(--text-main);
            background: linear-gradient(180deg, #000000 0%, var(--lampy-deep) 60%, #00506b 100%);
            background-attachment: fixed;
        }

        .stButton > button[kind="primary"], .stFormSubmitButton > button {
            border-radius: 12px !important;
            font-weight: 700 !important;
            letter-spacing: 0.04em;
        }

        [data-testid="stAlert"]{
            border-radius: 16px !important;
        }

        .lampy-steps { display: flex; gap: 0.4rem; margin-bottom: 1rem; flex-wrap: wrap; }
        .lampy-step { padding: 0.2rem 0.6rem; border-radius: 999px; font-size: 0.8rem;
                      background: rgba(255,255,255,0.08); color: rgba(243,248,255,0.6); }
        .lampy-step.done { background: rgba(0,229,255,0.18); color: var(--text-main); }
        .lampy-step.current { background: var(--lampy-accent); color: #001b47; font-weight: 700; }
    </style>
    """, unsafe_allow_html=True)


def render_progress(screen):
    keys = [key for key, _ in ONBOARDING_STEPS]
    if screen not in keys:
        return
    current_idx = keys.index(screen)
    chips = []
    for idx, (_, label) in enumerate(ONBOARDING_STEPS):
        css = "current" if idx == current_idx else ("done" if idx < current_idx else "")
        chips.append(f'<span class="lampy-step {css}">{label}</span>')
    st.markdown(f'<div class="lampy-steps">{"".join(chips)}</div>', unsafe_allow_html=True)


def verification_badges(profile):
    def mark(flag):
        return "✅" if flag else "⏳"
    return f"Photo {mark(profile.photo_verified)} · Age {mark(profile.age_verified)} · Account {mark(profile.is_verified)}"
