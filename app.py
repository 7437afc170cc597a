"""PassForge -- Streamlit web interface."""

import asyncio

import streamlit as st

from passforge import MAX_LENGTH, MIN_LENGTH
from passforge.config import get_settings
from passforge.log import configure_logging
from passforge.session import GeneratorSession

# ── Lucide icons (from lucide.dev) ────────────────────────────────────────

_LUCIDE = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="{s}" height="{s}" '
    'viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" '
    'stroke-linecap="round" stroke-linejoin="round">{paths}</svg>'
)

ICON_KEY_ROUND = _LUCIDE.format(s=32, paths=(
    '<path d="M2.586 17.414A2 2 0 0 0 2 18.828V21a1 1 0 0 0 1 1h3'
    'a1 1 0 0 0 1-1v-1a1 1 0 0 1 1-1h1a1 1 0 0 0 1-1v-1'
    'a1 1 0 0 1 1-1h.172a2 2 0 0 0 1.414-.586l.814-.814'
    'a6.5 6.5 0 1 0-4-4z"/>'
    '<circle cx="16.5" cy="7.5" r=".5" fill="currentColor"/>'
))

ICON_LOCK = _LUCIDE.format(s=20, paths=(
    '<rect width="18" height="11" x="3" y="11" rx="2" ry="2"/>'
    '<path d="M7 11V7a5 5 0 0 1 10 0v4"/>'
))

LABEL_COLORS = {
    "Weak": "#d32f2f",
    "Moderate": "#fbc02d",
    "Strong": "#388e3c",
    "Very Strong": "#1b5e20",
}

# ── Page config ───────────────────────────────────────────────────────────

st.set_page_config(
    page_title="PassForge",
    page_icon="\U0001f511",
    layout="centered",
)

# Always show copy-to-clipboard button on code blocks
st.markdown("""<style>
[data-testid="stCode"] button,
[data-testid="stCodeBlock"] button,
.stCode button,
.stCodeBlock button,
pre ~ button {
    opacity: 1 !important;
    visibility: visible !important;
    transition: none !important;
}
</style>""", unsafe_allow_html=True)

# ── Session ───────────────────────────────────────────────────────────────

if "session" not in st.session_state:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)
    st.session_state.session = GeneratorSession()
    st.session_state.session.regenerate()

session: GeneratorSession = st.session_state.session


def _on_length():
    session.set_length(st.session_state.length)


def _on_class(name: str):
    session.set_class(name, st.session_state[f"class_{name}"])


# ── Header ────────────────────────────────────────────────────────────────

st.markdown(
    f'<h1 style="display:flex;align-items:center;gap:10px">'
    f'{ICON_KEY_ROUND} PassForge</h1>',
    unsafe_allow_html=True,
)
st.caption("Generate strong, secure passwords tailored to your needs.")

# ── Password ──────────────────────────────────────────────────────────────

col_pwd, col_regen = st.columns([5, 1])
with col_pwd:
    if session.password:
        st.code(session.password, language=None)
    else:
        st.code("Your Secure Password", language=None)
with col_regen:
    st.button(
        "↻",
        help="Regenerate password",
        on_click=session.regenerate,
        use_container_width=True,
    )

st.divider()

# ── Options ───────────────────────────────────────────────────────────────

st.slider(
    "Password Length",
    MIN_LENGTH, MAX_LENGTH, session.config.length,
    key="length",
    on_change=_on_length,
)

options = [
    ("uppercase", "Uppercase (A-Z)", session.config.include_uppercase),
    ("lowercase", "Lowercase (a-z)", session.config.include_lowercase),
    ("numbers", "Numbers (0-9)", session.config.include_numbers),
    ("symbols", "Symbols (!@#)", session.config.include_symbols),
]
for col, (name, label, value) in zip(st.columns(4), options):
    with col:
        st.checkbox(
            label,
            value=value,
            key=f"class_{name}",
            on_change=_on_class,
            args=(name,),
        )

st.divider()

# ── Strength analysis ─────────────────────────────────────────────────────

if st.button(
    "Check Password Strength",
    type="primary",
    disabled=not session.can_analyze,
    use_container_width=True,
):
    with st.spinner("Analyzing password strength…"):
        asyncio.run(session.analyze())

result = session.result
if result is not None:
    color = LABEL_COLORS[result.label]
    st.markdown(
        f'<p style="display:flex;align-items:center;gap:6px">{ICON_LOCK} '
        f"Password Strength: <span style='color:{color}'>{result.label}</span>"
        f" &nbsp;·&nbsp; {result.percent}%</p>",
        unsafe_allow_html=True,
    )
    st.progress(result.percent / 100)
    if result.analysis:
        st.markdown("**Strength Analysis:**")
        st.caption(result.analysis)

# ── Notifications ─────────────────────────────────────────────────────────

for note in session.drain_notifications():
    st.toast(
        f"**{note.title}** {note.description}",
        icon="⚠️" if note.destructive else "✅",
    )
