"""Streamlit UI for ShopSafe - TikTok Shop compliance dashboard.

Run with:
    streamlit run src/shopsafe/ui/streamlit_app.py
"""

import asyncio
import html
import logging
import tempfile
from pathlib import Path
from typing import Any

import streamlit as st

from shopsafe.config import get_settings
from shopsafe.errors import ShopSafeError
from shopsafe.models.compliance import AnalysisResult
from shopsafe.services.compliance.service import ComplianceService
from shopsafe.services.encoder import guess_mime_type
from shopsafe.ui.actions import run_caption_test, run_full_analysis
from shopsafe.ui.policy import ANALYSIS_SCOPE, CONSERVATIVE_MODE_NOTE, POLICY_CARDS
from shopsafe.ui.presentation import (
    NO_FLAGS_SUBTITLE,
    NO_FLAGS_TITLE,
    caption_verdict,
    decision_style,
    flag_header,
    flag_title,
    format_score,
    risk_band_label,
    score_color,
    severity_badge,
    severity_color,
)
from shopsafe.ui.state import TAB_LABELS, TAB_TITLES, MediaSelection, SessionState, Tab

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="V2 Compliance - TikTok Shop Safety Engine",
    page_icon="🛡️",
    layout="wide",
)

st.markdown(
    """
<style>
.ss-banner {
    border-radius: 1.25rem;
    padding: 2rem 2.5rem;
    color: white;
    display: flex;
    justify-content: space-between;
    align-items: center;
}
.ss-banner .label {
    font-size: 0.75rem;
    font-weight: 700;
    letter-spacing: 0.2em;
    text-transform: uppercase;
    opacity: 0.8;
}
.ss-banner .decision { font-size: 2.5rem; font-weight: 900; }
.ss-banner .score { font-size: 2.5rem; font-weight: 900; text-align: right; }
.ss-bar { height: 8px; background: #0000000d; border-radius: 999px; overflow: hidden; }
.ss-bar > div { height: 100%; border-radius: 999px; }
.ss-flag {
    border: 1px solid #0000000d;
    border-radius: 0.75rem;
    padding: 0.75rem 1rem;
    margin-bottom: 0.75rem;
    background: #00000005;
}
.ss-flag .head {
    font-size: 0.65rem;
    font-weight: 900;
    letter-spacing: 0.1em;
    text-transform: uppercase;
    color: #00000066;
}
.ss-badge {
    float: right;
    font-size: 0.65rem;
    font-weight: 700;
    padding: 0.1rem 0.5rem;
    border-radius: 999px;
    color: white;
}
</style>
""",
    unsafe_allow_html=True,
)

# ---------------------------------------------------------------------------
# Session state initialisation
# ---------------------------------------------------------------------------
_DEFAULT_STATE: dict[str, Any] = {
    "ui_state": None,
    "media_key": None,
    "uploader_nonce": 0,
}

for key, default in _DEFAULT_STATE.items():
    if key not in st.session_state:
        st.session_state[key] = default

if st.session_state["ui_state"] is None:
    st.session_state["ui_state"] = SessionState()

state: SessionState = st.session_state["ui_state"]


@st.cache_resource(show_spinner=False)
def _get_service() -> ComplianceService:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    return ComplianceService()


def _get_temp_dir() -> Path:
    """Get or create a temporary working directory for this session."""
    if state.work_dir is None or not state.work_dir.exists():
        settings = get_settings()
        settings.ensure_directories()
        state.work_dir = Path(tempfile.mkdtemp(prefix="shopsafe_", dir=settings.temp_dir))
    return state.work_dir


def _save_uploaded_file(uploaded_file: Any, dest_dir: Path) -> Path:
    """Save a Streamlit UploadedFile to disk and return the path."""
    dest = dest_dir / uploaded_file.name
    dest.write_bytes(uploaded_file.getbuffer())
    return dest


def _sync_media(uploaded_file: Any) -> None:
    """Keep ``state.media`` in step with the uploader widget."""
    if uploaded_file is None:
        if state.media is not None:
            state.clear_media()
            st.session_state["media_key"] = None
        return

    media_key = (uploaded_file.name, uploaded_file.size)
    if st.session_state["media_key"] == media_key and state.media is not None:
        return

    path = _save_uploaded_file(uploaded_file, _get_temp_dir())
    state.select_media(
        MediaSelection(
            path=path,
            original_name=uploaded_file.name,
            mime_type=uploaded_file.type or guess_mime_type(path),
            owned=True,
        )
    )
    st.session_state["media_key"] = media_key


def _on_nav_change() -> None:
    state.switch_tab(Tab(st.session_state["nav"]))


def _reset_session() -> None:
    # Streamlit has no session-end hook; this is the only teardown path.
    state.close()
    st.session_state["ui_state"] = SessionState()
    st.session_state["media_key"] = None
    st.session_state["uploader_nonce"] += 1
    st.session_state["nav"] = Tab.DASHBOARD.value


def _bound_text_area(label: str, attr: str, key: str, **kwargs: Any) -> None:
    """Text area whose value lives on ``state.<attr>``.

    Several tabs edit the same field, so the widget value is re-seeded from
    ``state`` before rendering and copied back in ``on_change``.
    """
    if st.session_state.get(key) != getattr(state, attr):
        st.session_state[key] = getattr(state, attr)

    def _store() -> None:
        setattr(st.session_state["ui_state"], attr, st.session_state[key])

    st.text_area(label, key=key, on_change=_store, **kwargs)


# ---------------------------------------------------------------------------
# Sidebar: navigation
# ---------------------------------------------------------------------------
st.sidebar.title("🛡️ V2 COMPLIANCE")
st.sidebar.caption("TIKTOK SHOP SAFETY ENGINE")

st.sidebar.radio(
    "Navigation",
    options=[t.value for t in Tab],
    format_func=lambda v: TAB_LABELS[Tab(v)],
    key="nav",
    index=list(Tab).index(state.active_tab),
    on_change=_on_nav_change,
    label_visibility="collapsed",
)

st.sidebar.divider()
st.sidebar.success("**Account Status**  \nProtected by V2")
st.sidebar.button("Reset session", on_click=_reset_session, use_container_width=True)

# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------


def _render_score_card(label: str, score: float) -> None:
    with st.container(border=True):
        st.caption(label.upper())
        st.markdown(f"### {format_score(score)}")
        width = max(0.0, min(score, 100.0))
        st.markdown(
            f'<div class="ss-bar"><div style="width:{width}%;'
            f'background:{score_color(score)}"></div></div>',
            unsafe_allow_html=True,
        )


def _render_copyable(title: str, text: str) -> None:
    with st.container(border=True):
        st.caption(title.upper())
        st.markdown(f"> _“{text}”_")
        # st.code carries the copy-to-clipboard button
        st.code(text, language=None, wrap_lines=True)


def _render_dashboard_result(result: AnalysisResult) -> None:
    style = decision_style(result.decision)
    st.markdown(
        f"""
<div class="ss-banner" style="background:{style.color}">
  <div>
    <div class="label">Final Decision</div>
    <div class="decision">{style.icon} {html.escape(result.decision.value)}</div>
  </div>
  <div>
    <div class="label">Overall Risk</div>
    <div class="score">{html.escape(format_score(result.overall_risk_score))}</div>
    <div class="label">{html.escape(risk_band_label(result))}</div>
  </div>
</div>
""",
        unsafe_allow_html=True,
    )
    st.write("")

    col_video, col_caption, col_category = st.columns(3)
    with col_video:
        _render_score_card("Video Risk", result.video_risk_score)
    with col_caption:
        _render_score_card("Caption Risk", result.caption_risk_score)
    with col_category:
        with st.container(border=True):
            st.caption("CATEGORY")
            st.markdown(f"### {result.category_detected}")

    col_main, col_side = st.columns([2, 1])

    with col_main:
        with st.container(border=True):
            st.subheader("⚠️ Flagged Segments & Claims")
            if result.has_flags:
                st.caption(
                    f"{len(result.flagged_segments)} flagged, "
                    f"{result.high_severity_count} high severity"
                )
                for flag in result.flagged_segments:
                    color = severity_color(flag.severity)
                    st.markdown(
                        f"""
<div class="ss-flag" style="border-left:4px solid {color}">
  <span class="ss-badge" style="background:{color}">{severity_badge(flag.severity)}</span>
  <div class="head">{html.escape(flag_header(flag))}</div>
  <div><b>{html.escape(flag_title(flag))}</b></div>
  <div>{html.escape(flag.reason)}</div>
</div>
""",
                        unsafe_allow_html=True,
                    )
            else:
                st.success(f"**{NO_FLAGS_TITLE}**  \n{NO_FLAGS_SUBTITLE}")

        with st.container(border=True):
            st.subheader("Detailed Reasoning")
            st.markdown(result.reasoning)

    with col_side:
        with st.container(border=True):
            st.subheader("🛡️ Actionable Fixes")
            for i, fix in enumerate(result.required_fixes, start=1):
                st.markdown(f"**{i}.** {fix}")

        if result.safer_caption:
            _render_copyable("Safer Caption Rewrite", result.safer_caption)
        if result.safer_script:
            _render_copyable("Safer Script Rewrite", result.safer_script)

        if st.button("🔄 NEW ANALYSIS", use_container_width=True):
            state.new_analysis()
            st.rerun()


def _render_dashboard_form() -> None:
    col_form, col_scope = st.columns(2)

    with col_form:
        with st.container(border=True):
            st.markdown("**1. VIDEO CONTENT**")
            uploaded = st.file_uploader(
                "Drop video here or click to upload",
                type=["mp4", "mov"],
                key=f"video_uploader_{st.session_state['uploader_nonce']}",
            )
            _sync_media(uploaded)
            if state.media is not None:
                st.video(str(state.media.path))

        with st.container(border=True):
            st.markdown("**2. CAPTION & SCRIPT**")
            _bound_text_area(
                "Caption / Description",
                "caption",
                key="dashboard_caption",
                placeholder="Paste your TikTok caption here...",
                height=100,
            )
            _bound_text_area(
                "Video Script (Optional)",
                "script",
                key="dashboard_script",
                placeholder="Paste the spoken script here for deeper analysis...",
                height=140,
            )

        if st.button(
            "🛡️ RUN V2 SAFETY CHECK",
            type="primary",
            disabled=not state.can_run_analysis,
            use_container_width=True,
        ):
            with st.spinner("ANALYZING COMPLIANCE..."):
                stored = asyncio.run(run_full_analysis(state, _get_service()))
            if stored:
                st.rerun()

        if state.dashboard.error:
            st.error(state.dashboard.error)

    with col_scope:
        with st.container(border=True):
            st.markdown("**V2 ANALYSIS SCOPE**")
            for item in ANALYSIS_SCOPE:
                st.markdown(f"✅ {item}")
        st.warning(f"**Conservative Mode Active**  \n{CONSERVATIVE_MODE_NOTE}")


def _render_caption_tester() -> None:
    with st.container(border=True):
        st.subheader("Test Caption Safety")
        st.caption(
            "Quickly verify if your product description or caption follows TikTok Shop policies."
        )
        _bound_text_area(
            "Caption",
            "caption",
            key="tester_caption",
            placeholder="Paste your caption here...",
            height=200,
            label_visibility="collapsed",
        )
        if st.button(
            "🔍 CHECK CAPTION COMPLIANCE",
            type="primary",
            disabled=not state.can_run_caption_test,
            use_container_width=True,
        ):
            with st.spinner("TESTING CAPTION..."):
                asyncio.run(run_caption_test(state, _get_service()))

        if state.caption_tester.error:
            st.error(state.caption_tester.error)

    result = state.caption_tester.result
    if result is None:
        return

    verdict = caption_verdict(result)
    alert = getattr(st, verdict.style.tone)
    alert(
        f"{verdict.style.icon} **COMPLIANCE STATUS: {verdict.decision.value}**"
        f"  \nRisk Score: **{verdict.score_label}**"
    )
    if verdict.safer_caption:
        _render_copyable("Safe Rewrite Recommendation", verdict.safer_caption)


def _render_history() -> None:
    st.markdown("### No Analysis History")
    st.caption("Your recent compliance checks will appear here.")


def _render_policy() -> None:
    st.subheader("TikTok Shop Policy Reference")
    columns = st.columns(2)
    for i, card in enumerate(POLICY_CARDS):
        with columns[i % 2]:
            with st.container(border=True):
                st.markdown(f"**{card.title}**")
                st.write(card.description)
                st.caption("RESTRICTED EXAMPLES:")
                for example in card.examples:
                    st.markdown(f"- {example}")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
st.header(TAB_TITLES[state.active_tab])

try:
    if state.active_tab is Tab.DASHBOARD:
        if state.dashboard.result is None:
            _render_dashboard_form()
        else:
            _render_dashboard_result(state.dashboard.result)
    elif state.active_tab is Tab.CAPTION_TESTER:
        _render_caption_tester()
    elif state.active_tab is Tab.HISTORY:
        _render_history()
    else:
        _render_policy()
except ShopSafeError as e:
    logger.exception("UI error")
    st.error(f"Error: {e}")

# ---------------------------------------------------------------------------
# Footer
# ---------------------------------------------------------------------------
st.divider()
st.caption("V2 Compliance | Decisions are generated by an external model and should be reviewed.")
