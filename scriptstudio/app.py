from __future__ import annotations

import os
import sys
from datetime import datetime
from typing import List, Tuple

import streamlit as st
from dotenv import load_dotenv

# Ensure project root is on sys.path
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Load environment
load_dotenv()

from scriptstudio.config import load_config  # noqa: E402
from scriptstudio.gui.controller import FormController  # noqa: E402
from scriptstudio.gui.pipeline import Pipeline  # noqa: E402
from scriptstudio.gui.render import TAB_LABELS, render_view  # noqa: E402
from scriptstudio.gui.state import Phase, ResultTab  # noqa: E402
from scriptstudio.services import connectivity_probe, gemini_models_probe  # noqa: E402
from scriptstudio.services.ingest import is_inline_binary  # noqa: E402
from scriptstudio.services.storage import result_to_json_bytes  # noqa: E402
from scriptstudio.types import (  # noqa: E402
    MAX_DURATION_SECONDS,
    MIN_DURATION_SECONDS,
    GenerationRequest,
    SourceFile,
    VideoStyle,
)


ATTACHMENT_THUMB_WIDTH = 160


# --------------------------
# Page configuration & Styles
# --------------------------
st.set_page_config(
    page_title="Script Studio",
    layout="wide",
    page_icon="🎬",
    initial_sidebar_state="expanded",
)

st.markdown(
    """
<style>
  .main-header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; padding: 1.25rem 1rem; border-radius: 10px; margin-bottom: 1.25rem; text-align: center; }
  .main-header h1 { margin: 0; font-size: 2.25rem; font-weight: 700; }
  .status-indicator { padding: 0.35rem 0.75rem; border-radius: 16px; font-size: 0.85rem; font-weight: 600; display: inline-block; }
  .status-ok { background-color: #d4edda; color: #155724; border: 1px solid #c3e6cb; }
  .status-fail { background-color: #f8d7da; color: #721c24; border: 1px solid #f5c6cb; }
  .log-container { background: #2d3748; color: #e2e8f0; border-radius: 8px; padding: 0.75rem; font-family: 'Monaco','Menlo','Ubuntu Mono',monospace; font-size: 0.75rem; max-height: 320px; overflow-y: auto; }
  .hook { font-size: 1.2rem; font-style: italic; }
</style>
""",
    unsafe_allow_html=True,
)


# --------------------------
# Session State & Utilities
# --------------------------
def _log(message: str) -> None:
    ts = datetime.now().strftime("%H:%M:%S")
    entry = f"[{ts}] {message}"
    st.session_state.logs.append(entry)


def _init_session() -> None:
    if "initialized" not in st.session_state:
        st.session_state.initialized = True
        st.session_state.cfg = load_config()
        st.session_state.logs = []  # type: List[str]
        st.session_state.pipeline = Pipeline(st.session_state.cfg, on_log=_log)
        st.session_state.controller = FormController(st.session_state.pipeline, on_log=_log)
        st.session_state.attachment_previews = []  # type: List[Tuple[str, str]]


def _header() -> None:
    st.markdown(
        """
        <div class="main-header">
            <h1>🎬 Script Studio</h1>
            <p>Turn an idea into a scene-by-scene video script with ready-to-use generation prompts</p>
        </div>
        """,
        unsafe_allow_html=True,
    )


# --------------------------
# Sidebar: Connection & Actions
# --------------------------
def _sidebar() -> None:
    st.subheader("🔗 Connection")
    cfg = st.session_state.cfg
    if not cfg.gemini_api_key:
        st.error("GEMINI_API_KEY is missing. Add it to your environment or .env.")
    else:
        ok, msg = connectivity_probe(timeout_sec=cfg.probe_timeout_sec)
        klass = "status-ok" if ok else "status-fail"
        label = "✅ Connected" if ok else "❌ Disconnected"
        st.markdown(f'<div class="status-indicator {klass}">{label}</div>', unsafe_allow_html=True)
        if not ok:
            st.caption(f"Error: {msg}")
        st.caption(f"Model: {cfg.model}")
        if st.button("🔑 Check API key", use_container_width=True):
            key_ok, key_msg = gemini_models_probe(cfg.gemini_api_key, timeout_sec=cfg.probe_timeout_sec)
            _log(("✅ " if key_ok else "❌ ") + f"API key check: {key_msg}")
            (st.success if key_ok else st.error)(key_msg)

    st.divider()

    col_reset, col_clear = st.columns(2)
    with col_reset:
        if st.button("♻️ Reset App", use_container_width=True, help="Clear session state and restart the app."):
            _reset_app()
    with col_clear:
        if st.button("🧹 Clear Result", use_container_width=True, help="Remove the generated script."):
            _clear_result()


# --------------------------
# Main Content
# --------------------------
def _form() -> None:
    controller: FormController = st.session_state.controller
    with st.form("script_form"):
        idea = st.text_area("💡 Your idea *", height=140, placeholder="e.g. A 60s ad for a morning coffee brand")
        col_s, col_c = st.columns(2)
        with col_s:
            user_setting = st.text_area("🏞️ Setting (optional)", height=100)
        with col_c:
            user_characters = st.text_area("👥 Characters (optional)", height=100)
        documents = st.text_area("📄 Reference text (optional)", height=120)
        uploads = st.file_uploader(
            "📎 Reference files (.docx, PDF, images)",
            accept_multiple_files=True,
            help="Word documents are read as text; PDFs and images are sent to the model as-is.",
        )
        col_style, col_dur = st.columns(2)
        with col_style:
            video_style = st.selectbox("🎨 Video style", options=list(VideoStyle), format_func=lambda s: s.value)
        with col_dur:
            duration = st.number_input(
                "⏱️ Duration (seconds)",
                min_value=MIN_DURATION_SECONDS,
                max_value=MAX_DURATION_SECONDS,
                value=60,
                step=5,
            )
        submitted = st.form_submit_button(
            "✨ Generate Script",
            type="primary",
            disabled=not controller.state.can_submit,
            use_container_width=True,
        )

    if submitted:
        files = [SourceFile(name=u.name, mime_type=u.type or "", data=u.getvalue()) for u in (uploads or [])]
        request = GenerationRequest(
            idea=idea,
            reference_text=documents,
            user_setting=user_setting,
            user_characters=user_characters,
            video_style=video_style,
            target_duration_seconds=int(duration),
            files=files,
        )
        _submit(request)

    if controller.state.error:
        st.error(controller.state.error)


def _results() -> None:
    controller: FormController = st.session_state.controller
    result = controller.state.result
    if result is None:
        st.info("No script yet. Describe your idea and press Generate.")
        return

    tabs = list(ResultTab)
    chosen = st.radio(
        "View",
        options=tabs,
        index=tabs.index(controller.state.active_tab),
        format_func=lambda t: TAB_LABELS[t],
        horizontal=True,
        label_visibility="collapsed",
    )
    if chosen != controller.state.active_tab:
        controller.select_tab(chosen)

    if chosen is ResultTab.SCRIPT:
        st.markdown(f'<div class="hook">“{result.hook}”</div>', unsafe_allow_html=True)
    if chosen is ResultTab.SCENES and result.overlong_scenes():
        numbers = ", ".join(str(s.scene_number) for s in result.overlong_scenes())
        st.warning(f"Scene(s) {numbers} run longer than 8 seconds.")

    for block in render_view(result, chosen):
        st.markdown(f"**{block.title}**")
        if block.copyable:
            # st.code ships its own copy-to-clipboard button
            st.code(block.body, language=block.language, wrap_lines=True)
        else:
            st.write(block.body)

    st.download_button(
        label="💾 Download JSON",
        data=result_to_json_bytes(result),
        file_name="script.json",
        mime="application/json",
        use_container_width=True,
    )


# --------------------------
# Right Panel: Attachments & Logs
# --------------------------
def _right_panel() -> None:
    st.subheader("📎 Attachments")
    previews: List[Tuple[str, str]] = st.session_state.get("attachment_previews", [])
    if previews:
        for name, url in previews:
            if url:
                st.image(url, caption=name, width=ATTACHMENT_THUMB_WIDTH)
            else:
                st.caption(f"📄 {name}")
    else:
        st.caption("No attachments sent")

    st.subheader("📋 Activity Log")
    logs: List[str] = st.session_state.get("logs", [])
    if logs:
        st.markdown("<div class=\"log-container\">" + "<br>".join(logs[-40:]) + "</div>", unsafe_allow_html=True)
        if st.button("🗑️ Clear Logs", use_container_width=True):
            st.session_state.logs = []
    else:
        st.caption("No activity yet")


# --------------------------
# Actions
# --------------------------
def _build_previews(files: List[SourceFile]) -> List[Tuple[str, str]]:
    pipeline: Pipeline = st.session_state.pipeline
    previews: List[Tuple[str, str]] = []
    for f in files:
        url = ""
        if is_inline_binary(f) and f.mime_type.startswith("image/"):
            try:
                url = pipeline.build_attachment_preview(f.data)
            except Exception as e:  # noqa: BLE001
                _log(f"⚠️  Preview unavailable for {f.name}: {e}")
        previews.append((f.name, url))
    return previews


def _submit(request: GenerationRequest) -> None:
    controller: FormController = st.session_state.controller
    st.session_state.attachment_previews = _build_previews(request.files)
    with st.spinner("Writing your script…"):
        state = controller.submit(request)
    if state.phase is Phase.SUCCESS:
        st.success(f"🎉 Script ready: {len(state.result.scenes)} scenes")


def _reset_app() -> None:
    for key in list(st.session_state.keys()):
        del st.session_state[key]
    _init_session()
    st.success("App reset.")


def _clear_result() -> None:
    st.session_state.controller.clear_result()
    st.session_state.attachment_previews = []
    st.success("Cleared generated script.")


# --------------------------
# Entry Point
# --------------------------
def main() -> None:
    _init_session()
    _header()

    col1, col2, col3 = st.columns([0.8, 2.8, 0.9])
    with col1:
        _sidebar()
    with col2:
        _form()
        st.divider()
        _results()
    with col3:
        _right_panel()


if __name__ == "__main__":
    main()
