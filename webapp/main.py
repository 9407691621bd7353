import streamlit as st

from body_language_analyst.config import load_config

from . import config as ui
from .components import render_image_tagger
from .handlers import get_state, handle_analyze, handle_context, handle_upload

CONTEXT_PLACEHOLDER = "e.g., 'This is a photo from a family reunion.' or 'A team meeting discussing a new project.'"


def _upload_panel(session, debug: bool) -> None:
    st.subheader("1. Upload Photos")
    # a fresh uploader key after each batch, otherwise the same files come back on every rerun
    upload_key = session.setdefault("upload_key", 0)
    files = st.file_uploader(
        "Click to upload or drag & drop",
        type=ui.UPLOAD_TYPES,
        accept_multiple_files=True,
        key=f"uploader_{upload_key}",
    )
    if files:
        handle_upload(session, files, debug=debug)
        session["upload_key"] = upload_key + 1
        st.rerun()


def _controls_panel(session) -> None:
    state = get_state(session)
    st.subheader("2. Add Context (Optional)")
    text = st.text_area("Context", value=state.context, placeholder=CONTEXT_PLACEHOLDER, height=130, label_visibility="collapsed", key="context_input")
    handle_context(session, text)

    clicked = st.button(
        "✨ Analyze Body Language",
        type="primary",
        disabled=state.loading or not state.images,
        use_container_width=True,
    )
    if clicked:
        with st.spinner("Analyzing..."):
            handle_analyze(session)

    error = get_state(session).error
    if error:
        st.error(error)


def _images_panel(session) -> None:
    st.subheader("Uploaded Images")
    images = get_state(session).images
    if not images:
        st.info("Your photos will appear here. Click on them to tag people!")
        return
    # one image per row: the tagger already nests columns inside this panel
    for image in images:
        render_image_tagger(session, image, ui.PREVIEW_WIDTH)


def _results_panel(session) -> None:
    st.subheader("Analysis Results")
    # the analysis runs inside the button's st.spinner, so loading is never set while rendering
    state = get_state(session)
    if state.analysis:
        st.markdown(state.analysis)
    else:
        st.caption("Your expert analysis will be displayed here.")


def render() -> None:
    st.set_page_config(page_title=ui.PAGE_TITLE, page_icon="🧍", layout="wide")
    st.title(ui.PAGE_TITLE)
    st.caption("Uncover the unspoken stories in your photos.")

    session = st.session_state
    debug = load_config(require_api_key=False).debug

    left, right = st.columns(2)
    with left:
        _upload_panel(session, debug)
        _controls_panel(session)
    with right:
        _images_panel(session)
        _results_panel(session)
