from typing import MutableMapping

import streamlit as st
from streamlit_image_coordinates import streamlit_image_coordinates

from body_language_analyst.image_processing import draw_tag_markers, preview_image
from body_language_analyst.models import TaggedImage

from .handlers import (
    handle_click,
    handle_remove,
    handle_tag_cancel,
    handle_tag_name,
    handle_tag_submit,
    tagging_session,
)


@st.cache_data(show_spinner=False, max_entries=64)
def _preview(data: bytes, width: int):
    return preview_image(data, width)


def render_image_tagger(session: MutableMapping, image: TaggedImage, width: int) -> None:
    """One uploaded image: clickable preview, pending tag form, tag list, remove button."""
    with st.container(border=True):
        try:
            preview = draw_tag_markers(_preview(image.data, width), image.tags)
        except OSError as e:
            st.error(f"Cannot display {image.filename}: {e}")
            preview = None

        if preview is not None:
            value = streamlit_image_coordinates(preview, key=f"tagger_{image.id}")
            if handle_click(session, image.id, value):
                st.rerun()

        pending = tagging_session(session, image.id).pending
        if pending is not None:
            with st.form(key=f"tag_form_{image.id}", clear_on_submit=True):
                st.caption(f"New tag at ({pending.x}, {pending.y})")
                name = st.text_input("Person's name", placeholder="Person's name", key=f"tag_name_{image.id}")
                c1, c2 = st.columns(2)
                submitted = c1.form_submit_button("Tag", type="primary", use_container_width=True)
                cancelled = c2.form_submit_button("Cancel", use_container_width=True)
            if cancelled:
                handle_tag_cancel(session, image.id)
                st.rerun()
            if submitted:
                handle_tag_name(session, image.id, name)
                if handle_tag_submit(session, image.id) is None:
                    st.warning("Enter a name to add the tag.")
                else:
                    st.rerun()
        else:
            st.caption("Click on the photo to tag a person.")

        for index, tag in enumerate(image.tags, start=1):
            st.markdown(f"**{index}.** {tag.name} at ({tag.x}, {tag.y})")

        left, right = st.columns([3, 1])
        left.caption(image.filename)
        if right.button("🗑", key=f"remove_{image.id}", help="Remove image"):
            handle_remove(session, image.id)
            st.rerun()
