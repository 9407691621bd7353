"""Streamlit front end for body_language_analyst.

`handlers` holds the session-level event handlers and imports no UI code, so
tests can drive it with a plain dict standing in for ``st.session_state``.
"""
