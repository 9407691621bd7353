"""Thin runner for the `webapp` package.

Start the UI with:
    streamlit run app.py
"""
from webapp.main import render

render()
