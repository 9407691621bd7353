import io
import os
import sys

import pytest
from PIL import Image

# Ensure project root is importable during tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import body_language_analyst.config as cfg_mod

ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_MODEL",
    "OPENAI_TIMEOUT",
    "OPENAI_MAX_TOKENS",
    "ANALYST_PROVIDER",
    "PROMPT_FILE",
    "DEBUG",
)
REAL_LOCATE_ENV_FILE = cfg_mod._locate_env_file


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    # load_dotenv writes straight into os.environ, so snapshot and restore it
    saved = dict(os.environ)
    for name in ENV_VARS:
        os.environ.pop(name, None)
    # never pick up a developer's real .env
    monkeypatch.setattr(cfg_mod, "_locate_env_file", lambda: str(tmp_path / "missing.env"))
    yield
    os.environ.clear()
    os.environ.update(saved)


@pytest.fixture
def real_env_discovery(monkeypatch):
    monkeypatch.setattr(cfg_mod, "_locate_env_file", REAL_LOCATE_ENV_FILE)


@pytest.fixture
def make_image_bytes():
    def _make(w=200, h=150, fmt="PNG", color=(100, 150, 200)):
        img = Image.new("RGB", (w, h), color=color)
        b = io.BytesIO()
        img.save(b, format=fmt)
        return b.getvalue()

    return _make


@pytest.fixture
def settings():
    return cfg_mod.Settings(api_key="test-key", base_url=None, model="test-model", timeout=5, max_tokens=256)
