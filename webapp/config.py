import os

# UI settings read from the environment; the model settings live in body_language_analyst.config
PAGE_TITLE = os.getenv("PAGE_TITLE", "Body Language Analyst AI")


def _int_from_env(name: str, default: int = 0) -> int:
    val = os.getenv(name, "")
    try:
        val = val.split("#", 1)[0].strip()
        return int(val) if val != "" else default
    except ValueError:
        return default


PREVIEW_WIDTH = _int_from_env("PREVIEW_WIDTH", 480)
UPLOAD_TYPES = [t.strip() for t in os.getenv("UPLOAD_TYPES", "png,jpg,jpeg,webp,gif,bmp").split(",") if t.strip()]
