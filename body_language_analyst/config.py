from dataclasses import dataclass
from typing import Optional
import os
import sys

from dotenv import load_dotenv, find_dotenv


class ConfigError(RuntimeError):
    """Raised when a required setting is missing."""


@dataclass
class Settings:
    api_key: Optional[str]
    base_url: Optional[str]
    model: str
    timeout: int
    max_tokens: int
    provider: str = "openai"
    prompt_file: Optional[str] = None
    debug: bool = False


def _search_upwards(start: str) -> Optional[str]:
    p = os.path.abspath(start)
    while True:
        cand = os.path.join(p, ".env")
        if os.path.exists(cand):
            return cand
        parent = os.path.dirname(p)
        if parent == p:
            return None
        p = parent


def _locate_env_file() -> str:
    # find_dotenv() first, then the working directory and the package directory
    _env = find_dotenv()
    if _env:
        return _env
    found = _search_upwards(os.getcwd()) or _search_upwards(os.path.dirname(__file__))
    return found or ".env"


def _int_env(name: str, default: int) -> int:
    v = os.environ.get(name)
    if not v:
        return default
    try:
        return int(v.split("#", 1)[0].strip())
    except ValueError:
        print(f"WARNING: invalid {name}={v!r}, using default {default}", file=sys.stderr)
        return default


def _bool_env(name: str) -> bool:
    return str(os.environ.get(name, "")).strip().lower() in ("1", "true", "yes", "on")


def load_config(require_api_key: bool = True) -> Settings:
    """Build :class:`Settings` from the environment and the nearest ``.env``.

    With ``require_api_key`` a missing ``OPENAI_API_KEY`` raises
    :class:`ConfigError`. The web UI passes ``False`` and lets the analysis
    service report the missing credential when the user asks for an analysis.
    """
    load_dotenv(_locate_env_file())
    api_key = (os.environ.get("OPENAI_API_KEY") or "").strip() or None
    if require_api_key and not api_key:
        raise ConfigError("OPENAI_API_KEY is not set")

    return Settings(
        api_key=api_key,
        base_url=os.environ.get("OPENAI_BASE_URL") or None,
        model=os.environ.get("OPENAI_MODEL") or "gpt-4.1-mini",
        timeout=_int_env("OPENAI_TIMEOUT", 120),
        max_tokens=_int_env("OPENAI_MAX_TOKENS", 2048),
        provider=(os.environ.get("ANALYST_PROVIDER") or "openai").strip().lower(),
        prompt_file=os.environ.get("PROMPT_FILE") or None,
        debug=_bool_env("DEBUG"),
    )


def read_prompt_file(path: Optional[str]) -> str:
    if not path:
        return ""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except Exception as e:
        print(f"ERROR: failed to read PROMPT_FILE {path}: {e}", file=sys.stderr)
        return ""
