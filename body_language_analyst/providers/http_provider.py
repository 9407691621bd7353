"""Plain HTTP provider for OpenAI-compatible gateways (``/chat/completions``)."""
from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple
import sys

import requests

from ..models import ImagePart
from .base import build_messages


class HttpProvider:
    def __init__(self, session: Optional[requests.Session] = None):
        self._session = session or requests.Session()

    def call_analysis(self, cfg: Any, prompt_text: str, parts: Sequence[ImagePart], system_prompt: Optional[str] = None) -> Tuple[str, Optional[dict]]:
        base_url = getattr(cfg, "base_url", None)
        if not base_url:
            raise RuntimeError("OPENAI_BASE_URL is not set; the http provider needs it")
        url = base_url.rstrip("/") + "/chat/completions"
        headers = {"Authorization": f"Bearer {cfg.api_key}"}
        payload = {
            "model": getattr(cfg, "model", "gpt-4.1-mini"),
            "messages": build_messages(prompt_text, parts, system_prompt),
            "max_tokens": getattr(cfg, "max_tokens", 2048),
        }
        if getattr(cfg, "debug", False):
            print(f"[ANALYZE_DEBUG] POST {url} images={len(parts)} prompt_len={len(prompt_text)}", file=sys.stderr)
        try:
            resp = self._session.post(url, headers=headers, json=payload, timeout=getattr(cfg, "timeout", 120))
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise RuntimeError(f"HttpProvider request failed: {e}") from e
        try:
            text = data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            raise RuntimeError("HttpProvider: unexpected response shape") from e
        return text, data.get("usage")
