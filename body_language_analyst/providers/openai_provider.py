"""OpenAI SDK provider (Chat Completions with inline image parts)."""
from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple
import sys

from openai import OpenAI

from ..models import ImagePart
from .base import build_messages, normalize_usage


class OpenAIProvider:
    """Provider backed by the official OpenAI-compatible SDK.

    A client can be injected to ease testing; otherwise one is built from the
    settings on each call.
    """

    def __init__(self, client: Optional[Any] = None):
        self._client = client

    def _build_client(self, cfg: Any):
        if self._client is not None:
            return self._client
        kwargs = {"api_key": getattr(cfg, "api_key", None)}
        if getattr(cfg, "base_url", None):
            kwargs["base_url"] = cfg.base_url
        if getattr(cfg, "timeout", None):
            kwargs["timeout"] = cfg.timeout
        return OpenAI(**kwargs)

    def call_analysis(self, cfg: Any, prompt_text: str, parts: Sequence[ImagePart], system_prompt: Optional[str] = None) -> Tuple[str, Optional[dict]]:
        client = self._build_client(cfg)
        messages = build_messages(prompt_text, parts, system_prompt)
        if getattr(cfg, "debug", False):
            sizes = [len(p.data) for p in parts]
            print(f"[ANALYZE_DEBUG] model={getattr(cfg, 'model', None)} prompt_len={len(prompt_text)} image_b64_sizes={sizes}", file=sys.stderr)
        resp = client.chat.completions.create(
            model=getattr(cfg, "model", "gpt-4.1-mini"),
            messages=messages,
            max_tokens=getattr(cfg, "max_tokens", 2048),
        )
        choices = getattr(resp, "choices", None) or []
        if not choices:
            raise RuntimeError("OpenAIProvider: response has no choices")
        text = getattr(choices[0].message, "content", None) or ""
        return text, normalize_usage(getattr(resp, "usage", None))
