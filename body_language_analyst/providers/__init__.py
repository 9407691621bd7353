"""Providers package for model providers (OpenAI SDK, plain HTTP)."""
from .base import ModelProvider, build_messages, normalize_usage
from .openai_provider import OpenAIProvider
from .http_provider import HttpProvider


def get_provider(cfg) -> ModelProvider:
    name = (getattr(cfg, "provider", None) or "openai").lower()
    if name == "openai":
        return OpenAIProvider()
    if name == "http":
        return HttpProvider()
    raise ValueError(f"unknown ANALYST_PROVIDER: {name!r} (expected 'openai' or 'http')")


__all__ = ["ModelProvider", "OpenAIProvider", "HttpProvider", "get_provider", "build_messages", "normalize_usage"]
