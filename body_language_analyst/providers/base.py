from typing import Protocol, Any, Optional, Sequence, Tuple

from ..models import ImagePart


class ModelProvider(Protocol):
    """Protocol describing a model provider implementation.

    ``call_analysis`` returns ``(text, usage)`` and raises on any failure;
    turning failures into user-facing messages is the service's job.
    """

    def call_analysis(self, cfg: Any, prompt_text: str, parts: Sequence[ImagePart], system_prompt: Optional[str] = None) -> Tuple[str, Optional[dict]]:
        ...


def data_url(part: ImagePart) -> str:
    return f"data:{part.mime_type};base64,{part.data}"


def build_messages(prompt_text: str, parts: Sequence[ImagePart], system_prompt: Optional[str] = None) -> list:
    """Chat Completions messages: prompt text first, then images in order."""
    content = [{"type": "text", "text": prompt_text}]
    for part in parts:
        content.append({"type": "image_url", "image_url": {"url": data_url(part)}})
    messages = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    messages.append({"role": "user", "content": content})
    return messages


def normalize_usage(usage: Any) -> Optional[dict]:
    """Normalize an SDK usage object into a plain dict, or ``None``."""
    if usage is None:
        return None
    if isinstance(usage, dict):
        return dict(usage)
    if hasattr(usage, "model_dump"):
        return usage.model_dump()
    if hasattr(usage, "to_dict"):
        return usage.to_dict()
    return None
