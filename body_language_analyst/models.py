"""Plain data records shared by the core and the UI adapters."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class Tag:
    """A named point on an image, in displayed-image pixels."""

    x: int
    y: int
    name: str

    def __post_init__(self):
        name = (self.name or "").strip()
        if not name:
            raise ValueError("tag name must not be empty")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "x", int(self.x))
        object.__setattr__(self, "y", int(self.y))


@dataclass(frozen=True)
class TaggedImage:
    id: str
    filename: str
    mime_type: str
    data: bytes = field(repr=False)
    encoded: str = field(repr=False)
    width: Optional[int] = None
    height: Optional[int] = None
    tags: Tuple[Tag, ...] = ()

    def with_tag(self, tag: Tag) -> "TaggedImage":
        return replace(self, tags=self.tags + (tag,))


@dataclass(frozen=True)
class ImagePart:
    mime_type: str
    data: str = field(repr=False)


@dataclass(frozen=True)
class PromptRequest:
    text: str
    parts: Tuple[ImagePart, ...]


@dataclass(frozen=True)
class AnalysisSuccess:
    text: str
    usage: Optional[dict] = None
    ok = True


@dataclass(frozen=True)
class AnalysisFailure:
    reason: str
    kind: str = "service"  # validation | config | service
    ok = False


AnalysisResult = Union[AnalysisSuccess, AnalysisFailure]
