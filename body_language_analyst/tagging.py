"""Click-to-tag interaction for a single image.

A session is either idle or holds one pending tag (coordinates captured, name
still being typed). Submitting a non-blank name yields a :class:`Tag` and
returns the session to idle.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple
import math

from .models import Tag


class TaggingState(Enum):
    IDLE = "idle"
    PENDING = "pending"


@dataclass
class PendingTag:
    x: int
    y: int
    name: str = ""


def _round_half_up(v: float) -> int:
    return int(math.floor(float(v) + 0.5))


def to_image_coordinates(client_x: float, client_y: float, left: float = 0, top: float = 0) -> Tuple[int, int]:
    """Pointer position -> pixel offset from the image box's top-left corner."""
    return _round_half_up(client_x - left), _round_half_up(client_y - top)


class TaggingSession:
    def __init__(self, image_id: str):
        self.image_id = image_id
        self.pending: Optional[PendingTag] = None

    @property
    def state(self) -> TaggingState:
        return TaggingState.PENDING if self.pending is not None else TaggingState.IDLE

    def click(self, x: float, y: float) -> PendingTag:
        # A second click moves the pending tag and drops the typed name.
        px, py = to_image_coordinates(x, y)
        self.pending = PendingTag(px, py)
        return self.pending

    def type_name(self, text: str) -> None:
        if self.pending is not None:
            self.pending.name = text or ""

    def submit(self) -> Optional[Tag]:
        if self.pending is None:
            return None
        name = self.pending.name.strip()
        if not name:
            return None
        tag = Tag(x=self.pending.x, y=self.pending.y, name=name)
        self.pending = None
        return tag

    def cancel(self) -> None:
        self.pending = None
