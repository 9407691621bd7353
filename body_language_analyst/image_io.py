from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence, Tuple
import base64
import io
import mimetypes
import os
import sys
import uuid

from PIL import Image, UnidentifiedImageError

from .models import TaggedImage


class ImageReadError(ValueError):
    """A single upload could not be read or encoded."""


@dataclass(frozen=True)
class IngestResult:
    images: Tuple[TaggedImage, ...]
    failed: Tuple[str, ...] = ()

    @property
    def error_message(self) -> Optional[str]:
        if not self.failed:
            return None
        if len(self.failed) == 1:
            return f"Could not process one of the uploaded images: {self.failed[0]}"
        return f"Could not process {len(self.failed)} of the uploaded images: " + ", ".join(self.failed)


def new_image_id() -> str:
    return uuid.uuid4().hex


def _probe(data: bytes) -> Tuple[Optional[str], Optional[int], Optional[int]]:
    """Best-effort (mime, width, height) via Pillow; all ``None`` when unknown."""
    try:
        with Image.open(io.BytesIO(data)) as im:
            w, h = im.size
            return Image.MIME.get(im.format or ""), w, h
    except (UnidentifiedImageError, OSError, ValueError):
        return None, None, None


def encode_image_bytes(filename: str, data: bytes, mime_type: Optional[str] = None) -> TaggedImage:
    if not data:
        raise ImageReadError(f"{filename}: file is empty")
    sniffed, w, h = _probe(data)
    mime = mime_type or sniffed or mimetypes.guess_type(filename)[0] or ""
    if not mime.startswith("image/"):
        raise ImageReadError(f"{filename}: not an image ({mime or 'unknown type'})")
    return TaggedImage(
        id=new_image_id(),
        filename=filename,
        mime_type=mime,
        data=bytes(data),
        encoded=base64.b64encode(data).decode("ascii"),
        width=w,
        height=h,
    )


def load_image_file(path: str) -> TaggedImage:
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise ImageReadError(f"{path}: {e}") from e
    return encode_image_bytes(os.path.basename(path), data)


def _read_upload(item: Any) -> Tuple[str, bytes, Optional[str]]:
    # Streamlit UploadedFile: .name / .type / .getvalue()
    if hasattr(item, "getvalue"):
        return getattr(item, "name", "upload"), item.getvalue(), getattr(item, "type", None) or None
    if isinstance(item, (tuple, list)) and len(item) in (2, 3):
        name, data = item[0], item[1]
        mime = item[2] if len(item) == 3 else None
        return name, data, mime
    raise ImageReadError(f"unsupported upload object: {type(item).__name__}")


def ingest_uploads(files: Iterable[Any], existing: Sequence[TaggedImage] = (), debug: bool = False) -> IngestResult:
    """Encode every readable upload and append it after ``existing``.

    A failing file is skipped; the rest of the batch is still processed and the
    names of skipped files are collected for one aggregate message.
    """
    added = []
    failed = []
    for idx, item in enumerate(files or (), start=1):
        name = getattr(item, "name", None) or f"image_{idx}"
        try:
            name, data, mime = _read_upload(item)
            added.append(encode_image_bytes(name, data, mime))
        except (ValueError, OSError) as e:
            print(f"ERROR: failed to process upload {name}: {e}", file=sys.stderr)
            failed.append(str(name))
            continue
        if debug:
            img = added[-1]
            print(f"[INGEST_DEBUG] {img.filename}: {img.mime_type} {img.width}x{img.height} ({len(img.data)} bytes)", file=sys.stderr)
    return IngestResult(images=tuple(existing) + tuple(added), failed=tuple(failed))
