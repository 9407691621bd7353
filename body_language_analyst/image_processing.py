from __future__ import annotations

from typing import Sequence
import io

from PIL import Image, ImageDraw, ImageFont, ImageOps

from .models import Tag

MARKER_RADIUS = 9
MARKER_FILL = (56, 189, 248)
MARKER_OUTLINE = (255, 255, 255)
LABEL_BG = (17, 24, 39)


def preview_image(data: bytes, width: int) -> Image.Image:
    """Decode ``data`` and scale it to ``width`` pixels wide.

    Tag coordinates are captured on this preview, so the same function must be
    used for display and for marker drawing.
    """
    with Image.open(io.BytesIO(data)) as im:
        im = ImageOps.exif_transpose(im)
        im = im.convert("RGB")
        w, h = im.size
        if w != width and w > 0:
            scale = float(width) / w
            im = im.resize((width, max(1, int(round(h * scale)))), Image.LANCZOS)
        else:
            im = im.copy()
    return im


def draw_tag_markers(im: Image.Image, tags: Sequence[Tag]) -> Image.Image:
    """Return a copy of ``im`` with numbered markers and labels at each tag."""
    out = im.copy()
    draw = ImageDraw.Draw(out)
    font = ImageFont.load_default()
    r = MARKER_RADIUS
    for index, tag in enumerate(tags, start=1):
        x, y = tag.x, tag.y
        draw.ellipse((x - r, y - r, x + r, y + r), fill=MARKER_FILL, outline=MARKER_OUTLINE, width=2)
        nw, nh = _text_size(draw, str(index), font)
        draw.text((x - nw // 2, y - nh // 2), str(index), fill=MARKER_OUTLINE, font=font)
        lw, lh = _text_size(draw, tag.name, font)
        lx, ly = x - lw // 2, y + r + 4
        draw.rectangle((lx - 3, ly - 2, lx + lw + 3, ly + lh + 2), fill=LABEL_BG)
        draw.text((lx, ly), tag.name, fill=MARKER_OUTLINE, font=font)
    return out


def _text_size(draw: ImageDraw.ImageDraw, text: str, font) -> tuple:
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    return right - left, bottom - top
