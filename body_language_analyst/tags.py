from typing import Optional, Sequence, Tuple

from .models import Tag, TaggedImage


def find_image(images: Sequence[TaggedImage], image_id: str) -> Optional[TaggedImage]:
    for img in images:
        if img.id == image_id:
            return img
    return None


def add_tag(images: Sequence[TaggedImage], image_id: str, tag: Tag) -> Tuple[TaggedImage, ...]:
    # unknown id is a no-op
    if find_image(images, image_id) is None:
        return tuple(images)
    return tuple(img.with_tag(tag) if img.id == image_id else img for img in images)


def remove_image(images: Sequence[TaggedImage], image_id: str) -> Tuple[TaggedImage, ...]:
    return tuple(img for img in images if img.id != image_id)
