"""Photo decoding, the Photo record, and the ordered photo collection."""
from __future__ import annotations

import io
import itertools
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from PIL import Image, UnidentifiedImageError

from live_collage.constants import COLOR_MODE_RGB, COLOR_WHITE, SQUARE_EPSILON
from live_collage.errors import DecodeError

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterator

    from live_collage.type_defs import Orientation

ImageSource = bytes | str | Path | BinaryIO


def orientation_for(width: int, height: int) -> Orientation:
    """
    Classify pixel dimensions as landscape, portrait, or square.

    Ratios within ``SQUARE_EPSILON`` of 1.0 count as square.
    """
    if width <= 0 or height <= 0:
        msg = f"Image dimensions must be positive, got {width}x{height}"
        raise ValueError(msg)
    ratio = width / height
    if abs(ratio - 1.0) < SQUARE_EPSILON:
        return "square"
    return "landscape" if ratio > 1.0 else "portrait"


def _to_rgb(img: Image.Image) -> Image.Image:
    """Convert to RGB, compositing transparency onto white."""
    if img.mode == COLOR_MODE_RGB:
        return img
    if img.mode in ("RGBA", "LA", "P"):
        rgba = img.convert("RGBA")
        bg = Image.new("RGBA", img.size, (*COLOR_WHITE, 255))
        return Image.alpha_composite(bg, rgba).convert(COLOR_MODE_RGB)
    return img.convert(COLOR_MODE_RGB)


def decode_image(source: ImageSource) -> Image.Image:
    """
    Decode raw bytes, a file path, or a binary stream into an RGB image.

    The pixel data is fully loaded so the source can be closed.

    Raises:
        DecodeError: If the source is missing, not a readable image, or
            over the Pillow pixel limit.

    """
    stream = io.BytesIO(source) if isinstance(source, bytes) else source
    try:
        with Image.open(stream) as img:
            img.load()
            return _to_rgb(img).copy()
    except FileNotFoundError as e:
        msg = f"Image file not found: '{source}'"
        raise DecodeError(msg) from e
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        ValueError,
    ) as e:
        label = "<bytes>" if isinstance(source, bytes) else str(source)
        msg = f"Error decoding image '{label}': {e!s}"
        raise DecodeError(msg) from e


@dataclass(slots=True)
class Photo:
    """One decoded photo, owning its pixel data."""

    id: int
    image: Image.Image
    sequence_index: int
    source_name: str | None = None
    captured_at: datetime = field(default_factory=datetime.now)

    @property
    def width(self) -> int:
        """Natural width in pixels."""
        return self.image.width

    @property
    def height(self) -> int:
        """Natural height in pixels."""
        return self.image.height

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    @property
    def orientation(self) -> Orientation:
        """Landscape, portrait, or square."""
        return orientation_for(self.width, self.height)

    def release(self) -> None:
        """Free the decoded pixel data."""
        self.image.close()


class PhotoCollection:
    """
    Photos in ingestion order, unique by id.

    Mutated only by ``append``, ``remove`` and ``clear``; there is no
    reordering. Ids and sequence indices come from monotonic counters
    and are never reused, even after removal.
    """

    def __init__(self) -> None:
        self._photos: list[Photo] = []
        self._ids = itertools.count(1)
        self._sequence = itertools.count()

    def __len__(self) -> int:
        return len(self._photos)

    def __iter__(self) -> Iterator[Photo]:
        return iter(self._photos)

    def __getitem__(self, index: int) -> Photo:
        return self._photos[index]

    def __contains__(self, photo_id: object) -> bool:
        return any(p.id == photo_id for p in self._photos)

    def append(
        self,
        image: Image.Image,
        *,
        source_name: str | None = None,
    ) -> Photo:
        """Wrap ``image`` in a new Photo and add it at the end."""
        photo = Photo(
            id=next(self._ids),
            image=image,
            sequence_index=next(self._sequence),
            source_name=source_name,
        )
        self._photos.append(photo)
        return photo

    def get(self, photo_id: int) -> Photo | None:
        """Return the photo with ``photo_id``, or None."""
        return next((p for p in self._photos if p.id == photo_id), None)

    def remove(self, photo_id: int) -> bool:
        """
        Remove and release the photo with ``photo_id``.

        Returns False, leaving the collection untouched, when the id is
        absent.
        """
        photo = self.get(photo_id)
        if photo is None:
            return False
        self._photos.remove(photo)
        photo.release()
        return True

    def clear(self) -> None:
        """Release and drop every photo."""
        for photo in self._photos:
            photo.release()
        self._photos.clear()

    def ids(self) -> list[int]:
        """Return photo ids in order."""
        return [p.id for p in self._photos]

    def orientations(self) -> list[Orientation]:
        """Return each photo's orientation in order."""
        return [p.orientation for p in self._photos]
