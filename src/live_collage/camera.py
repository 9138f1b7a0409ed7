"""Camera capture adapter feeding frames into a collage session."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from live_collage.errors import CameraUnavailable
from live_collage.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from live_collage.photos import Photo
    from live_collage.session import CollageSession

CAMERA_SOURCE_NAME = "camera"


class FrameSource(Protocol):
    """Anything that can hand over one encoded still frame."""

    def grab_frame(self) -> bytes:
        """Return one encoded frame (JPEG, PNG, ...)."""
        ...

    def close(self) -> None:
        """Release the device."""
        ...


def capture_photo(session: CollageSession, source: FrameSource) -> Photo:
    """
    Grab one frame from ``source`` and add it to ``session``.

    The source is closed afterwards whether or not capture succeeded,
    mirroring the capture dialog closing after each shot.

    Raises:
        CameraUnavailable: If the device is missing or access is denied.
        DecodeError: If the frame is not a readable image.

    """
    try:
        frame = source.grab_frame()
    except (PermissionError, OSError, RuntimeError) as exc:
        logger.error("Camera unavailable: %s", exc)
        msg = f"Camera unavailable: {exc!s}"
        raise CameraUnavailable(msg) from exc
    finally:
        source.close()

    if not frame:
        msg = "Camera returned an empty frame"
        raise CameraUnavailable(msg)
    return session.ingest_photo(frame, name=CAMERA_SOURCE_NAME)
