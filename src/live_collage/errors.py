"""Exception types raised by the collage packer, session, and exporter."""

from __future__ import annotations


class CollageError(Exception):
    """Base class for all Live Collage errors."""


class DecodeError(CollageError):
    """A file or camera frame could not be decoded as an image."""


class CameraUnavailable(CollageError):
    """The camera is missing or access to it was denied."""


class CapacityViolation(CollageError):
    """A container shape holds fewer cells than there are photos."""

    def __init__(self, count: int, capacity: int, detail: str = "") -> None:
        msg = f"{count} photos do not fit in {capacity} cells"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)
        self.count = count
        self.capacity = capacity


class ExportFailure(CollageError):
    """Rasterizing or saving the collage failed."""


class PlanValidationError(CollageError):
    """A computed placement plan breaks coverage or overlap rules."""

    def __init__(self, problems: list[str]) -> None:
        super().__init__("; ".join(problems))
        self.problems = problems
