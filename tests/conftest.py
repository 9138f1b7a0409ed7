"""
Test configuration and shared fixtures for live_collage.

This module defines reusable pytest fixtures for sample images, encoded
image bytes, on-disk photo files, and configured sessions.

Note:
    This file is automatically loaded by pytest and should not be
    renamed.

"""
import io
from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image

from live_collage.config import CollageConfig
from live_collage.constants import COLOR_MODE_RGB
from live_collage.logging_utils import logger
from live_collage.session import CollageSession


@pytest.fixture
def sample_image() -> Image.Image:
    """Create a sample 100x100 red RGB PIL image."""
    return Image.new(COLOR_MODE_RGB, (100, 100), color="red")


@pytest.fixture
def make_image_bytes() -> Callable[..., bytes]:
    """Factory for encoded images of a given size and color."""

    def _build(
        size: tuple[int, int] = (64, 48),
        color: str = "green",
        fmt: str = "PNG",
    ) -> bytes:
        buffer = io.BytesIO()
        Image.new(COLOR_MODE_RGB, size, color=color).save(buffer, format=fmt)
        return buffer.getvalue()

    return _build


@pytest.fixture
def photo_files(tmp_path: Path) -> list[Path]:
    """Write a landscape, a portrait, and a square JPEG to disk."""
    files = [
        ("landscape.jpg", (80, 40), "red"),
        ("portrait.jpg", (40, 80), "blue"),
        ("square.jpg", (50, 50), "green"),
    ]
    paths: list[Path] = []
    for name, size, color in files:
        path = tmp_path / name
        Image.new(COLOR_MODE_RGB, size, color=color).save(path)
        paths.append(path)
    return paths


@pytest.fixture
def broken_file(tmp_path: Path) -> Path:
    """A file with an image suffix that is not an image."""
    path = tmp_path / "broken.jpg"
    path.write_bytes(b"definitely not a jpeg")
    return path


@pytest.fixture
def make_session(tmp_path: Path) -> Callable[..., CollageSession]:
    """Build sessions whose exports land under tmp_path."""

    def _build(**sections: dict[str, object]) -> CollageSession:
        data: dict[str, object] = {
            section: dict(values) for section, values in sections.items()
        }
        export = dict(data.get("export", {}))  # type: ignore[call-overload]
        export.setdefault("output", str(tmp_path / "exports"))
        data["export"] = export
        return CollageSession(CollageConfig.model_validate(data))

    return _build


@pytest.fixture(autouse=True)
def enable_logger_propagation(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable propagation for the collage logger to allow caplog to work."""
    monkeypatch.setattr(logger, "propagate", True)
