"""
One user's collage session: photos, viewport, and the current plan.

The session is the only owner of its photo collection. Every mutation
recomputes the placement plan from scratch, so the plan always matches
the collection index for index.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from live_collage.config import CollageConfig
from live_collage.errors import CapacityViolation, DecodeError
from live_collage.logging_utils import logger
from live_collage.packing import compute_placement_plan, viewport_class_for_width
from live_collage.photos import PhotoCollection, decode_image
from live_collage.render import export_collage

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable

    from live_collage.packing import PlacementPlan
    from live_collage.photos import ImageSource, Photo
    from live_collage.type_defs import ViewportClass


@dataclass(frozen=True, slots=True)
class DecodeTicket:
    """Handle for a decode started before its photo is appended."""

    number: int
    generation: int


@dataclass(slots=True)
class IngestReport:
    """Outcome of a batch ingestion."""

    photos: list[Photo] = field(default_factory=list)
    failures: list[tuple[str, str]] = field(default_factory=list)


def _source_label(source: ImageSource, index: int) -> str:
    if isinstance(source, (str, Path)):
        return Path(source).name
    name = getattr(source, "name", None)
    return str(name) if name else f"upload-{index}"


class CollageSession:
    """Accumulate photos and keep their placement plan current."""

    def __init__(self, config: CollageConfig | None = None) -> None:
        self.config = config or CollageConfig.model_validate({})
        self.photos = PhotoCollection()
        self._viewport: ViewportClass = self.config.layout.viewport
        self._tickets = itertools.count(1)
        self._pending: set[int] = set()
        # bumped by clear_all so older tickets are ignored
        self._generation = 0
        self._plan = self._compute_plan()

    @property
    def plan(self) -> PlacementPlan:
        """Placement plan for the photos currently in the session."""
        return self._plan

    def _compute_plan(self) -> PlacementPlan:
        return compute_placement_plan(
            len(self.photos),
            viewport=self._viewport,
            orientations=self.photos.orientations(),
            layout=self.config.layout,
        )

    def _refresh(self) -> None:
        self._plan = self._compute_plan()

    # Viewport

    def current_viewport_class(self) -> ViewportClass:
        """Return the viewport class the plan was sized for."""
        return self._viewport

    def set_viewport(self, viewport: ViewportClass) -> None:
        """Switch viewport class, recomputing the plan on change."""
        if viewport != self._viewport:
            self._viewport = viewport
            self._refresh()

    def set_viewport_width(self, width_px: int) -> ViewportClass:
        """Classify a new viewport width and apply it."""
        viewport = viewport_class_for_width(
            width_px, self.config.layout.responsive.breakpoints,
        )
        self.set_viewport(viewport)
        return viewport

    # Ingestion

    def begin_decode(self) -> DecodeTicket:
        """Register a decode that will finish later."""
        ticket = DecodeTicket(next(self._tickets), self._generation)
        self._pending.add(ticket.number)
        return ticket

    def cancel_decode(self, ticket: DecodeTicket) -> None:
        """Forget a pending decode; its result will be ignored."""
        self._pending.discard(ticket.number)

    def finish_decode(
        self,
        ticket: DecodeTicket,
        source: ImageSource,
        *,
        name: str | None = None,
    ) -> Photo | None:
        """
        Decode ``source`` and append it if ``ticket`` is still live.

        Returns None without decoding when the ticket was cancelled or
        the session was cleared after it was issued.

        Raises:
            DecodeError: If the source is not a readable image.
            CapacityViolation: If the strategy cannot hold another
                photo; the photo is not kept.

        """
        live = (
            ticket.number in self._pending
            and ticket.generation == self._generation
        )
        self._pending.discard(ticket.number)
        if not live:
            logger.debug("Ignoring result of cancelled decode %d",
                         ticket.number)
            return None
        image = decode_image(source)
        photo = self.photos.append(image, source_name=name)
        try:
            self._refresh()
        except CapacityViolation:
            # keep collection and plan aligned
            self.photos.remove(photo.id)
            raise
        logger.info("Added photo %d (%dx%d, %s) captured %s", photo.id,
                    photo.width, photo.height, photo.orientation,
                    photo.captured_at.isoformat(timespec="seconds"))
        return photo

    def ingest_photo(
        self,
        source: ImageSource,
        *,
        name: str | None = None,
    ) -> Photo:
        """
        Decode ``source`` and append it to the collection.

        Raises:
            DecodeError: If the source is not a readable image.

        """
        photo = self.finish_decode(self.begin_decode(), source, name=name)
        if photo is None:  # pragma: no cover
            msg = "Decode was cancelled"
            raise DecodeError(msg)
        return photo

    def ingest_batch(self, sources: Iterable[ImageSource]) -> IngestReport:
        """
        Ingest several sources, skipping those that fail to decode.

        One unreadable file never aborts the rest of the batch.
        """
        report = IngestReport()
        for index, source in enumerate(sources):
            label = _source_label(source, index)
            try:
                report.photos.append(self.ingest_photo(source, name=label))
            except DecodeError as exc:
                logger.warning("Skipping %s: %s", label, exc)
                report.failures.append((label, str(exc)))
        return report

    # Removal

    def remove_photo(self, photo_id: int) -> bool:
        """Remove a photo by id; no-op when absent."""
        removed = self.photos.remove(photo_id)
        if removed:
            self._refresh()
            logger.info("Removed photo %d", photo_id)
        return removed

    def clear_all(self) -> None:
        """Drop every photo and ignore any decode still in flight."""
        self.photos.clear()
        self._pending.clear()
        self._generation += 1
        self._refresh()
        logger.info("Cleared all photos")

    # Export

    def export(self, output_dir: Path | str | None = None) -> Path:
        """
        Save the current collage as a PNG.

        Session state is never modified, so a failed export can be
        retried.

        Raises:
            ExportFailure: If rendering or saving fails.
            ValueError: If the session has no photos.

        """
        if not len(self.photos):
            msg = "No photos to export"
            raise ValueError(msg)
        export_cfg = self.config.export
        return export_collage(
            [p.image for p in self.photos],
            self._plan,
            output_dir if output_dir is not None else export_cfg.output,
            render=self.config.render,
            app_name=export_cfg.app_name,
            scale=export_cfg.scale,
        )
