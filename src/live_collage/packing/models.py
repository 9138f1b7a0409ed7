"""Value types shared by the size selectors, placers, and validator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterator

    from live_collage.type_defs import PackerName, SizeClass, ViewportClass


@dataclass(frozen=True, slots=True)
class ContainerShape:
    """
    Grid dimensions a plan is computed against.

    ``layout_class`` is a styling tag only; placement math never reads it.
    """

    rows: int
    cols: int
    layout_class: str = "grid"
    viewport: ViewportClass | None = None

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1:
            msg = f"Grid must be at least 1x1, got {self.rows}x{self.cols}"
            raise ValueError(msg)

    @property
    def capacity(self) -> int:
        """Number of cells in the grid."""
        return self.rows * self.cols

    @classmethod
    def square(
        cls,
        size: int,
        layout_class: str = "grid",
        viewport: ViewportClass | None = None,
    ) -> ContainerShape:
        """Return a ``size`` x ``size`` shape."""
        return cls(size, size, layout_class, viewport)


@dataclass(frozen=True, slots=True)
class SpanPattern:
    """Named span shape the mosaic placer cycles through."""

    size_class: SizeClass
    row_span: int
    col_span: int

    @property
    def area(self) -> int:
        """Number of cells the pattern covers."""
        return self.row_span * self.col_span


@dataclass(frozen=True, slots=True)
class CellAssignment:
    """One photo's rectangle on the grid, 1-based and inclusive."""

    row: int
    col: int
    row_span: int = 1
    col_span: int = 1
    size_class: SizeClass = "small"

    @property
    def row_end(self) -> int:
        """Last row covered."""
        return self.row + self.row_span - 1

    @property
    def col_end(self) -> int:
        """Last column covered."""
        return self.col + self.col_span - 1

    @property
    def area(self) -> int:
        """Number of cells covered."""
        return self.row_span * self.col_span

    def cells(self) -> Iterator[tuple[int, int]]:
        """Yield every ``(row, col)`` covered, row-major."""
        for r in range(self.row, self.row_end + 1):
            for c in range(self.col, self.col_end + 1):
                yield r, c

    def grid_area(self) -> tuple[str, str]:
        """Return CSS grid ``(row, column)`` placement strings."""
        return (
            f"{self.row} / {self.row + self.row_span}",
            f"{self.col} / {self.col + self.col_span}",
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output, including the CSS grid placement."""
        grid_row, grid_column = self.grid_area()
        return {
            "row": self.row,
            "col": self.col,
            "row_span": self.row_span,
            "col_span": self.col_span,
            "size_class": self.size_class,
            "grid_row": grid_row,
            "grid_column": grid_column,
        }


@dataclass(frozen=True, slots=True)
class PlacementPlan:
    """
    Ordered assignments index-aligned with the photo collection.

    Holds no pixel data and is cheap to recompute from scratch.
    """

    shape: ContainerShape
    assignments: tuple[CellAssignment, ...] = field(default_factory=tuple)
    strategy: PackerName = "mosaic"

    def __len__(self) -> int:
        return len(self.assignments)

    def __iter__(self) -> Iterator[CellAssignment]:
        return iter(self.assignments)

    def __getitem__(self, index: int) -> CellAssignment:
        return self.assignments[index]

    @property
    def occupied_cells(self) -> int:
        """Total number of cells claimed by assignments."""
        return sum(a.area for a in self.assignments)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "strategy": self.strategy,
            "rows": self.shape.rows,
            "cols": self.shape.cols,
            "layout_class": self.shape.layout_class,
            "viewport": self.shape.viewport,
            "assignments": [a.to_dict() for a in self.assignments],
        }
