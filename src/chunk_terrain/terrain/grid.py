"""Height grid holding the samples of a single chunk."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from chunk_terrain.terrain.cursor import FillCursor
from chunk_terrain.terrain.types import ChunkCoord

if TYPE_CHECKING:
    from chunk_terrain.terrain.generators import HeightGenerator


class HeightGrid:
    """Square block of ``width * width`` height samples for one chunk.

    Samples are stored row-major in a flat float64 array, so cell ``(x, y)``
    lives at ``y * width + x``. The chunk's world-space origin is
    ``chunk * width / resolution`` on each axis.

    Cell access is bounds-checked: an out-of-range coordinate or index raises
    :class:`IndexError` straight away instead of reading a neighbouring row
    or wrapping around from the end.
    """

    def __init__(
        self,
        chunk_x: int,
        chunk_y: int,
        seed: int,
        width: int,
        resolution: int = 1,
        base_height: float = 0.0,
    ) -> None:
        if width <= 0:
            raise ValueError(f"width must be positive, got {width}")
        if resolution <= 0:
            raise ValueError(f"resolution must be positive, got {resolution}")

        self.chunk_x = chunk_x
        self.chunk_y = chunk_y
        self.seed = seed
        self.width = width
        self.resolution = resolution
        self.offset_x = chunk_x * width / resolution
        self.offset_y = chunk_y * width / resolution
        self.heights: NDArray[np.float64] = np.full(
            width * width, base_height, dtype=np.float64
        )

    @property
    def coord(self) -> ChunkCoord:
        return ChunkCoord(self.chunk_x, self.chunk_y)

    @property
    def area(self) -> int:
        return self.width * self.width

    def __len__(self) -> int:
        return self.area

    def __repr__(self) -> str:
        return (
            f"HeightGrid(chunk=({self.chunk_x}, {self.chunk_y}), "
            f"width={self.width}, resolution={self.resolution}, seed={self.seed})"
        )

    # ── Cell access ──────────────────────────────────────────────

    def get(self, x: int, y: int) -> float:
        return float(self.heights[self._index(x, y)])

    def get_at(self, index: int) -> float:
        return float(self.heights[self._check_index(index)])

    def set(self, x: int, y: int, value: float) -> None:
        self.heights[self._index(x, y)] = value

    def set_at(self, index: int, value: float) -> None:
        self.heights[self._check_index(index)] = value

    def add(self, x: int, y: int, amount: float) -> None:
        self.heights[self._index(x, y)] += amount

    def add_at(self, index: int, amount: float) -> None:
        self.heights[self._check_index(index)] += amount

    def as_array(self) -> NDArray[np.float64]:
        """Return a read-only ``(width, width)`` view indexed ``[y, x]``."""
        view = self.heights.reshape(self.width, self.width).view()
        view.flags.writeable = False
        return view

    # ── Generation ───────────────────────────────────────────────

    def begin_fill(self) -> FillCursor:
        """Return a fresh cursor positioned before the first cell."""
        return FillCursor(self)

    def generate(self, generator: HeightGenerator) -> None:
        """Reseed *generator* with this chunk's seed and let it fill the grid."""
        generator.seed(self.seed)
        generator.generate(self, self.offset_x, self.offset_y)

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.width):
            raise IndexError(
                f"cell ({x}, {y}) outside chunk of width {self.width}"
            )
        return y * self.width + x

    def _check_index(self, index: int) -> int:
        if not 0 <= index < self.area:
            raise IndexError(f"cell index {index} outside [0, {self.area})")
        return index
