"""Sequential fill cursor over a height grid."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from chunk_terrain.terrain.grid import HeightGrid


class FillCursor:
    """Forward-only walker over the cells of a :class:`HeightGrid`.

    The cursor starts *before* the first cell. Each :meth:`advance` moves
    to the next cell, so ``while cursor.advance():`` visits indices
    ``0 .. width*width - 1`` exactly once each.

    ``px``/``py`` are the current cell coordinates divided by the grid
    resolution, i.e. the chunk-local position in world units. Generators
    use these, not the raw cell indices.
    """

    def __init__(self, grid: HeightGrid) -> None:
        self._grid = grid
        self._width = grid.width
        self._area = grid.area
        self._resolution = grid.resolution
        self._started = False

        self.index = 0
        self.cx = 0
        self.cy = 0
        self.px = 0.0
        self.py = 0.0

    @property
    def grid(self) -> HeightGrid:
        return self._grid

    def advance(self) -> bool:
        """Move to the next cell. Returns False once every cell was visited."""
        if self._started:
            self.index += 1
        else:
            self._started = True

        if self.index >= self._area:
            self.index = self._area
            return False

        self._update_position()
        return True

    def __iter__(self) -> Iterator[FillCursor]:
        while self.advance():
            yield self

    def current_value(self) -> float:
        return self._grid.get_at(self.index)

    def set_value(self, value: float) -> None:
        self._grid.set_at(self.index, value)

    def add_value(self, amount: float) -> None:
        self._grid.add_at(self.index, amount)

    def seek(self, index: int) -> None:
        """Jump to *index*, clamped into the grid."""
        self.index = min(max(index, 0), self._area - 1)
        self._started = True
        self._update_position()

    def seek_xy(self, x: int, y: int) -> None:
        self.seek(y * self._width + x)

    def _update_position(self) -> None:
        self.cx = self.index % self._width
        self.cy = self.index // self._width
        self.px = self.cx / self._resolution
        self.py = self.cy / self._resolution
