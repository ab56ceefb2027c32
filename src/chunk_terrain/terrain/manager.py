"""Chunk cache and continuous height sampling."""

from __future__ import annotations

import logging
import math
import time
from typing import TYPE_CHECKING, Iterator

from chunk_terrain.terrain.generators import HeightGenerator, create_generator
from chunk_terrain.terrain.grid import HeightGrid
from chunk_terrain.terrain.types import ChunkCoord, ChunkHandle, TileSample, wrap_int32

if TYPE_CHECKING:
    from chunk_terrain.config import Settings

logger = logging.getLogger(__name__)


class TerrainManager:
    """Lazily generates, caches and samples terrain chunks.

    Chunks live in an append-only arena; a chunk's handle is its position in
    that arena and stays valid for the lifetime of the manager. The cache maps
    :class:`ChunkCoord` to handle. Nothing is ever evicted.

    Not thread-safe: callers sharing a manager across threads must serialise
    :meth:`fetch` and :meth:`get_height` themselves.
    """

    def __init__(
        self,
        world_seed: int,
        chunk_width: int,
        generator: HeightGenerator,
        resolution: int = 1,
    ) -> None:
        if chunk_width <= 0:
            raise ValueError(f"chunk_width must be positive, got {chunk_width}")
        if resolution <= 0:
            raise ValueError(f"resolution must be positive, got {resolution}")

        self.world_seed = world_seed
        self.chunk_width = chunk_width
        self.resolution = resolution
        self.generator = generator
        generator.bind_world(world_seed)

        self._chunks: list[HeightGrid] = []
        self._cache: dict[ChunkCoord, ChunkHandle] = {}

    @classmethod
    def from_settings(
        cls, settings: Settings, generator: HeightGenerator | None = None
    ) -> TerrainManager:
        """Build a manager (and its generator, unless given) from *settings*."""
        if generator is None:
            generator = create_generator(settings.generator, settings.generator_params)
        return cls(
            world_seed=settings.world_seed,
            chunk_width=settings.chunk_width,
            generator=generator,
            resolution=settings.resolution,
        )

    # ── Chunk storage ────────────────────────────────────────────

    @property
    def chunk_count(self) -> int:
        return len(self._chunks)

    def __len__(self) -> int:
        return len(self._chunks)

    def __contains__(self, coord: object) -> bool:
        if isinstance(coord, tuple):
            coord = ChunkCoord(*coord)
        return coord in self._cache

    def chunks(self) -> Iterator[tuple[ChunkCoord, HeightGrid]]:
        """Yield ``(coord, grid)`` pairs in generation order."""
        for grid in self._chunks:
            yield grid.coord, grid

    def resolve(self, handle: ChunkHandle) -> HeightGrid:
        return self._chunks[handle]

    def handle_for(self, cx: int, cy: int) -> ChunkHandle | None:
        return self._cache.get(ChunkCoord(cx, cy))

    def make(
        self, cx: int, cy: int, seed: int, base_height: float = 0.0
    ) -> tuple[ChunkHandle, HeightGrid]:
        """Create chunk ``(cx, cy)``, store it and generate its samples."""
        t0 = time.perf_counter()

        grid = HeightGrid(
            cx, cy, seed, self.chunk_width, self.resolution, base_height
        )
        grid.generate(self.generator)
        self._chunks.append(grid)
        handle = len(self._chunks) - 1

        logger.debug(
            "[Terrain] Generated chunk (%d, %d) seed=%d handle=%d in %.2fms",
            cx, cy, seed, handle, (time.perf_counter() - t0) * 1000,
        )
        return handle, grid

    def ensure_generated(
        self, cx: int, cy: int, seed: int, base_height: float = 0.0
    ) -> HeightGrid:
        """Generate chunk ``(cx, cy)`` and register it in the cache."""
        handle, grid = self.make(cx, cy, seed, base_height)
        self._cache[ChunkCoord(cx, cy)] = handle
        return grid

    def chunk_seed_for(self, cx: int, cy: int) -> int:
        """Derive the generation seed of chunk ``(cx, cy)`` from the world seed.

        ``(world_seed << 4) ^ (0xAAAA ^ cx ^ 2 * cy)`` in signed 32-bit
        arithmetic, wrapping on overflow.
        """
        shifted = wrap_int32(self.world_seed << 4)
        doubled = wrap_int32(2 * cy)
        return wrap_int32(shifted ^ (0xAAAA ^ wrap_int32(cx) ^ doubled))

    def fetch(self, cx: int, cy: int) -> HeightGrid:
        """Return chunk ``(cx, cy)``, generating it on first request."""
        handle = self._cache.get(ChunkCoord(cx, cy))
        if handle is None:
            return self.ensure_generated(cx, cy, self.chunk_seed_for(cx, cy))
        return self._chunks[handle]

    # ── Sampling ─────────────────────────────────────────────────

    def locate(self, tile_x: int, tile_y: int) -> TileSample:
        """Find the chunk owning a global sample and its cell inside it."""
        chunk_x = tile_x // self.chunk_width
        chunk_y = tile_y // self.chunk_width
        return TileSample(
            tile_x=tile_x,
            tile_y=tile_y,
            chunk=ChunkCoord(chunk_x, chunk_y),
            local_x=tile_x - chunk_x * self.chunk_width,
            local_y=tile_y - chunk_y * self.chunk_width,
        )

    def sample(self, tile_x: int, tile_y: int) -> float:
        """Return the stored sample at a global grid position."""
        corner = self.locate(tile_x, tile_y)
        grid = self.fetch(corner.chunk.cx, corner.chunk.cy)
        return grid.get(corner.local_x, corner.local_y)

    @staticmethod
    def bilinear_weights(
        tile_x: float, tile_y: float
    ) -> tuple[float, float, float, float]:
        """Weights of the four samples surrounding ``(tile_x, tile_y)``.

        Order is ``(x1, y1)``, ``(x1, y2)``, ``(x2, y1)``, ``(x2, y2)``.
        """
        x1 = math.floor(tile_x)
        y1 = math.floor(tile_y)
        x2 = x1 + 1
        y2 = y1 + 1
        return (
            (x2 - tile_x) * (y2 - tile_y),
            (x2 - tile_x) * (tile_y - y1),
            (tile_x - x1) * (y2 - tile_y),
            (tile_x - x1) * (tile_y - y1),
        )

    def get_height(self, px: float, py: float) -> float:
        """Bilinearly interpolated height at world position ``(px, py)``.

        May generate up to four chunks when the surrounding samples fall
        in chunks that were never requested before.

        Raises :class:`ValueError` when the position, scaled to sample units,
        is not a finite number.
        """
        tile_x = px * self.resolution
        tile_y = py * self.resolution
        if not (math.isfinite(tile_x) and math.isfinite(tile_y)):
            raise ValueError(f"position ({px}, {py}) is outside the sampling range")

        tile_x1 = math.floor(tile_x)
        tile_y1 = math.floor(tile_y)
        tile_x2 = tile_x1 + 1
        tile_y2 = tile_y1 + 1

        val_a = self.sample(tile_x1, tile_y1)
        val_b = self.sample(tile_x1, tile_y2)
        val_c = self.sample(tile_x2, tile_y1)
        val_d = self.sample(tile_x2, tile_y2)

        wa, wb, wc, wd = self.bilinear_weights(tile_x, tile_y)

        logger.debug(
            "[Terrain] height at (%g, %g): values (%g, %g, %g, %g) weights (%g, %g, %g, %g)",
            px, py, val_a, val_b, val_c, val_d, wa, wb, wc, wd,
        )

        return val_a * wa + val_b * wb + val_c * wc + val_d * wd
