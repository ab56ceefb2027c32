"""Type definitions for chunked terrain."""

from dataclasses import dataclass

# Index into a TerrainManager's chunk arena. Handles never move.
ChunkHandle = int

_INT32_SPAN = 1 << 32
_INT32_HALF = 1 << 31


def wrap_int32(value: int) -> int:
    """Fold *value* onto signed 32-bit two's-complement range."""
    return ((value + _INT32_HALF) % _INT32_SPAN) - _INT32_HALF


@dataclass(frozen=True)
class ChunkCoord:
    """Chunk coordinates in the world grid."""

    cx: int
    cy: int

    def __iter__(self):
        yield self.cx
        yield self.cy


@dataclass(frozen=True)
class TileSample:
    """One corner of a height query.

    Attributes:
        tile_x: Global sample column.
        tile_y: Global sample row.
        chunk: Chunk that owns the sample.
        local_x: Column within the owning chunk.
        local_y: Row within the owning chunk.
    """

    tile_x: int
    tile_y: int
    chunk: ChunkCoord
    local_x: int
    local_y: int
