"""Chunked, lazily generated terrain with continuous height queries."""

from chunk_terrain.terrain.cursor import FillCursor
from chunk_terrain.terrain.generators import (
    HeightGenerator,
    SimplexTerrainGenerator,
    SineTerrainGenerator,
    create_generator,
    get_generator,
    register_generator,
)
from chunk_terrain.terrain.grid import HeightGrid
from chunk_terrain.terrain.manager import TerrainManager
from chunk_terrain.terrain.types import ChunkCoord, ChunkHandle, TileSample, wrap_int32

__all__ = [
    "ChunkCoord",
    "ChunkHandle",
    "FillCursor",
    "HeightGenerator",
    "HeightGrid",
    "SimplexTerrainGenerator",
    "SineTerrainGenerator",
    "TerrainManager",
    "TileSample",
    "create_generator",
    "get_generator",
    "register_generator",
    "wrap_int32",
]
