"""Infinite 2-D terrain built from seeded, cached height chunks."""

from chunk_terrain.terrain import (
    HeightGenerator,
    HeightGrid,
    SineTerrainGenerator,
    TerrainManager,
)

__version__ = "0.1.0"
__all__ = ["HeightGenerator", "HeightGrid", "SineTerrainGenerator", "TerrainManager"]
