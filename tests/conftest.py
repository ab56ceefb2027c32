"""Pytest configuration and fixtures for terrain tests."""

import pytest
from chunk_terrain.terrain import HeightGenerator, SineTerrainGenerator, TerrainManager


class WorldPlaneGenerator(HeightGenerator):
    """Writes ``a * x + b * y`` at each sample's world position."""

    DEFAULT_PARAMETERS = {"a": 2.0, "b": -3.0}

    def __init__(self) -> None:
        super().__init__()
        self.seeds: list[int] = []

    def seed(self, value: int) -> None:
        self.seeds.append(value)
        super().seed(value)

    def generate(self, grid, offset_x, offset_y):
        a = self.params["a"]
        b = self.params["b"]
        for cell in grid.begin_fill():
            cell.add_value(a * (offset_x + cell.px) + b * (offset_y + cell.py))


@pytest.fixture
def flat_generator():
    """Sine generator with no waves and no jitter: every sample is 30."""
    return SineTerrainGenerator(amplitude=0.0, offset=30.0, roughness=0.0)


@pytest.fixture
def smooth_generator():
    """Sine generator without roughness jitter."""
    return SineTerrainGenerator(roughness=0.0)


@pytest.fixture
def plane_generator():
    return WorldPlaneGenerator()


@pytest.fixture
def flat_terrain(flat_generator):
    """Small-chunk terrain over flat ground."""
    return TerrainManager(world_seed=11, chunk_width=4, generator=flat_generator, resolution=2)
