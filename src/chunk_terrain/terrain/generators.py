"""Height generators that fill chunks with procedural samples.

A generator is a seeded strategy. :meth:`HeightGrid.generate` reseeds it
with the chunk's seed and then calls :meth:`HeightGenerator.generate`,
which walks the grid with a :class:`FillCursor` and *adds* its value to
every cell, on top of whatever base elevation the grid was created with.

Every random draw comes from the generator's own numpy ``Generator``;
nothing touches a process-wide random source. Draws happen in cursor
order, so a fixed seed and parameter set reproduce a chunk bit for bit.

Built-in strategies are looked up by name through a small registry:
  sine:    two crossed sine waves plus uniform roughness
  simplex: fractal OpenSimplex noise plus uniform roughness
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, ClassVar

import numpy as np
from opensimplex import OpenSimplex

if TYPE_CHECKING:
    from chunk_terrain.terrain.grid import HeightGrid


class HeightGenerator(ABC):
    """Base class for all height generators."""

    DEFAULT_PARAMETERS: ClassVar[dict[str, float]] = {}

    def __init__(self) -> None:
        self.params: dict[str, float] = dict(self.DEFAULT_PARAMETERS)
        self._rng = np.random.Generator(np.random.MT19937(0))

    def seed(self, value: int) -> None:
        """Reinitialise the random stream from *value*.

        Signed seeds are folded onto their unsigned 32-bit pattern, so the
        stream depends on the seed's low 32 bits only.
        """
        self._rng = np.random.Generator(np.random.MT19937(value & 0xFFFFFFFF))

    def bind_world(self, world_seed: int) -> None:
        """Called once by the terrain that will use this generator.

        Strategies whose output should follow the world seed beyond the
        per-chunk seed override this.
        """

    def set_parameter(self, name: str, value: float) -> None:
        self.params[name] = float(value)

    def get_parameter(self, name: str) -> float:
        return self.params[name]

    def uniform(self, low: float, high: float) -> float:
        """Draw one value in ``[low, high)`` from the generator's stream."""
        return float(self._rng.uniform(low, high))

    @abstractmethod
    def generate(self, grid: HeightGrid, offset_x: float, offset_y: float) -> None:
        """Populate every cell of *grid*, whose origin is at the given offset."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.params!r})"


class SineTerrainGenerator(HeightGenerator):
    """Rolling hills from two crossed sine waves.

    ``xscale``/``yscale`` are wavelengths in world units: the waves repeat
    every ``xscale`` units along x and ``yscale`` units along y.
    ``roughness`` is a fraction of ``amplitude`` used as the half-width of
    uniform per-cell jitter; 0 disables jitter and consumes no draws.
    """

    DEFAULT_PARAMETERS: ClassVar[dict[str, float]] = {
        "amplitude": 18.0,
        "offset": 30.0,
        "xscale": 32.0,
        "yscale": 42.0,
        "roughness": 0.15,
    }

    def __init__(
        self,
        amplitude: float = 18.0,
        offset: float = 30.0,
        x_scale: float = 32.0,
        y_scale: float = 42.0,
        roughness: float = 0.15,
    ) -> None:
        super().__init__()
        self.set_parameter("amplitude", amplitude)
        self.set_parameter("offset", offset)
        self.set_parameter("xscale", x_scale)
        self.set_parameter("yscale", y_scale)
        self.set_parameter("roughness", roughness)

    def generate(self, grid: HeightGrid, offset_x: float, offset_y: float) -> None:
        amplitude = self.params["amplitude"]
        offset = self.params["offset"]
        roughness = self.params["roughness"]

        half_amplitude = amplitude / 2.0
        angular_x = 2.0 * math.pi / self.params["xscale"]
        angular_y = 2.0 * math.pi / self.params["yscale"]
        jitter_bound = roughness * amplitude

        cursor = grid.begin_fill()
        while cursor.advance():
            jitter = self.uniform(-jitter_bound, jitter_bound) if roughness else 0.0

            value = offset + jitter + half_amplitude * (
                math.sin((offset_x + cursor.px) * angular_x)
                + math.sin((offset_y + cursor.py) * angular_y)
            )
            cursor.add_value(value)


class SimplexTerrainGenerator(HeightGenerator):
    """Fractal OpenSimplex terrain.

    The noise field is sampled at world positions, so neighbouring chunks
    agree wherever their samples line up. Its permutation is seeded from
    ``noise_seed`` when one is given, otherwise from the world seed of the
    terrain the generator is bound to. The per-chunk seed only drives the
    roughness jitter.

    ``scale`` is the wavelength of the first octave in world units; each
    further octave multiplies frequency by ``lacunarity`` and amplitude by
    ``persistence``. The octave sum is normalised to [-1, 1] before being
    scaled by ``amplitude``.
    """

    DEFAULT_PARAMETERS: ClassVar[dict[str, float]] = {
        "amplitude": 18.0,
        "offset": 30.0,
        "scale": 64.0,
        "octaves": 4.0,
        "persistence": 0.5,
        "lacunarity": 2.0,
        "roughness": 0.0,
    }

    def __init__(self, noise_seed: int | None = None, **params: float) -> None:
        super().__init__()
        self._explicit_seed = noise_seed is not None
        self.noise_seed = 0 if noise_seed is None else noise_seed
        self._simplex = OpenSimplex(seed=self.noise_seed)
        for name, value in params.items():
            self.set_parameter(name, value)

    def bind_world(self, world_seed: int) -> None:
        if self._explicit_seed or world_seed == self.noise_seed:
            return
        self.noise_seed = world_seed
        self._simplex = OpenSimplex(seed=world_seed)

    def elevation(self, world_x: float, world_y: float) -> float:
        """Normalised fractal noise in [-1, 1] at a world position."""
        octaves = max(int(self.params["octaves"]), 1)
        persistence = self.params["persistence"]
        lacunarity = self.params["lacunarity"]

        frequency = 1.0 / self.params["scale"]
        weight = 1.0
        total = 0.0
        total_weight = 0.0
        for _ in range(octaves):
            total += weight * self._simplex.noise2(world_x * frequency, world_y * frequency)
            total_weight += weight
            weight *= persistence
            frequency *= lacunarity

        return total / total_weight

    def generate(self, grid: HeightGrid, offset_x: float, offset_y: float) -> None:
        amplitude = self.params["amplitude"]
        offset = self.params["offset"]
        roughness = self.params["roughness"]
        jitter_bound = roughness * amplitude

        for cell in grid.begin_fill():
            jitter = self.uniform(-jitter_bound, jitter_bound) if roughness else 0.0
            value = self.elevation(offset_x + cell.px, offset_y + cell.py)
            cell.add_value(offset + jitter + amplitude * value)


# ── Generator registry ───────────────────────────────────────────

GeneratorFactory = Callable[..., HeightGenerator]

_GENERATOR_REGISTRY: dict[str, GeneratorFactory] = {
    "sine": SineTerrainGenerator,
    "simplex": SimplexTerrainGenerator,
}


def register_generator(name: str, factory: GeneratorFactory) -> None:
    """Register (or replace) a generator factory under *name*."""
    _GENERATOR_REGISTRY[name] = factory


def get_generator(name: str) -> GeneratorFactory:
    """Return the factory registered under *name*."""
    try:
        return _GENERATOR_REGISTRY[name]
    except KeyError:
        known = ", ".join(sorted(_GENERATOR_REGISTRY))
        raise ValueError(f"Unknown generator: {name!r} (known: {known})") from None


def create_generator(name: str, params: dict[str, Any] | None = None) -> HeightGenerator:
    """Build the generator *name* and apply *params* on top of its defaults."""
    generator = get_generator(name)()
    for key, value in (params or {}).items():
        generator.set_parameter(key, value)
    return generator
