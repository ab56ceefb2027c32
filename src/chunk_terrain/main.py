"""Command-line height sampler.

Reads one whitespace-separated ``x y`` pair per line from standard input
and prints ``x,y -> height`` for each. A line without exactly two numbers
stops the loop with a diagnostic on standard error.
"""

import logging
import math
import sys
from typing import TextIO

from chunk_terrain.config import Settings, settings
from chunk_terrain.terrain import TerrainManager

logger = logging.getLogger(__name__)


class CoordinateParseError(ValueError):
    """A line did not hold exactly two numeric coordinates."""

    def __init__(self, line: str, reason: str) -> None:
        super().__init__(f"Aborting: {reason}")
        self.line = line


def setup_logging(level_name: str) -> None:
    """Configure logging for the sampler."""
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def parse_coordinates(line: str) -> tuple[float, float]:
    """Parse an ``x y`` pair. Raises :class:`CoordinateParseError` otherwise."""
    tokens = line.split()
    if len(tokens) != 2:
        raise CoordinateParseError(line, f"expected 2 values, got {len(tokens)}")
    try:
        x, y = float(tokens[0]), float(tokens[1])
    except ValueError:
        raise CoordinateParseError(line, f"non-numeric value in {line.strip()!r}") from None
    if not (math.isfinite(x) and math.isfinite(y)):
        raise CoordinateParseError(line, f"non-finite value in {line.strip()!r}")
    return x, y


def run(stdin: TextIO, stdout: TextIO, terrain: TerrainManager) -> int:
    """Answer height queries until input ends. Returns the exit status."""
    for line in stdin:
        try:
            x, y = parse_coordinates(line)
        except CoordinateParseError as exc:
            logger.error("Bad input line %r", line.rstrip("\n"))
            print(exc, file=sys.stderr)
            return 1

        try:
            height = terrain.get_height(x, y)
        except ValueError as exc:
            logger.error("Cannot sample line %r", line.rstrip("\n"))
            print(f"Aborting: {exc}", file=sys.stderr)
            return 1

        print(f"{x:g},{y:g} -> {height:g}", file=stdout)

    return 0


def main(config: Settings | None = None) -> int:
    """Run the sampler against standard input and output."""
    if config is None:
        config = settings
    setup_logging(config.log_level)
    logger.info(
        "Terrain sampler starting (seed=%d, chunk_width=%d, resolution=%d, generator=%s)",
        config.world_seed, config.chunk_width, config.resolution, config.generator,
    )

    terrain = TerrainManager.from_settings(config)
    return run(sys.stdin, sys.stdout, terrain)


def cli() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
