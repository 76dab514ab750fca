from __future__ import annotations

"""
generator.py

Map generation pipeline: regions, land, erosion, climate, rivers and biomes,
run once each in that order over a freshly built grid.

Every random decision draws from one ``random.Random`` created from the
resolved seed and passed explicitly to each phase, so the same seed and
config always reproduce the same map and the process-wide ``random`` state is
left alone.
"""

import logging
import random
import time
from dataclasses import dataclass
from typing import Optional

from .biomes import set_terrain_type
from .climate import create_climate
from .erosion import erode_land
from .grid import HexGrid
from .hex import HexCell
from .land import SearchPhase, create_land
from .priority_queue import BucketPriorityQueue
from .regions import create_regions
from .rivers import create_rivers
from .settings import MapGenerationConfig

logger = logging.getLogger("hexmapgen.generator")
logger.addHandler(logging.NullHandler())

SEED_MASK = 0x7FFFFFFF


@dataclass(frozen=True)
class GenerationReport:
    """Summary of one generation run, including any budget shortfalls."""

    seed: int
    land_budget: int
    land_cells: int
    land_shortfall: int
    erosion_steps: int
    river_budget: int
    rivers: int
    river_shortfall: int


@dataclass
class GeneratedMap:
    grid: HexGrid
    report: GenerationReport


def resolve_seed(config: MapGenerationConfig) -> int:
    """Return the configured seed, or a fresh one when no fixed seed is requested."""
    if config.use_fixed_seed:
        return config.seed & SEED_MASK
    seed = random.Random().randrange(0, SEED_MASK)
    seed ^= time.time_ns() & 0xFFFFFFFF
    seed ^= int(time.monotonic())
    return seed & SEED_MASK


class HexMapGenerator:
    """
    Reusable generator bound to one configuration.

    The flood-fill frontier and the search-phase counter survive between runs
    of the same generator; both are only ever compared within a run, so reuse
    does not affect the output.
    """

    def __init__(self, config: Optional[MapGenerationConfig] = None) -> None:
        self.config = config if config is not None else MapGenerationConfig()
        self.search_frontier: BucketPriorityQueue[HexCell] = BucketPriorityQueue()
        self.search_phase = SearchPhase()

    def generate(self, width: int, height: int) -> GeneratedMap:
        """
        Generate a ``width`` x ``height`` map.

        Raises:
            InvalidGridSizeError: If the dimensions are not positive multiples
                of the chunk size.
        """
        config = self.config
        seed = resolve_seed(config)
        rng = random.Random(seed)
        logger.info("Generating %dx%d map with seed %d", width, height, seed)

        grid = HexGrid(width, height)
        for cell in grid:
            grid.set_water_level(cell, config.water_level)
        # Phases are compared against cells of this grid only.
        self.search_phase.value = 0

        regions = create_regions(width, height, config, rng)
        land = create_land(grid, regions, config, rng, self.search_frontier, self.search_phase)
        erosion_steps = erode_land(grid, config, rng)
        climate = create_climate(grid, config)
        rivers = create_rivers(grid, climate, land.land_cells, config, rng)
        set_terrain_type(grid, climate, config, rng)

        grid.reset_search_phases()

        report = GenerationReport(
            seed=seed,
            land_budget=land.budget,
            land_cells=land.land_cells,
            land_shortfall=land.shortfall,
            erosion_steps=erosion_steps,
            river_budget=rivers.budget,
            rivers=rivers.rivers,
            river_shortfall=rivers.remaining,
        )
        logger.info(
            "Generated map: %d land cells, %d rivers", report.land_cells, report.rivers
        )
        return GeneratedMap(grid=grid, report=report)


def generate_map(
    width: int, height: int, config: Optional[MapGenerationConfig] = None
) -> GeneratedMap:
    """Generate a single map with a throwaway ``HexMapGenerator``."""
    return HexMapGenerator(config).generate(width, height)


__all__ = [
    "GeneratedMap",
    "GenerationReport",
    "HexMapGenerator",
    "generate_map",
    "resolve_seed",
]
