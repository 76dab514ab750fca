"""
Land sculpting: randomized flood-fill growth patches that raise or sink
terrain until the configured share of the map sits at or above water level.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List

from .grid import HexGrid
from .hex import HexCell
from .priority_queue import BucketPriorityQueue
from .regions import MapRegion, random_cell
from .settings import MapGenerationConfig

logger = logging.getLogger("hexmapgen.land")
logger.addHandler(logging.NullHandler())

MAX_GROWTH_ITERATIONS = 10000


@dataclass
class LandResult:
    budget: int
    land_cells: int
    shortfall: int = 0


class SearchPhase:
    """Monotonic stamp marking which flood fill last visited a cell."""

    def __init__(self) -> None:
        self.value = 0

    def advance(self) -> int:
        self.value += 1
        return self.value


def _start_patch(
    grid: HexGrid,
    frontier: BucketPriorityQueue[HexCell],
    region: MapRegion,
    phase: int,
    rng: random.Random,
) -> HexCell:
    first = random_cell(grid, region, rng)
    first.search_phase = phase
    first.distance = 0
    first.search_heuristic = 0
    frontier.enqueue(first)
    return first


def _expand(
    grid: HexGrid,
    frontier: BucketPriorityQueue[HexCell],
    current: HexCell,
    center: HexCell,
    phase: int,
    config: MapGenerationConfig,
    rng: random.Random,
) -> None:
    for _, neighbor in grid.neighbors(current):
        if neighbor.search_phase < phase:
            neighbor.search_phase = phase
            neighbor.distance = neighbor.coordinates.distance_to(center.coordinates)
            neighbor.search_heuristic = 1 if rng.random() < config.jitter_probability else 0
            frontier.enqueue(neighbor)


def raise_terrain(
    grid: HexGrid,
    frontier: BucketPriorityQueue[HexCell],
    chunk_size: int,
    budget: int,
    region: MapRegion,
    phase: int,
    config: MapGenerationConfig,
    rng: random.Random,
) -> int:
    """
    Grow a patch of up to ``chunk_size`` cells around a random cell of
    ``region``, raising each by 1 or 2. Returns the remaining land budget.
    """
    center = _start_patch(grid, frontier, region, phase, rng)
    rise = 2 if rng.random() < config.highrise_probability else 1
    size = 0
    while size < chunk_size and len(frontier) > 0:
        current = frontier.dequeue()
        original = current.elevation
        new_elevation = original + rise
        if new_elevation > config.elevation_max:
            size += 1
            continue

        grid.set_elevation(current, new_elevation)
        if original < config.water_level <= new_elevation:
            budget -= 1
            if budget == 0:
                break

        size += 1
        _expand(grid, frontier, current, center, phase, config, rng)

    frontier.clear()
    return budget


def sink_terrain(
    grid: HexGrid,
    frontier: BucketPriorityQueue[HexCell],
    chunk_size: int,
    budget: int,
    region: MapRegion,
    phase: int,
    config: MapGenerationConfig,
    rng: random.Random,
) -> int:
    """
    Counterpart of ``raise_terrain``: lowers the patch by 1 or 2, handing
    budget back for every cell that drops below water level.
    """
    center = _start_patch(grid, frontier, region, phase, rng)
    sink = 2 if rng.random() < config.highrise_probability else 1
    size = 0
    while size < chunk_size and len(frontier) > 0:
        current = frontier.dequeue()
        original = current.elevation
        new_elevation = original - sink
        if new_elevation < config.elevation_min:
            size += 1
            continue

        grid.set_elevation(current, new_elevation)
        if new_elevation < config.water_level <= original:
            budget += 1

        size += 1
        _expand(grid, frontier, current, center, phase, config, rng)

    frontier.clear()
    return budget


def create_land(
    grid: HexGrid,
    regions: List[MapRegion],
    config: MapGenerationConfig,
    rng: random.Random,
    frontier: BucketPriorityQueue[HexCell] | None = None,
    search_phase: SearchPhase | None = None,
) -> LandResult:
    """
    Spend the land budget by alternating raise and sink patches over all regions.

    Stops as soon as a raise exhausts the budget. If the iteration cap is hit
    first, the leftover is logged and subtracted from the land cell count.
    """
    frontier = frontier if frontier is not None else BucketPriorityQueue()
    search_phase = search_phase or SearchPhase()

    budget = round(grid.cell_count * config.land_percentage * 0.01)
    result = LandResult(budget=budget, land_cells=budget)

    for _ in range(MAX_GROWTH_ITERATIONS):
        sink = rng.random() < config.sink_probability
        for region in regions:
            chunk_size = rng.randint(config.chunk_size_min, config.chunk_size_max)
            if sink:
                budget = sink_terrain(
                    grid, frontier, chunk_size, budget, region,
                    search_phase.advance(), config, rng,
                )
            else:
                budget = raise_terrain(
                    grid, frontier, chunk_size, budget, region,
                    search_phase.advance(), config, rng,
                )
                if budget == 0:
                    logger.debug("Land budget of %d spent", result.budget)
                    return result

    if budget > 0:
        logger.warning("Failed to use up %d land budget.", budget)
        result.shortfall = budget
        result.land_cells -= budget
    return result


__all__ = [
    "LandResult",
    "MAX_GROWTH_ITERATIONS",
    "SearchPhase",
    "create_land",
    "raise_terrain",
    "sink_terrain",
]
