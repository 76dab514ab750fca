"""River carving: weighted origin selection and randomized downhill walks."""

from __future__ import annotations

import logging
import random
import sys
from dataclasses import dataclass
from typing import List

from .climate import ClimateData
from .grid import HexGrid
from .hex import HexCell, HexDirection
from .settings import MapGenerationConfig

logger = logging.getLogger("hexmapgen.rivers")
logger.addHandler(logging.NullHandler())


@dataclass
class RiverResult:
    budget: int
    rivers: int = 0
    remaining: int = 0


def river_origins(
    grid: HexGrid, climate: List[ClimateData], config: MapGenerationConfig
) -> List[HexCell]:
    """
    Build the origin candidate list. Wet, high cells appear up to four times
    so a uniform pick favors them.
    """
    origins: List[HexCell] = []
    span = config.elevation_max - config.water_level
    for cell in grid:
        if cell.is_underwater:
            continue
        if config.restrict_to_explorable and not cell.explorable:
            continue
        weight = climate[cell.index].moisture * (cell.elevation - config.water_level) / span
        if weight > 0.75:
            origins.append(cell)
            origins.append(cell)
        if weight > 0.5:
            origins.append(cell)
        if weight > 0.25:
            origins.append(cell)
    return origins


def _is_clean_origin(grid: HexGrid, origin: HexCell) -> bool:
    if origin.has_river:
        return False
    for _, neighbor in grid.neighbors(origin):
        if neighbor.has_river or neighbor.is_underwater:
            return False
    return True


def carve_river(
    grid: HexGrid, origin: HexCell, config: MapGenerationConfig, rng: random.Random
) -> int:
    """
    Walk downhill from ``origin`` laying river edges until reaching water,
    joining another river or getting stuck in a depression (which becomes a
    lake). Returns the river length, or 0 when no first step was possible.
    """
    flow_directions: List[HexDirection] = []
    length = 1
    cell = origin
    direction = HexDirection.NE
    while not cell.is_underwater:
        min_neighbor_elevation = sys.maxsize
        flow_directions.clear()
        for d, neighbor in grid.neighbors(cell):
            if neighbor.elevation < min_neighbor_elevation:
                min_neighbor_elevation = neighbor.elevation

            if neighbor is origin or neighbor.has_incoming_river:
                continue

            delta = neighbor.elevation - cell.elevation
            if delta > 0:
                continue

            if neighbor.has_outgoing_river:
                grid.set_outgoing_river(cell, d)
                return length

            if delta < 0:
                flow_directions.extend((d, d, d))
            # Discourage sharp bends after the first step.
            if length == 1 or (d != direction.next2() and d != direction.previous2()):
                flow_directions.append(d)
            flow_directions.append(d)

        if not flow_directions:
            if length == 1:
                return 0
            if min_neighbor_elevation >= cell.elevation:
                grid.set_water_level(cell, min_neighbor_elevation)
                if min_neighbor_elevation == cell.elevation:
                    grid.set_elevation(cell, min_neighbor_elevation - 1)
            break

        direction = flow_directions[rng.randrange(len(flow_directions))]
        grid.set_outgoing_river(cell, direction)
        length += 1

        if min_neighbor_elevation >= cell.elevation and rng.random() < config.extra_lake_probability:
            grid.set_water_level(cell, cell.elevation)
            grid.set_elevation(cell, cell.elevation - 1)

        cell = grid.neighbor(cell, direction)

    return length


def create_rivers(
    grid: HexGrid,
    climate: List[ClimateData],
    land_cells: int,
    config: MapGenerationConfig,
    rng: random.Random,
) -> RiverResult:
    """
    Carve rivers from random clean origins until the river budget
    (``river_percentage`` of the land cells) is spent or origins run out.
    """
    origins = river_origins(grid, climate, config)
    budget = round(land_cells * config.river_percentage * 0.01)
    result = RiverResult(budget=budget)

    while budget > 0 and origins:
        index = rng.randrange(len(origins))
        origin = origins[index]
        origins[index] = origins[-1]
        origins.pop()

        if _is_clean_origin(grid, origin):
            length = carve_river(grid, origin, config, rng)
            if length > 0:
                result.rivers += 1
            budget -= length

    if budget > 0:
        logger.warning("Failed to use up river budget; %d left.", budget)
    result.remaining = max(budget, 0)
    logger.debug("Carved %d rivers from a budget of %d", result.rivers, result.budget)
    return result


__all__ = ["RiverResult", "carve_river", "create_rivers", "river_origins"]
