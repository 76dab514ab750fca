"""
Climate simulation: a double-buffered cellular automaton moving clouds and
moisture across the grid for a fixed number of cycles.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from .grid import HexGrid
from .hex import HexCell
from .settings import MapGenerationConfig

logger = logging.getLogger("hexmapgen.climate")
logger.addHandler(logging.NullHandler())

CLIMATE_CYCLES = 40


@dataclass
class ClimateData:
    clouds: float = 0.0
    moisture: float = 0.0


def evolve_climate(
    grid: HexGrid,
    cell: HexCell,
    climate: List[ClimateData],
    next_climate: List[ClimateData],
    config: MapGenerationConfig,
) -> None:
    """
    Run one cycle for ``cell``: read its entry in ``climate``, push cloud and
    moisture shares into ``next_climate`` for itself and its neighbors, then
    zero its ``climate`` entry for reuse as the next cycle's target buffer.
    """
    current = climate[cell.index]
    clouds = current.clouds
    moisture = current.moisture

    if cell.is_underwater:
        moisture = 1.0
        clouds += config.evaporation_factor
    else:
        evaporation = moisture * config.evaporation_factor
        moisture = evaporation
        clouds += evaporation

    precipitation = clouds * config.precipitation_factor
    clouds -= precipitation
    moisture += precipitation

    cloud_maximum = 1.0 - cell.view_elevation / (config.elevation_max + 1.0)
    if clouds > cloud_maximum:
        moisture += clouds - cloud_maximum
        clouds = cloud_maximum

    main_dispersal_direction = config.wind_direction.opposite()
    cloud_dispersal = clouds * (1.0 / (5.0 + config.wind_strength))
    runoff = moisture * config.runoff_factor * (1.0 / 6.0)
    seepage = moisture * config.seepage_factor * (1.0 / 6.0)
    for d, neighbor in grid.neighbors(cell):
        neighbor_climate = next_climate[neighbor.index]
        if d == main_dispersal_direction:
            neighbor_climate.clouds += cloud_dispersal * config.wind_strength
        else:
            neighbor_climate.clouds += cloud_dispersal

        elevation_delta = neighbor.view_elevation - cell.view_elevation
        if elevation_delta < 0:
            moisture -= runoff
            neighbor_climate.moisture += runoff
        elif elevation_delta == 0:
            moisture -= seepage
            neighbor_climate.moisture += seepage

    next_climate[cell.index].moisture += moisture
    current.clouds = 0.0
    current.moisture = 0.0


def create_climate(grid: HexGrid, config: MapGenerationConfig) -> List[ClimateData]:
    """
    Simulate ``CLIMATE_CYCLES`` cycles and return the final per-cell climate.

    Every cycle reads only the current buffer and writes only the next one, so
    the result does not depend on the order cells are visited in.
    """
    climate = [ClimateData(moisture=config.starting_moisture) for _ in range(grid.cell_count)]
    next_climate = [ClimateData() for _ in range(grid.cell_count)]

    for _ in range(CLIMATE_CYCLES):
        for cell in grid:
            evolve_climate(grid, cell, climate, next_climate, config)
        for data in next_climate:
            if data.moisture > 1.0:
                data.moisture = 1.0
        climate, next_climate = next_climate, climate

    if climate:
        logger.debug(
            "Climate settled: mean moisture %.3f",
            sum(data.moisture for data in climate) / len(climate),
        )
    return climate


__all__ = ["CLIMATE_CYCLES", "ClimateData", "create_climate", "evolve_climate"]
