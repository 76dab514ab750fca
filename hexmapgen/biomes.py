from __future__ import annotations

"""Biome classification from temperature and moisture bands."""

import logging
import random
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .climate import ClimateData
from .grid import HexGrid
from .hex import HexCell
from .noise import NOISE_CHANNELS, sample_noise
from .settings import HemisphereMode, MapDataSource, MapGenerationConfig

logger = logging.getLogger("hexmapgen.biomes")
logger.addHandler(logging.NullHandler())

# Terrain palette indices.
TERRAIN_SAND = 0
TERRAIN_GRASS = 1
TERRAIN_MUD = 2
TERRAIN_STONE = 3
TERRAIN_SNOW = 4

TEMPERATURE_BANDS: Tuple[float, ...] = (0.1, 0.3, 0.6)
MOISTURE_BANDS: Tuple[float, ...] = (0.12, 0.28, 0.85)

MAX_PLANT_LEVEL = 3


@dataclass(frozen=True)
class Biome:
    terrain: int
    plant: int


# Rows are temperature bands (cold to hot), columns moisture bands (dry to wet).
BIOMES: Tuple[Biome, ...] = (
    Biome(0, 0), Biome(4, 0), Biome(4, 0), Biome(4, 0),
    Biome(0, 0), Biome(2, 0), Biome(2, 1), Biome(2, 2),
    Biome(0, 0), Biome(1, 0), Biome(1, 1), Biome(1, 2),
    Biome(0, 0), Biome(1, 1), Biome(1, 2), Biome(1, 3),
)


def band_index(value: float, bands: Sequence[float]) -> int:
    """Return the number of band thresholds ``value`` is not below."""
    for i, threshold in enumerate(bands):
        if value < threshold:
            return i
    return len(bands)


def lookup_biome(temperature: float, moisture: float) -> Biome:
    t = band_index(temperature, TEMPERATURE_BANDS)
    m = band_index(moisture, MOISTURE_BANDS)
    return BIOMES[t * 4 + m]


def latitude(z: int, height: int, hemisphere: HemisphereMode) -> float:
    """
    Map row ``z`` to a latitude factor in [0, 1] where 1 is the warmest.

    BOTH folds the map so the middle row is the equator, NORTH puts the
    equator at the bottom row and SOUTH at the top.
    """
    lat = z / height
    if hemisphere is HemisphereMode.BOTH:
        lat *= 2.0
        if lat > 1:
            lat = 2.0 - lat
    elif hemisphere is HemisphereMode.NORTH:
        lat = 1.0 - lat
    return lat


def determine_temperature(
    grid: HexGrid, cell: HexCell, config: MapGenerationConfig, jitter_channel: int
) -> float:
    lat = latitude(cell.z, grid.height, config.hemisphere)
    temperature = config.low_temperature + (config.high_temperature - config.low_temperature) * lat
    temperature *= 1.0 - (cell.view_elevation - config.water_level) / (
        config.elevation_max - config.water_level + 1.0
    )
    px, pz = grid.position(cell)
    jitter = sample_noise(px * 0.1, pz * 0.1, jitter_channel)
    temperature += (jitter * 2.0 - 1.0) * config.temperature_jitter
    return temperature


def classify_land(
    cell: HexCell,
    temperature: float,
    moisture: float,
    config: MapGenerationConfig,
) -> Biome:
    biome = lookup_biome(temperature, moisture)
    terrain, plant = biome.terrain, biome.plant
    rock_desert_elevation = config.elevation_max - (config.elevation_max - config.water_level) // 2

    if terrain == TERRAIN_SAND:
        if cell.elevation >= rock_desert_elevation:
            terrain = TERRAIN_STONE
    elif cell.elevation == config.elevation_max:
        terrain = TERRAIN_SNOW

    if terrain == TERRAIN_SNOW:
        plant = 0
    elif plant < MAX_PLANT_LEVEL and cell.has_river:
        plant += 1
    return Biome(terrain, plant)


def classify_water(
    grid: HexGrid, cell: HexCell, temperature: float, config: MapGenerationConfig
) -> int:
    if cell.elevation == config.water_level - 1:
        cliffs = slopes = 0
        for _, neighbor in grid.neighbors(cell):
            delta = neighbor.elevation - cell.water_level
            if delta == 0:
                slopes += 1
            elif delta > 0:
                cliffs += 1
        if cliffs + slopes > 3:
            terrain = TERRAIN_GRASS
        elif cliffs > 0:
            terrain = TERRAIN_STONE
        elif slopes > 0:
            terrain = TERRAIN_SAND
        else:
            terrain = TERRAIN_GRASS
    elif cell.elevation >= config.water_level:
        terrain = TERRAIN_GRASS
    elif cell.elevation < 0:
        terrain = TERRAIN_STONE
    else:
        terrain = TERRAIN_MUD

    if terrain == TERRAIN_GRASS and temperature < TEMPERATURE_BANDS[0]:
        terrain = TERRAIN_MUD
    return terrain


def set_terrain_type(
    grid: HexGrid,
    climate: List[ClimateData],
    config: MapGenerationConfig,
    rng: random.Random,
) -> None:
    """Assign terrain, plant level and map data to every cell."""
    jitter_channel = rng.randrange(NOISE_CHANNELS)
    for cell in grid:
        moisture = climate[cell.index].moisture
        temperature = determine_temperature(grid, cell, config, jitter_channel)
        if not cell.is_underwater:
            biome = classify_land(cell, temperature, moisture, config)
            cell.terrain_type_index = biome.terrain
            cell.plant_level = biome.plant
        else:
            cell.terrain_type_index = classify_water(grid, cell, temperature, config)

        if config.map_data_source is MapDataSource.MOISTURE:
            cell.map_data = moisture
        else:
            cell.map_data = temperature
    logger.debug("Classified %d cells (jitter channel %d)", grid.cell_count, jitter_channel)


__all__ = [
    "BIOMES",
    "Biome",
    "MOISTURE_BANDS",
    "TEMPERATURE_BANDS",
    "band_index",
    "classify_land",
    "classify_water",
    "determine_temperature",
    "latitude",
    "lookup_biome",
    "set_terrain_type",
]
