from __future__ import annotations

from .biomes import BIOMES, Biome, lookup_biome, set_terrain_type
from .climate import CLIMATE_CYCLES, ClimateData, create_climate
from .erosion import erode_land, is_erodible
from .export import export_map_json, map_to_dict
from .generator import GeneratedMap, GenerationReport, HexMapGenerator, generate_map
from .grid import CHUNK_SIZE_X, CHUNK_SIZE_Z, HexGrid, InvalidGridSizeError
from .hex import HexCell, HexCoordinates, HexDirection
from .land import LandResult, create_land, raise_terrain, sink_terrain
from .priority_queue import BucketPriorityQueue
from .regions import MapRegion, create_regions, random_cell
from .rivers import RiverResult, carve_river, create_rivers
from .settings import (
    CONFIG_RANGES,
    HemisphereMode,
    MapDataSource,
    MapGenerationConfig,
    adjust_config,
)

__all__ = [
    "BIOMES",
    "Biome",
    "BucketPriorityQueue",
    "CHUNK_SIZE_X",
    "CHUNK_SIZE_Z",
    "CLIMATE_CYCLES",
    "CONFIG_RANGES",
    "ClimateData",
    "GeneratedMap",
    "GenerationReport",
    "HemisphereMode",
    "HexCell",
    "HexCoordinates",
    "HexDirection",
    "HexGrid",
    "HexMapGenerator",
    "InvalidGridSizeError",
    "LandResult",
    "MapDataSource",
    "MapGenerationConfig",
    "MapRegion",
    "RiverResult",
    "adjust_config",
    "carve_river",
    "create_climate",
    "create_land",
    "create_regions",
    "create_rivers",
    "erode_land",
    "export_map_json",
    "generate_map",
    "is_erodible",
    "lookup_biome",
    "map_to_dict",
    "random_cell",
    "raise_terrain",
    "set_terrain_type",
    "sink_terrain",
]
