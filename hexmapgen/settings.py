from __future__ import annotations

"""Configuration dataclass for map generation."""

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple, Union

from .hex import HexDirection


class HemisphereMode(Enum):
    BOTH = "both"
    NORTH = "north"
    SOUTH = "south"


class MapDataSource(Enum):
    TEMPERATURE = "temperature"
    MOISTURE = "moisture"


@dataclass(frozen=True)
class MapGenerationConfig:
    seed: int = 0
    use_fixed_seed: bool = False
    jitter_probability: float = 0.25
    chunk_size_min: int = 30
    chunk_size_max: int = 100
    highrise_probability: float = 0.25
    sink_probability: float = 0.2
    land_percentage: int = 50
    water_level: int = 3
    elevation_min: int = -2
    elevation_max: int = 8
    map_border_x: int = 5
    map_border_z: int = 5
    region_border: int = 5
    region_count: int = 1
    erosion_percentage: int = 50
    starting_moisture: float = 0.1
    evaporation_factor: float = 0.5
    precipitation_factor: float = 0.25
    runoff_factor: float = 0.25
    seepage_factor: float = 0.125
    wind_direction: HexDirection = HexDirection.NW
    wind_strength: float = 4.0
    river_percentage: int = 10
    extra_lake_probability: float = 0.25
    low_temperature: float = 0.0
    high_temperature: float = 1.0
    hemisphere: HemisphereMode = HemisphereMode.BOTH
    temperature_jitter: float = 0.1
    map_data_source: MapDataSource = MapDataSource.TEMPERATURE
    restrict_to_explorable: bool = False


Number = Union[int, float]

# Inclusive slider ranges. The generator trusts its config; callers clamp with
# ``adjust_config`` before handing values over.
CONFIG_RANGES: Dict[str, Tuple[Number, Number]] = {
    "seed": (0, 2**31 - 1),
    "jitter_probability": (0.0, 0.5),
    "chunk_size_min": (20, 200),
    "chunk_size_max": (20, 200),
    "highrise_probability": (0.0, 1.0),
    "sink_probability": (0.0, 0.4),
    "land_percentage": (0, 100),
    "water_level": (1, 5),
    "elevation_min": (-4, 0),
    "elevation_max": (6, 10),
    "map_border_x": (0, 10),
    "map_border_z": (0, 10),
    "region_border": (0, 10),
    "region_count": (1, 4),
    "erosion_percentage": (0, 100),
    "starting_moisture": (0.0, 1.0),
    "evaporation_factor": (0.0, 1.0),
    "precipitation_factor": (0.0, 1.0),
    "runoff_factor": (0.0, 1.0),
    "seepage_factor": (0.0, 1.0),
    "wind_strength": (1.0, 10.0),
    "river_percentage": (0, 20),
    "extra_lake_probability": (0.0, 1.0),
    "low_temperature": (0.0, 1.0),
    "high_temperature": (0.0, 1.0),
    "temperature_jitter": (0.0, 1.0),
}


def adjust_config(config: MapGenerationConfig, **kwargs: Any) -> MapGenerationConfig:
    """
    Return a copy of ``config`` with the given fields replaced.

    Numeric values are clamped to ``CONFIG_RANGES``; ints stay ints and floats
    stay floats. Enum and bool fields are assigned only if the types match.
    Unknown keys are ignored.

    Raises:
        TypeError: If a provided value's type does not match the existing field's type.
    """
    changes: Dict[str, Any] = {}
    for key, val in kwargs.items():
        if not hasattr(config, key):
            continue
        current = getattr(config, key)
        if isinstance(current, bool) or isinstance(current, Enum):
            if type(val) is not type(current):
                raise TypeError(f"Cannot assign value of type {type(val)} to setting '{key}'.")
            changes[key] = val
        elif isinstance(current, float) and isinstance(val, (int, float)) and not isinstance(val, bool):
            lo, hi = CONFIG_RANGES.get(key, (float("-inf"), float("inf")))
            changes[key] = float(max(lo, min(hi, float(val))))
        elif isinstance(current, int) and isinstance(val, int) and not isinstance(val, bool):
            lo, hi = CONFIG_RANGES.get(key, (val, val))
            changes[key] = int(max(lo, min(hi, val)))
        else:
            raise TypeError(f"Cannot assign value of type {type(val)} to setting '{key}'.")
    return dataclasses.replace(config, **changes)


__all__ = [
    "CONFIG_RANGES",
    "HemisphereMode",
    "MapDataSource",
    "MapGenerationConfig",
    "adjust_config",
]
