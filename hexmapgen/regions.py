"""Partitioning of the playable map interior into land-growth regions."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List

from .grid import HexGrid
from .hex import HexCell
from .settings import MapGenerationConfig


@dataclass(frozen=True)
class MapRegion:
    """Half-open rectangle of offset coordinates: x_min <= x < x_max, z_min <= z < z_max."""

    x_min: int
    x_max: int
    z_min: int
    z_max: int

    @property
    def is_empty(self) -> bool:
        return self.x_max <= self.x_min or self.z_max <= self.z_min


def create_regions(
    width: int, height: int, config: MapGenerationConfig, rng: random.Random
) -> List[MapRegion]:
    """
    Split the interior into ``config.region_count`` regions.

    Two regions split the map in half along a randomly chosen axis, three cut
    it into vertical strips and four into quadrants. Any other count yields a
    single region covering the whole interior.
    """
    border_x = config.map_border_x
    border_z = config.map_border_z
    gap = config.region_border
    count = config.region_count

    if count == 2:
        if rng.random() < 0.5:
            return [
                MapRegion(border_x, width // 2 - gap, border_z, height - border_z),
                MapRegion(width // 2 + gap, width - border_x, border_z, height - border_z),
            ]
        return [
            MapRegion(border_x, width - border_x, border_z, height // 2 - gap),
            MapRegion(border_x, width - border_x, height // 2 + gap, height - border_z),
        ]
    if count == 3:
        return [
            MapRegion(border_x, width // 3 - gap, border_z, height - border_z),
            MapRegion(width // 3 + gap, width * 2 // 3 - gap, border_z, height - border_z),
            MapRegion(width * 2 // 3 + gap, width - border_x, border_z, height - border_z),
        ]
    if count == 4:
        return [
            MapRegion(border_x, width // 2 - gap, border_z, height // 2 - gap),
            MapRegion(width // 2 + gap, width - border_x, border_z, height // 2 - gap),
            MapRegion(width // 2 + gap, width - border_x, height // 2 + gap, height - border_z),
            MapRegion(border_x, width // 2 - gap, height // 2 + gap, height - border_z),
        ]
    return [MapRegion(border_x, width - border_x, border_z, height - border_z)]


def _random_in_range(rng: random.Random, lo: int, hi: int) -> int:
    # Inverted ranges are swapped and empty ones collapse to their bound.
    if hi < lo:
        lo, hi = hi, lo
    if hi == lo:
        return lo
    return rng.randrange(lo, hi)


def random_cell(grid: HexGrid, region: MapRegion, rng: random.Random) -> HexCell:
    """
    Pick a uniformly random cell inside ``region``.

    Degenerate regions (produced by borders wider than the map allows) still
    yield a cell: the nearest in-bounds offset to the region's corner.
    """
    x = _random_in_range(rng, region.x_min, region.x_max)
    z = _random_in_range(rng, region.z_min, region.z_max)
    x = max(0, min(grid.width - 1, x))
    z = max(0, min(grid.height - 1, z))
    return grid.get_cell_at(x, z)


__all__ = ["MapRegion", "create_regions", "random_cell"]
