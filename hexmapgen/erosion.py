"""Erosion relaxation: shave over-steep cells down onto their lower neighbors."""

from __future__ import annotations

import logging
import random
from typing import List

from .grid import HexGrid
from .hex import HexCell
from .settings import MapGenerationConfig

logger = logging.getLogger("hexmapgen.erosion")
logger.addHandler(logging.NullHandler())


def is_erodible(grid: HexGrid, cell: HexCell) -> bool:
    """True if some neighbor sits at least two elevation steps below ``cell``."""
    erodible_elevation = cell.elevation - 2
    return any(n.elevation <= erodible_elevation for _, n in grid.neighbors(cell))


def erosion_target(grid: HexGrid, cell: HexCell, rng: random.Random) -> HexCell:
    erodible_elevation = cell.elevation - 2
    candidates = [n for _, n in grid.neighbors(cell) if n.elevation <= erodible_elevation]
    return candidates[rng.randrange(len(candidates))]


def erode_land(grid: HexGrid, config: MapGenerationConfig, rng: random.Random) -> int:
    """
    Move elevation from erodible cells to lower neighbors until only
    ``100 - erosion_percentage`` percent of the initially erodible cells remain.

    The erodible list is maintained incrementally around each eroded pair, so
    it can briefly disagree with a full recount; this only affects how fast
    the loop converges. Returns the number of erosion steps taken.
    """

    def admissible(cell: HexCell) -> bool:
        return cell.explorable or not config.restrict_to_explorable

    erodible: List[HexCell] = [
        cell for cell in grid if admissible(cell) and is_erodible(grid, cell)
    ]
    target_count = len(erodible) * (100 - config.erosion_percentage) // 100
    logger.debug("Eroding %d erodible cells down to %d", len(erodible), target_count)

    steps = 0
    while len(erodible) > target_count:
        index = rng.randrange(len(erodible))
        cell = erodible[index]
        target = erosion_target(grid, cell, rng)

        grid.set_elevation(cell, cell.elevation - 1)
        grid.set_elevation(target, target.elevation + 1)
        steps += 1

        if not is_erodible(grid, cell):
            erodible[index] = erodible[-1]
            erodible.pop()

        for _, neighbor in grid.neighbors(cell):
            if (
                neighbor.elevation == cell.elevation + 2
                and admissible(neighbor)
                and neighbor not in erodible
            ):
                erodible.append(neighbor)

        if admissible(target) and is_erodible(grid, target) and target not in erodible:
            erodible.append(target)

        for _, neighbor in grid.neighbors(target):
            if (
                neighbor is not cell
                and neighbor.elevation == target.elevation + 1
                and not is_erodible(grid, neighbor)
                and neighbor in erodible
            ):
                erodible.remove(neighbor)

    return steps


__all__ = ["erode_land", "erosion_target", "is_erodible"]
