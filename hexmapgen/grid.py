from __future__ import annotations

"""
grid.py

Arena of hex cells in offset coordinates.

Cells are stored row-major in a flat list and refer to each other only by
index, so the grid is the single owner of every cell. Mutations that must
keep two cells consistent (rivers, roads, elevation changes that invalidate
them) go through the grid.
"""

import math
from typing import Iterable, Iterator, List, Optional, Tuple

from .hex import NO_NEIGHBOR, HexCell, HexDirection

# Cells per chunk along each axis; grid dimensions must be multiples of these.
CHUNK_SIZE_X = 5
CHUNK_SIZE_Z = 5

OUTER_RADIUS = 10.0
INNER_RADIUS = OUTER_RADIUS * 0.866025404


class InvalidGridSizeError(ValueError):
    """Raised when grid dimensions are not positive multiples of the chunk size."""


class HexGrid:
    __slots__ = ("width", "height", "cells")

    def __init__(self, width: int, height: int) -> None:
        """
        Create a grid of ``width`` x ``height`` cells with symmetric neighbor links.

        Raises:
            InvalidGridSizeError: If either dimension is not a positive multiple
                of the chunk size.
        """
        if (
            width <= 0
            or width % CHUNK_SIZE_X != 0
            or height <= 0
            or height % CHUNK_SIZE_Z != 0
        ):
            raise InvalidGridSizeError(
                f"Unsupported map size {width}x{height}; dimensions must be positive "
                f"multiples of {CHUNK_SIZE_X}x{CHUNK_SIZE_Z}."
            )
        self.width = width
        self.height = height
        self.cells: List[HexCell] = []
        for z in range(height):
            for x in range(width):
                self._create_cell(x, z)

    def _create_cell(self, x: int, z: int) -> None:
        i = len(self.cells)
        cell = HexCell(index=i, x=x, z=z)
        cell.explorable = 0 < x < self.width - 1 and 0 < z < self.height - 1
        self.cells.append(cell)

        if x > 0:
            self._link(cell, HexDirection.W, i - 1)
        if z > 0:
            if z & 1 == 0:
                self._link(cell, HexDirection.SE, i - self.width)
                if x > 0:
                    self._link(cell, HexDirection.SW, i - self.width - 1)
            else:
                self._link(cell, HexDirection.SW, i - self.width)
                if x < self.width - 1:
                    self._link(cell, HexDirection.SE, i - self.width + 1)

    def _link(self, cell: HexCell, direction: HexDirection, other_index: int) -> None:
        cell.neighbors[direction] = other_index
        self.cells[other_index].neighbors[direction.opposite()] = cell.index

    # ─────────────────────────────────────────────────────────────────────────
    # == ACCESS ==

    @property
    def cell_count(self) -> int:
        return len(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[HexCell]:
        return iter(self.cells)

    def get_cell(self, index: int) -> HexCell:
        return self.cells[index]

    def get_cell_at(self, x: int, z: int) -> Optional[HexCell]:
        """Return the cell at offset (x, z), or None if out of bounds."""
        if not (0 <= x < self.width and 0 <= z < self.height):
            return None
        return self.cells[x + z * self.width]

    def neighbor(self, cell: HexCell, direction: HexDirection) -> Optional[HexCell]:
        index = cell.neighbors[direction]
        if index == NO_NEIGHBOR:
            return None
        return self.cells[index]

    def neighbors(self, cell: HexCell) -> Iterable[Tuple[HexDirection, HexCell]]:
        """Yield (direction, neighbor) pairs in NE..NW order, skipping missing ones."""
        for d in HexDirection:
            index = cell.neighbors[d]
            if index != NO_NEIGHBOR:
                yield d, self.cells[index]

    def position(self, cell: HexCell) -> Tuple[float, float]:
        """World-space (x, z) of the cell center, before any perturbation."""
        px = (cell.x + cell.z * 0.5 - cell.z // 2) * (INNER_RADIUS * 2.0)
        pz = cell.z * (OUTER_RADIUS * 1.5)
        return px, pz

    def reset_search_phases(self) -> None:
        for cell in self.cells:
            cell.search_phase = 0

    # ─────────────────────────────────────────────────────────────────────────
    # == ELEVATION & WATER ==

    def set_elevation(self, cell: HexCell, value: int) -> None:
        if cell.elevation == value:
            return
        cell.elevation = value
        self._validate_rivers(cell)
        for d in HexDirection:
            if cell.roads[d] and self.elevation_difference(cell, d) > 1:
                self._set_road(cell, d, False)

    def set_water_level(self, cell: HexCell, value: int) -> None:
        if cell.water_level == value:
            return
        cell.water_level = value
        self._validate_rivers(cell)

    def elevation_difference(self, cell: HexCell, direction: HexDirection) -> int:
        other = self.neighbor(cell, direction)
        return abs(cell.elevation - other.elevation)

    # ─────────────────────────────────────────────────────────────────────────
    # == RIVERS ==

    @staticmethod
    def is_valid_river_destination(cell: HexCell, neighbor: Optional[HexCell]) -> bool:
        return neighbor is not None and (
            cell.elevation >= neighbor.elevation or cell.water_level == neighbor.elevation
        )

    def remove_outgoing_river(self, cell: HexCell) -> None:
        if not cell.has_outgoing_river:
            return
        cell.has_outgoing_river = False
        self.neighbor(cell, cell.outgoing_river).has_incoming_river = False

    def remove_incoming_river(self, cell: HexCell) -> None:
        if not cell.has_incoming_river:
            return
        cell.has_incoming_river = False
        self.neighbor(cell, cell.incoming_river).has_outgoing_river = False

    def remove_river(self, cell: HexCell) -> None:
        self.remove_incoming_river(cell)
        self.remove_outgoing_river(cell)

    def set_outgoing_river(self, cell: HexCell, direction: HexDirection) -> bool:
        """
        Start a river edge from ``cell`` toward ``direction``.

        Returns False, leaving the cell untouched, when the neighbor is not a
        valid destination.
        """
        if cell.has_outgoing_river and cell.outgoing_river == direction:
            return True
        neighbor = self.neighbor(cell, direction)
        if not self.is_valid_river_destination(cell, neighbor):
            return False

        self.remove_outgoing_river(cell)
        if cell.has_incoming_river and cell.incoming_river == direction:
            self.remove_incoming_river(cell)

        cell.has_outgoing_river = True
        cell.outgoing_river = direction
        cell.special_index = 0

        self.remove_incoming_river(neighbor)
        neighbor.has_incoming_river = True
        neighbor.incoming_river = direction.opposite()
        neighbor.special_index = 0

        self._set_road(cell, direction, False)
        return True

    def _validate_rivers(self, cell: HexCell) -> None:
        if cell.has_outgoing_river and not self.is_valid_river_destination(
            cell, self.neighbor(cell, cell.outgoing_river)
        ):
            self.remove_outgoing_river(cell)
        if cell.has_incoming_river:
            upstream = self.neighbor(cell, cell.incoming_river)
            if not self.is_valid_river_destination(upstream, cell):
                self.remove_incoming_river(cell)

    # ─────────────────────────────────────────────────────────────────────────
    # == ROADS ==

    def add_road(self, cell: HexCell, direction: HexDirection) -> bool:
        neighbor = self.neighbor(cell, direction)
        if (
            neighbor is None
            or cell.roads[direction]
            or cell.has_river_through_edge(direction)
            or cell.special_index > 0
            or neighbor.special_index > 0
            or self.elevation_difference(cell, direction) > 1
        ):
            return False
        self._set_road(cell, direction, True)
        return True

    def remove_roads(self, cell: HexCell) -> None:
        for d in HexDirection:
            if cell.roads[d]:
                self._set_road(cell, d, False)

    def _set_road(self, cell: HexCell, direction: HexDirection, state: bool) -> None:
        cell.roads[direction] = state
        self.neighbor(cell, direction).roads[direction.opposite()] = state


__all__ = [
    "CHUNK_SIZE_X",
    "CHUNK_SIZE_Z",
    "HexGrid",
    "InvalidGridSizeError",
]
