from __future__ import annotations

"""
Data model for a single hex cell: directions, axial coordinates and the
per-cell attribute record filled in by the generation phases.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Tuple, Union

NO_NEIGHBOR = -1


class HexDirection(IntEnum):
    NE = 0
    E = 1
    SE = 2
    SW = 3
    W = 4
    NW = 5

    def opposite(self) -> "HexDirection":
        return HexDirection((self + 3) % 6)

    def previous(self) -> "HexDirection":
        return HexDirection((self - 1) % 6)

    def next(self) -> "HexDirection":
        return HexDirection((self + 1) % 6)

    def previous2(self) -> "HexDirection":
        return HexDirection((self - 2) % 6)

    def next2(self) -> "HexDirection":
        return HexDirection((self + 2) % 6)


@dataclass(frozen=True)
class HexCoordinates:
    """Axial coordinates (x, z); the cube component y is derived."""

    x: int
    z: int

    @property
    def y(self) -> int:
        return -self.x - self.z

    @classmethod
    def from_offset(cls, x: int, z: int) -> "HexCoordinates":
        return cls(x - z // 2, z)

    def distance_to(self, other: "HexCoordinates") -> int:
        return (
            abs(self.x - other.x) + abs(self.y - other.y) + abs(self.z - other.z)
        ) // 2

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"


@dataclass(eq=False)
class HexCell:
    """
    Represents a single cell of the hex grid arena.

    Core Attributes:
      index: Position of this cell in the owning grid's cell list.
      x, z: Offset coordinates (column, row).
      coordinates: Axial coordinates derived from the offset pair.
      elevation: Signed integer height.
      water_level: Water surface height; the cell is underwater when it is above elevation.
      terrain_type_index: Index into the terrain palette chosen by the biome classifier.
      urban_level, farm_level, plant_level: Feature densities (0-3).
      neighbors: Arena indices of the six neighbors, NO_NEIGHBOR where absent.
      explorable: False for the outermost ring of cells.
      map_data: Auxiliary scalar (temperature or moisture) for downstream shading.

    Transient search fields (search_phase, distance, search_heuristic) are
    reused across flood fills; a cell is visited in the current fill when its
    search_phase equals the fill's phase stamp.
    """

    index: int
    x: int
    z: int
    coordinates: HexCoordinates = field(init=False)
    elevation: int = 0
    water_level: int = 0
    terrain_type_index: int = 0
    urban_level: int = 0
    farm_level: int = 0
    plant_level: int = 0
    special_index: int = 0
    has_incoming_river: bool = False
    incoming_river: HexDirection = HexDirection.NE
    has_outgoing_river: bool = False
    outgoing_river: HexDirection = HexDirection.NE
    roads: List[bool] = field(default_factory=lambda: [False] * 6)
    neighbors: List[int] = field(default_factory=lambda: [NO_NEIGHBOR] * 6)
    explorable: bool = True
    map_data: float = 0.0
    search_phase: int = 0
    distance: int = 0
    search_heuristic: int = 0

    def __post_init__(self):
        self.coordinates = HexCoordinates.from_offset(self.x, self.z)
        if self.water_level < 0:
            raise ValueError("water_level cannot be negative.")
        if len(self.neighbors) != 6 or len(self.roads) != 6:
            raise ValueError("A hex cell has exactly six neighbor and road slots.")

    @property
    def offset(self) -> Tuple[int, int]:
        return self.x, self.z

    @property
    def is_underwater(self) -> bool:
        return self.water_level > self.elevation

    @property
    def view_elevation(self) -> int:
        """Height of the visible surface: the water level when submerged."""
        return self.elevation if self.elevation >= self.water_level else self.water_level

    @property
    def has_river(self) -> bool:
        return self.has_incoming_river or self.has_outgoing_river

    @property
    def has_roads(self) -> bool:
        return any(self.roads)

    @property
    def search_priority(self) -> int:
        return self.distance + self.search_heuristic

    def has_river_through_edge(self, direction: HexDirection) -> bool:
        return (self.has_incoming_river and self.incoming_river == direction) or (
            self.has_outgoing_river and self.outgoing_river == direction
        )

    def __repr__(self) -> str:
        base = f"HexCell(offset={self.offset}, elevation={self.elevation}"
        if self.is_underwater:
            base += f", water_level={self.water_level}"
        base += f", terrain={self.terrain_type_index}"
        if self.has_incoming_river:
            base += f", river_in={self.incoming_river.name}"
        if self.has_outgoing_river:
            base += f", river_out={self.outgoing_river.name}"
        return base + ")"

    def to_json(self) -> Dict[str, Union[int, float, bool, str, None, Dict[str, int]]]:
        """
        Serializes the generated attributes to a JSON-friendly dict.
        """
        return {
            "offset": {"x": self.x, "z": self.z},
            "coordinates": {"x": self.coordinates.x, "z": self.coordinates.z},
            "elevation": self.elevation,
            "water_level": self.water_level,
            "underwater": self.is_underwater,
            "terrain": self.terrain_type_index,
            "urban_level": self.urban_level,
            "farm_level": self.farm_level,
            "plant_level": self.plant_level,
            "incoming_river": self.incoming_river.name if self.has_incoming_river else None,
            "outgoing_river": self.outgoing_river.name if self.has_outgoing_river else None,
            "map_data": self.map_data,
        }


__all__ = ["HexCell", "HexCoordinates", "HexDirection", "NO_NEIGHBOR"]
