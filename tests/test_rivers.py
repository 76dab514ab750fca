import random

from hexmapgen.climate import ClimateData
from hexmapgen.grid import HexGrid
from hexmapgen.hex import HexDirection
from hexmapgen.rivers import carve_river, create_rivers, river_origins
from hexmapgen.settings import MapGenerationConfig


def assert_rivers_consistent(grid):
    for cell in grid:
        if cell.has_outgoing_river:
            target = grid.neighbor(cell, cell.outgoing_river)
            assert target is not None
            assert target.has_incoming_river, f"{target} lost its incoming river"
            assert target.incoming_river is cell.outgoing_river.opposite()
            assert cell.elevation >= target.elevation or cell.water_level == target.elevation
        if cell.has_incoming_river:
            source = grid.neighbor(cell, cell.incoming_river)
            assert source.has_outgoing_river
            assert source.outgoing_river is cell.incoming_river.opposite()


def slope_grid():
    """Terrain falling one step per column toward a sea along the east edge."""
    grid = HexGrid(10, 10)
    for cell in grid:
        cell.elevation = 9 - cell.x
        cell.water_level = 1
    return grid


def test_river_runs_downhill_to_the_sea():
    grid = slope_grid()
    origin = grid.get_cell_at(2, 5)
    length = carve_river(grid, origin, MapGenerationConfig(), random.Random(4))
    assert length > 1
    assert origin.has_outgoing_river
    assert_rivers_consistent(grid)

    cell = origin
    steps = 1
    while cell.has_outgoing_river:
        cell = grid.neighbor(cell, cell.outgoing_river)
        steps += 1
    assert steps == length
    assert cell.is_underwater, "The river should end in the sea"


def test_river_stuck_in_pit_returns_zero():
    grid = HexGrid(5, 5)
    for cell in grid:
        cell.elevation = 6
    origin = grid.get_cell_at(2, 2)
    origin.elevation = 4
    assert carve_river(grid, origin, MapGenerationConfig(), random.Random(0)) == 0
    assert not any(cell.has_river for cell in grid)


def test_river_ending_in_depression_forms_lake():
    grid = HexGrid(5, 5)
    for cell in grid:
        cell.elevation = 9
    origin = grid.get_cell_at(2, 2)
    origin.elevation = 5
    pit = grid.neighbor(origin, HexDirection.E)
    pit.elevation = 4
    length = carve_river(grid, origin, MapGenerationConfig(), random.Random(0))
    assert length == 2
    assert origin.outgoing_river is HexDirection.E
    assert pit.incoming_river is HexDirection.W
    assert pit.water_level == 5
    assert pit.is_underwater
    assert_rivers_consistent(grid)


def test_origins_weighted_by_moisture_and_height():
    grid = HexGrid(5, 5)
    config = MapGenerationConfig()
    for cell in grid:
        cell.water_level = config.water_level
        cell.elevation = config.water_level
    high = grid.get_cell_at(2, 2)
    high.elevation = config.elevation_max
    mid = grid.get_cell_at(1, 1)
    mid.elevation = 6
    climate = [ClimateData(moisture=1.0) for _ in range(len(grid))]
    origins = river_origins(grid, climate, config)
    assert origins.count(high) == 4
    assert origins.count(mid) == 2
    assert len(origins) == 6, "Cells at water level carry no weight"


def test_no_budget_no_rivers():
    grid = slope_grid()
    climate = [ClimateData(moisture=1.0) for _ in range(len(grid))]
    result = create_rivers(grid, climate, 80, MapGenerationConfig(river_percentage=0), random.Random(1))
    assert result.budget == 0
    assert result.rivers == 0
    assert not any(cell.has_river for cell in grid)


def test_create_rivers_spends_budget():
    grid = slope_grid()
    climate = [ClimateData(moisture=1.0) for _ in range(len(grid))]
    config = MapGenerationConfig(water_level=1, river_percentage=20)
    result = create_rivers(grid, climate, 80, config, random.Random(1))
    assert result.budget == 16
    assert result.rivers >= 1
    assert_rivers_consistent(grid)


def test_river_joins_existing_river():
    grid = HexGrid(5, 5)
    for cell in grid:
        cell.elevation = 9
    origin = grid.get_cell_at(1, 2)
    origin.elevation = 5
    existing = grid.neighbor(origin, HexDirection.E)
    existing.elevation = 5
    mouth = grid.neighbor(existing, HexDirection.E)
    mouth.elevation = 4
    assert grid.set_outgoing_river(existing, HexDirection.E)

    length = carve_river(grid, origin, MapGenerationConfig(), random.Random(0))
    assert length == 1, "Joining ends the walk without advancing"
    assert origin.outgoing_river is HexDirection.E
    assert existing.has_incoming_river and existing.incoming_river is HexDirection.W
    assert existing.has_outgoing_river and existing.outgoing_river is HexDirection.E
    assert_rivers_consistent(grid)


def test_extra_lake_on_plateau():
    grid = HexGrid(10, 10)
    for cell in grid:
        cell.elevation = 5
    origin = grid.get_cell_at(4, 4)
    config = MapGenerationConfig(extra_lake_probability=1.0)
    length = carve_river(grid, origin, config, random.Random(2))
    assert length > 1
    assert origin.has_outgoing_river
    assert origin.water_level == 5
    assert origin.elevation == 4
    assert origin.is_underwater
    assert_rivers_consistent(grid)
