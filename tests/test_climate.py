import random

import pytest

from hexmapgen.climate import ClimateData, create_climate, evolve_climate
from hexmapgen.grid import HexGrid
from hexmapgen.settings import MapGenerationConfig


def hilly_grid(water_level=3):
    grid = HexGrid(10, 10)
    rng = random.Random(5)
    for cell in grid:
        cell.water_level = water_level
        cell.elevation = rng.randint(0, 8)
    return grid


def test_moisture_stays_in_unit_range():
    grid = hilly_grid()
    climate = create_climate(grid, MapGenerationConfig())
    assert len(climate) == len(grid)
    for data in climate:
        assert 0.0 <= data.moisture <= 1.0
        assert data.clouds >= 0.0


def test_ocean_is_saturated():
    grid = HexGrid(10, 5)
    for cell in grid:
        cell.water_level = 3
    climate = create_climate(grid, MapGenerationConfig())
    for data in climate:
        assert data.moisture == pytest.approx(1.0)


def test_cycle_does_not_depend_on_visit_order():
    grid = hilly_grid()
    config = MapGenerationConfig()
    results = []
    for order in (list(grid), list(reversed(list(grid)))):
        current = [ClimateData(clouds=0.2, moisture=0.3) for _ in range(len(grid))]
        following = [ClimateData() for _ in range(len(grid))]
        for cell in order:
            evolve_climate(grid, cell, current, following, config)
        results.append(following)
        assert all(data.clouds == 0.0 and data.moisture == 0.0 for data in current)
    forward, backward = results
    for a, b in zip(forward, backward):
        assert a.moisture == pytest.approx(b.moisture)
        assert a.clouds == pytest.approx(b.clouds)


def test_wind_pushes_clouds_downwind():
    grid = HexGrid(10, 10)
    for cell in grid:
        cell.water_level = 3
    config = MapGenerationConfig()
    cell = grid.get_cell_at(4, 4)
    current = [ClimateData() for _ in range(len(grid))]
    following = [ClimateData() for _ in range(len(grid))]
    evolve_climate(grid, cell, current, following, config)
    downwind = grid.neighbor(cell, config.wind_direction.opposite())
    upwind = grid.neighbor(cell, config.wind_direction)
    assert following[downwind.index].clouds > following[upwind.index].clouds
