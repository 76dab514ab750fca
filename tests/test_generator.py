import random

import pytest

from hexmapgen import (
    HexMapGenerator,
    InvalidGridSizeError,
    MapGenerationConfig,
    generate_map,
)
from hexmapgen.generator import resolve_seed

SCENARIO = MapGenerationConfig(
    seed=1,
    use_fixed_seed=True,
    land_percentage=50,
    water_level=3,
    elevation_min=-2,
    elevation_max=8,
    region_count=1,
    erosion_percentage=50,
    river_percentage=10,
)


def snapshot(grid):
    return [
        (
            cell.elevation,
            cell.water_level,
            cell.terrain_type_index,
            cell.plant_level,
            cell.has_incoming_river and cell.incoming_river,
            cell.has_outgoing_river and cell.outgoing_river,
            cell.map_data,
        )
        for cell in grid
    ]


def test_same_seed_same_map():
    first = generate_map(20, 15, SCENARIO)
    second = generate_map(20, 15, SCENARIO)
    assert first.report == second.report
    assert snapshot(first.grid) == snapshot(second.grid)


def test_reused_generator_matches_fresh_one():
    generator = HexMapGenerator(SCENARIO)
    generator.generate(20, 15)
    again = generator.generate(20, 15)
    fresh = generate_map(20, 15, SCENARIO)
    assert snapshot(again.grid) == snapshot(fresh.grid)


def test_report_accounts_for_budgets():
    generated = generate_map(20, 15, SCENARIO)
    report = generated.report
    assert report.seed == 1
    assert report.land_budget == 150
    assert report.land_cells + report.land_shortfall == report.land_budget
    assert report.river_budget == round(report.land_cells * 0.1)
    assert 0 <= report.river_shortfall <= report.river_budget


def test_generated_map_invariants():
    generated = generate_map(20, 15, SCENARIO)
    grid = generated.grid
    assert len(grid) == 300
    for cell in grid:
        assert SCENARIO.elevation_min <= cell.elevation <= SCENARIO.elevation_max
        assert 0 <= cell.terrain_type_index <= 4
        assert 0 <= cell.plant_level <= 3
        assert cell.search_phase == 0
        if cell.has_outgoing_river:
            target = grid.neighbor(cell, cell.outgoing_river)
            assert target.has_incoming_river
            assert target.incoming_river is cell.outgoing_river.opposite()
            assert cell.elevation >= target.elevation or cell.water_level == target.elevation
        for d, neighbor in grid.neighbors(cell):
            assert grid.neighbor(neighbor, d.opposite()) is cell


def test_different_seeds_differ():
    a = generate_map(20, 15, MapGenerationConfig(seed=1, use_fixed_seed=True))
    b = generate_map(20, 15, MapGenerationConfig(seed=2, use_fixed_seed=True))
    assert snapshot(a.grid) != snapshot(b.grid)


def test_global_random_state_untouched():
    random.seed(1234)
    state = random.getstate()
    generate_map(20, 15, SCENARIO)
    generate_map(20, 15, MapGenerationConfig())
    assert random.getstate() == state


def test_unfixed_seed_is_reported():
    generated = generate_map(20, 15, MapGenerationConfig(use_fixed_seed=False))
    seed = generated.report.seed
    assert 0 <= seed <= 0x7FFFFFFF
    replay = generate_map(20, 15, MapGenerationConfig(seed=seed, use_fixed_seed=True))
    assert snapshot(replay.grid) == snapshot(generated.grid), "Reported seed must reproduce the map"


def test_resolve_seed_masks_negative_values():
    assert resolve_seed(MapGenerationConfig(seed=-1, use_fixed_seed=True)) == 0x7FFFFFFF


def test_oversized_borders_do_not_crash():
    config = MapGenerationConfig(
        seed=9,
        use_fixed_seed=True,
        region_count=4,
        map_border_x=10,
        map_border_z=10,
        region_border=10,
        land_percentage=20,
    )
    generated = generate_map(20, 15, config)
    assert len(generated.grid) == 300


@pytest.mark.parametrize("region_count", [2, 3, 4])
def test_multiple_regions(region_count):
    config = MapGenerationConfig(
        seed=3, use_fixed_seed=True, region_count=region_count, region_border=2, land_percentage=35
    )
    generated = generate_map(40, 30, config)
    report = generated.report
    assert report.land_cells + report.land_shortfall == report.land_budget


def test_invalid_size():
    with pytest.raises(InvalidGridSizeError):
        generate_map(21, 15, SCENARIO)
