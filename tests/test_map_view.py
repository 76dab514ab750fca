import pytest

pytest.importorskip("dearpygui.dearpygui")

from hexmapgen.grid import HexGrid
from ui.map_view import Camera, blend, cell_to_pixel, grayscale_color, hex_corners, terrain_color


def test_grayscale_color_clamps():
    assert grayscale_color(0.0) == (0, 0, 0, 255)
    assert grayscale_color(1.0) == (255, 255, 255, 255)
    assert grayscale_color(2.0) == (255, 255, 255, 255)
    assert grayscale_color(-1.0) == (0, 0, 0, 255)


def test_terrain_color_fallback():
    assert terrain_color(1) != terrain_color(99)
    assert terrain_color(99) == (200, 200, 200, 255)


def test_blend_opaque_overlay_wins():
    assert blend((0, 0, 0, 255), (10, 20, 30, 255)) == (10, 20, 30, 255)


def test_rows_stack_upward_on_screen():
    grid = HexGrid(5, 5)
    _, y0 = cell_to_pixel(grid, grid.get_cell_at(0, 0))
    _, y1 = cell_to_pixel(grid, grid.get_cell_at(0, 1))
    assert y1 < y0


def test_hex_corners():
    corners = hex_corners(0.0, 0.0, 10.0)
    assert len(corners) == 6
    assert corners[0] == pytest.approx((0.0, -10.0))


def test_camera_zoom_keeps_pivot_fixed():
    camera = Camera()
    before = camera.apply((100.0, 50.0))
    camera.change_zoom(0.5, before)
    assert camera.apply((100.0, 50.0)) == pytest.approx(before)
    assert camera.zoom == 1.5
