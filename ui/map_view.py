import math
import dearpygui.dearpygui as dpg

from hexmapgen.grid import OUTER_RADIUS, HexGrid
from hexmapgen.hex import HexCell

# Pixels per world unit at zoom 1.
PIXEL_SCALE = 1.5
MIN_ZOOM = 0.2
MAX_ZOOM = 4.0

TERRAIN_COLORS = {
    0: (237, 201, 175, 255),  # sand
    1: (110, 205, 88, 255),   # grass
    2: (139, 115, 85, 255),   # mud
    3: (139, 137, 137, 255),  # stone
    4: (235, 235, 240, 255),  # snow
}
WATER_COLOR = (65, 105, 225, 160)
RIVER_COLOR = (30, 60, 200, 255)
OUTLINE_COLOR = (0, 0, 0, 255)

# (layer name, hotkey); order matches the layer buttons.
LAYERS = (
    ("terrain", dpg.mvKey_F1),
    ("elevation", dpg.mvKey_F2),
    ("map data", dpg.mvKey_F3),
)

# Pointy-top hexes: the first corner sits straight up.
angles = [math.radians(90 - 60 * i) for i in range(6)]


def cell_to_pixel(grid: HexGrid, cell: HexCell, scale=PIXEL_SCALE):
    x, z = grid.position(cell)
    # World z grows northward, screen y grows downward.
    return x * scale, (grid.height * OUTER_RADIUS * 1.5 - z) * scale


def hex_corners(x, y, size):
    return [(x + size * math.cos(a), y - size * math.sin(a)) for a in angles]


class Camera:
    """Screen transform for the map canvas: an offset plus a zoom factor."""

    def __init__(self, offset=(20.0, 20.0), zoom=1.0):
        self.offset = offset
        self.zoom = zoom

    def apply(self, pos):
        return (
            pos[0] * self.zoom + self.offset[0],
            pos[1] * self.zoom + self.offset[1],
        )

    def pan(self, dx, dy):
        self.offset = (self.offset[0] + dx, self.offset[1] + dy)

    def change_zoom(self, delta, pivot):
        """Zoom by ``delta`` while keeping the screen point ``pivot`` in place."""
        previous = self.zoom
        self.zoom = max(MIN_ZOOM, min(MAX_ZOOM, self.zoom + delta))
        ratio = self.zoom / previous
        self.offset = tuple(p - ratio * (p - o) for p, o in zip(pivot, self.offset))


class MapView:
    """DearPyGui window that draws a generated hex grid one layer at a time."""

    def __init__(self, grid, size=(800, 600), *, elevation_range=(-4, 10)):
        self.grid = grid
        self.size = size
        self.elevation_range = elevation_range
        self.camera = Camera()
        self.layer = LAYERS[0][0]

        width, height = size
        dpg.create_context()
        dpg.create_viewport(title="Map Preview", width=width, height=height)
        with dpg.window(tag="_map_window", width=width, height=height, no_move=True, no_resize=True, no_title_bar=True):
            self.canvas = dpg.add_drawlist(width=width, height=height, tag="_canvas")
        with dpg.window(tag="_layer_window", pos=(width - 140, 10), width=130, height=110, no_resize=True, no_move=True, no_title_bar=True):
            dpg.add_text("Layers")
            for i, (name, _) in enumerate(LAYERS):
                dpg.add_button(label=f"{name.title()} (F{i + 1})", callback=self._select_layer, user_data=name)
        dpg.set_primary_window("_map_window", True)
        with dpg.handler_registry():
            dpg.add_mouse_drag_handler(button=dpg.mvMouseButton_Middle, callback=self._on_drag)
            dpg.add_mouse_wheel_handler(callback=self._on_scroll)
            dpg.add_key_press_handler(callback=self._on_key)
        dpg.setup_dearpygui()
        dpg.show_viewport()

    def set_grid(self, grid):
        self.grid = grid

    def _on_drag(self, sender, app_data):
        self.camera.pan(app_data[1], app_data[2])

    def _on_scroll(self, sender, app_data):
        self.camera.change_zoom(app_data * 0.1, dpg.get_mouse_pos())

    def _on_key(self, sender, app_data):
        names = [name for name, _ in LAYERS]
        if app_data == dpg.mvKey_Tab:
            self.layer = names[(names.index(self.layer) + 1) % len(names)]
            return
        for name, key in LAYERS:
            if app_data == key:
                self.layer = name

    def _select_layer(self, sender, app_data, user_data):
        self.layer = user_data

    def cell_color(self, cell):
        if self.layer == "terrain":
            color = terrain_color(cell.terrain_type_index)
            return blend(color, WATER_COLOR) if cell.is_underwater else color
        if self.layer == "elevation":
            lo, hi = self.elevation_range
            return grayscale_color((cell.elevation - lo) / float(hi - lo))
        return grayscale_color(cell.map_data)

    def draw_cell(self, cell):
        x, y = self.camera.apply(cell_to_pixel(self.grid, cell))
        corners = hex_corners(x, y, OUTER_RADIUS * PIXEL_SCALE * self.camera.zoom)
        dpg.draw_polygon(corners + corners[:1], color=OUTLINE_COLOR, fill=self.cell_color(cell), parent=self.canvas)

    def draw_river_edges(self):
        for cell in self.grid:
            if not cell.has_outgoing_river:
                continue
            downstream = self.grid.neighbor(cell, cell.outgoing_river)
            start = self.camera.apply(cell_to_pixel(self.grid, cell))
            end = self.camera.apply(cell_to_pixel(self.grid, downstream))
            dpg.draw_line(start, end, color=RIVER_COLOR, thickness=3, parent=self.canvas)

    def redraw(self):
        dpg.delete_item(self.canvas, children_only=True)
        for cell in self.grid:
            self.draw_cell(cell)
        self.draw_river_edges()

    def run(self):
        while dpg.is_dearpygui_running():
            self.redraw()
            dpg.render_dearpygui_frame()
        dpg.destroy_context()


def terrain_color(index):
    return TERRAIN_COLORS.get(index, (200, 200, 200, 255))


def blend(base, overlay):
    alpha = overlay[3] / 255.0
    return tuple(int(b * (1 - alpha) + o * alpha) for b, o in zip(base[:3], overlay[:3])) + (255,)


def grayscale_color(value):
    shade = int(max(0.0, min(1.0, value)) * 255)
    return (shade, shade, shade, 255)


if __name__ == "__main__":
    from hexmapgen import generate_map

    MapView(generate_map(40, 30).grid).run()
