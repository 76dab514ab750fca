"""Map generator setup interface with real-time preview."""

from __future__ import annotations

import dearpygui.dearpygui as dpg

from hexmapgen import MapGenerationConfig, adjust_config, generate_map
from hexmapgen.settings import CONFIG_RANGES
from ui.map_view import MapView

# (tag, label) pairs, one slider each. Slider bounds come from CONFIG_RANGES.
INT_SLIDERS = [
    ("seed", "Seed"),
    ("land_percentage", "Land %"),
    ("water_level", "Water Level"),
    ("elevation_min", "Elevation Min"),
    ("elevation_max", "Elevation Max"),
    ("region_count", "Regions"),
    ("erosion_percentage", "Erosion %"),
    ("river_percentage", "River %"),
]
FLOAT_SLIDERS = [
    ("sink_probability", "Sink Chance"),
    ("highrise_probability", "Highrise Chance"),
    ("starting_moisture", "Start Moisture"),
    ("wind_strength", "Wind Strength"),
    ("extra_lake_probability", "Extra Lakes"),
    ("temperature_jitter", "Temp Jitter"),
]


class GeneratorSetupUI:
    """UI allowing the user to tweak generation settings."""

    def __init__(
        self, width: int = 40, height: int = 30, config: MapGenerationConfig | None = None
    ) -> None:
        self.width = width
        self.height = height
        # Sliders edit the seed directly, so it must be used as given.
        self.config = adjust_config(config or MapGenerationConfig(), use_fixed_seed=True)
        self.generated = generate_map(width, height, self.config)
        # Use MapView to initialize DearPyGui context and viewport
        self.view = MapView(self.generated.grid, size=(1000, 700))
        self.result: MapGenerationConfig | None = None

        with dpg.window(label="Generator Setup", pos=(10, 10), width=280, height=420):
            for tag, label in INT_SLIDERS:
                lo, hi = CONFIG_RANGES[tag]
                dpg.add_slider_int(
                    label=label,
                    tag=tag,
                    min_value=lo,
                    max_value=min(hi, 99999),
                    default_value=getattr(self.config, tag),
                    callback=self._update_map,
                )
            for tag, label in FLOAT_SLIDERS:
                lo, hi = CONFIG_RANGES[tag]
                dpg.add_slider_float(
                    label=label,
                    tag=tag,
                    min_value=lo,
                    max_value=hi,
                    default_value=getattr(self.config, tag),
                    callback=self._update_map,
                )
            dpg.add_text("", tag="_report")
            dpg.add_button(label="Confirm", callback=self._confirm)
        self._show_report()

    def _update_map(self, sender, app_data):
        """Regenerate the map when any slider changes."""
        values = {tag: dpg.get_value(tag) for tag, _ in INT_SLIDERS}
        values.update({tag: float(dpg.get_value(tag)) for tag, _ in FLOAT_SLIDERS})
        self.config = adjust_config(self.config, **values)
        self.generated = generate_map(self.width, self.height, self.config)
        self.view.set_grid(self.generated.grid)
        self._show_report()

    def _show_report(self):
        report = self.generated.report
        dpg.set_value(
            "_report",
            f"land {report.land_cells}/{report.land_budget}  rivers {report.rivers}",
        )

    def _confirm(self, sender, app_data):
        self.result = self.config
        dpg.stop_dearpygui()

    def mainloop(self) -> MapGenerationConfig | None:
        while dpg.is_dearpygui_running():
            self.view.redraw()
            dpg.render_dearpygui_frame()
        dpg.destroy_context()
        return self.result


def choose_config(
    width: int = 40, height: int = 30, config: MapGenerationConfig | None = None
) -> MapGenerationConfig | None:
    """Open the setup window starting from ``config`` and return the confirmed settings."""
    ui = GeneratorSetupUI(width, height, config)
    return ui.mainloop()


if __name__ == "__main__":
    config = choose_config()
    if config:
        print(config)
