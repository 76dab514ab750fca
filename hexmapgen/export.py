from __future__ import annotations

"""Utilities for exporting generated map data."""

from dataclasses import asdict
from pathlib import Path
import json
from typing import Optional

from .generator import GenerationReport
from .grid import HexGrid


def map_to_dict(grid: HexGrid, report: Optional[GenerationReport] = None) -> dict:
    data = {
        "width": grid.width,
        "height": grid.height,
        "cells": [cell.to_json() for cell in grid],
    }
    if report is not None:
        data["report"] = asdict(report)
    return data


def export_map_json(
    grid: HexGrid, path: str | Path, report: Optional[GenerationReport] = None
) -> None:
    """Export per-cell output attributes to a JSON file."""
    with open(Path(path), "w", encoding="utf-8") as f:
        json.dump(map_to_dict(grid, report), f, indent=2)


__all__ = ["export_map_json", "map_to_dict"]
