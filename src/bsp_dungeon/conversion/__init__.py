"""
Conversion of generated layouts into other representations.

- layout_export: dictionaries / JSON for external level builders
- occupancy_grid: numpy cell grids and ASCII dumps for inspection
"""

from .layout_export import layout_to_dict, layout_to_json, rectangles_from_dict
from .occupancy_grid import CellType, build_occupancy_grid, floor_coverage, render_ascii

__all__ = [
    'layout_to_dict',
    'layout_to_json',
    'rectangles_from_dict',
    'CellType',
    'build_occupancy_grid',
    'floor_coverage',
    'render_ascii',
]
