"""
Validation check modules.

- layout_checks: room containment and overlap, bounds, corridor geometry, leaf sizes
"""

from .layout_checks import (
    check_rectangle_orientation,
    check_room_containment,
    check_room_overlap,
    check_within_bounds,
    check_corridor_width,
    check_corridor_bridges,
    check_missing_corridors,
    check_oversized_leaves,
    corridor_bridges,
    validate_layout,
    validate_exported_layout,
)

__all__ = [
    'check_rectangle_orientation',
    'check_room_containment',
    'check_room_overlap',
    'check_within_bounds',
    'check_corridor_width',
    'check_corridor_bridges',
    'check_missing_corridors',
    'check_oversized_leaves',
    'corridor_bridges',
    'validate_layout',
    'validate_exported_layout',
]
