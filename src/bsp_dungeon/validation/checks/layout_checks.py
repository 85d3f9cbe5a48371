"""
Layout validation checks.

Validates generated dungeon layouts:
- Rectangle orientation in exported data (LAYOUT-001)
- Room containment in its partition (LAYOUT-002)
- Room overlap (LAYOUT-003)
- Dungeon bounds (LAYOUT-004)
- Corridor thickness (LAYOUT-005)
- Corridor bridging its endpoints (LAYOUT-006)
- Missing corridors (LAYOUT-007)
- Rooms detached from their partition (LAYOUT-008)
- Oversized leaves left by the iteration budget (LAYOUT-009)
"""

from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from ...generators.bsp.dungeon_generator import DungeonLayout
from ...generators.bsp.geometry import Rectangle
from ..core import ValidationIssue, ValidationResult, ValidationStage
from ..rules import (
    LAYOUT_001,
    LAYOUT_002,
    LAYOUT_003,
    LAYOUT_004,
    LAYOUT_005,
    LAYOUT_006,
    LAYOUT_007,
    LAYOUT_008,
    LAYOUT_009,
)


def _fmt(rect: Rectangle) -> str:
    return f"{rect.bottom_left.as_tuple()}->{rect.top_right.as_tuple()}"


def check_rectangle_orientation(bottom_left: Sequence[int], top_right: Sequence[int],
                                location: Optional[str] = None) -> List[ValidationIssue]:
    """Check raw corner coordinates for inversion on either axis."""
    if bottom_left[0] <= top_right[0] and bottom_left[1] <= top_right[1]:
        return []
    return [LAYOUT_001.issue(location=location, bottom_left=tuple(bottom_left),
                             top_right=tuple(top_right))]


def check_room_containment(layout: DungeonLayout) -> List[ValidationIssue]:
    """Every room must lie inside the leaf partition it was inscribed in."""
    issues = []
    for i, room in enumerate(layout.rooms):
        leaf = room.parent
        if leaf is None:
            issues.append(LAYOUT_008.issue(location=f"room {i}", room=_fmt(room.bounds)))
            continue
        if not leaf.bounds.contains(room.bounds):
            issues.append(LAYOUT_002.issue(location=f"room {i}", room=_fmt(room.bounds),
                                           partition=_fmt(leaf.bounds)))
    return issues


def _bounds_array(rects: List[Rectangle]) -> np.ndarray:
    return np.array([[r.x1, r.y1, r.x2, r.y2] for r in rects], dtype=np.int64).reshape(-1, 4)


def check_room_overlap(layout: DungeonLayout) -> List[ValidationIssue]:
    """No two rooms may share interior area; touching edges are allowed."""
    boxes = _bounds_array([room.bounds for room in layout.rooms])
    if len(boxes) < 2:
        return []

    x1, y1, x2, y2 = (boxes[:, i] for i in range(4))
    overlap = ((x1[:, None] < x2[None, :]) & (x1[None, :] < x2[:, None]) &
               (y1[:, None] < y2[None, :]) & (y1[None, :] < y2[:, None]))
    # Each pair once, ignore self
    overlap = np.triu(overlap, k=1)

    issues = []
    for first, second in zip(*np.nonzero(overlap)):
        issues.append(LAYOUT_003.issue(location=f"rooms {first},{second}",
                                       first=int(first), second=int(second)))
    return issues


def check_within_bounds(layout: DungeonLayout) -> List[ValidationIssue]:
    """Rooms and corridors must stay inside the dungeon rectangle."""
    settings = layout.settings
    dungeon = Rectangle.from_size(settings.dungeon_width, settings.dungeon_length)
    issues = []
    for kind, nodes in (('Room', layout.rooms), ('Corridor', layout.corridors)):
        for i, node in enumerate(nodes):
            if not dungeon.contains(node.bounds):
                issues.append(LAYOUT_004.issue(location=f"{kind.lower()} {i}", kind=kind,
                                               rect=_fmt(node.bounds),
                                               width=settings.dungeon_width,
                                               length=settings.dungeon_length))
    return issues


def check_corridor_width(layout: DungeonLayout) -> List[ValidationIssue]:
    """Corridor thickness across the free axis equals corridor_width."""
    expected = layout.settings.corridor_width
    issues = []
    for i, corridor in enumerate(layout.corridors):
        actual = corridor.width if corridor.is_vertical else corridor.length
        if actual != expected:
            issues.append(LAYOUT_005.issue(location=f"corridor {i}", corridor=_fmt(corridor.bounds),
                                           actual=actual, expected=expected))
    return issues


def corridor_bridges(corridor_rect: Rectangle, anchor: Rectangle, target: Rectangle,
                     is_vertical: bool) -> bool:
    """
    Check that a corridor runs from the anchor's far edge to the target's
    near edge and sits inside the overlap of both spans.
    """
    if is_vertical:
        return (corridor_rect.y1 == anchor.y2 and corridor_rect.y2 == target.y1 and
                max(anchor.x1, target.x1) <= corridor_rect.x1 and
                corridor_rect.x2 <= min(anchor.x2, target.x2))
    return (corridor_rect.x1 == anchor.x2 and corridor_rect.x2 == target.x1 and
            max(anchor.y1, target.y1) <= corridor_rect.y1 and
            corridor_rect.y2 <= min(anchor.y2, target.y2))


def check_corridor_bridges(layout: DungeonLayout) -> List[ValidationIssue]:
    issues = []
    for i, corridor in enumerate(layout.corridors):
        anchor, target = corridor.anchor_bounds, corridor.target_bounds
        if anchor is None or target is None or not corridor_bridges(
                corridor.bounds, anchor, target, corridor.is_vertical):
            issues.append(LAYOUT_006.issue(
                location=f"corridor {i}", corridor=_fmt(corridor.bounds),
                anchor=_fmt(anchor) if anchor else None,
                target=_fmt(target) if target else None))
    return issues


def check_missing_corridors(layout: DungeonLayout) -> List[ValidationIssue]:
    splits = len(layout.tree.internal_nodes())
    missing = splits - len(layout.corridors)
    if missing <= 0:
        return []
    return [LAYOUT_007.issue(missing=missing, splits=splits)]


def check_oversized_leaves(layout: DungeonLayout) -> List[ValidationIssue]:
    """Note leaves the partitioner would still have split given more iterations."""
    settings = layout.settings
    issues = []
    for i, leaf in enumerate(layout.tree.leaves()):
        if (leaf.width >= settings.room_width_min * 2 or
                leaf.length >= settings.room_length_min * 2):
            issues.append(LAYOUT_009.issue(location=f"leaf {i}", partition=_fmt(leaf.bounds)))
    return issues


def validate_layout(layout: DungeonLayout) -> ValidationResult:
    """
    Run every layout check.

    Args:
        layout: Generated dungeon layout

    Returns:
        ValidationResult with all issues found
    """
    result = ValidationResult()
    result.extend(check_room_containment(layout))
    result.extend(check_room_overlap(layout))
    result.extend(check_within_bounds(layout))
    result.extend(check_corridor_width(layout))
    result.extend(check_corridor_bridges(layout))
    result.extend(check_missing_corridors(layout))
    result.extend(check_oversized_leaves(layout))
    return result


def validate_exported_layout(data: Dict[str, Any]) -> ValidationResult:
    """
    Check exported layout data (see conversion.layout_export) for inverted
    rectangles before it is handed to another tool.
    """
    result = ValidationResult(stage=ValidationStage.EXPORT)
    for section in ('rooms', 'corridors'):
        for i, entry in enumerate(data.get(section, [])):
            corners = entry['corners']
            bottom_left = (corners['bottom_left']['x'], corners['bottom_left']['y'])
            top_right = (corners['top_right']['x'], corners['top_right']['y'])
            result.extend(check_rectangle_orientation(bottom_left, top_right,
                                                      location=f"{section[:-1]} {i}"))
    return result
