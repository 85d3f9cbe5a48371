import dataclasses
import gc

import pytest

from bsp_dungeon.generators.bsp import (
    DungeonLayout,
    DungeonSettings,
    NodeKind,
    Rectangle,
    TreeNode,
    generate,
)
from bsp_dungeon.validation import (
    Severity,
    ValidationError,
    ValidationIssue,
    ValidationResult,
    ValidationStage,
    validate_exported_layout,
    validate_layout,
    validation_gate,
)
from bsp_dungeon.validation.checks import check_rectangle_orientation, corridor_bridges
from bsp_dungeon.validation.rules import LAYOUT_003, LAYOUT_007
from tests.helpers import build_stacked_layout, furnish


def test_stacked_layout_is_clean() -> None:
    layout, _ = build_stacked_layout()
    result = validate_layout(layout)
    assert result.passed
    assert result.issues == []


def test_generated_layout_has_no_failures(layout: DungeonLayout) -> None:
    result = validate_layout(layout)
    assert result.passed
    assert set(result.codes()) <= {'LAYOUT-007', 'LAYOUT-009'}


def test_room_outside_partition_fails() -> None:
    layout, stacked = build_stacked_layout()
    stacked.left.room.bounds = Rectangle.from_bounds(1, 1, 12, 9)
    result = validate_layout(layout)
    assert result.failed
    assert 'LAYOUT-002' in result.codes()


def test_overlapping_rooms_fail() -> None:
    layout, stacked = build_stacked_layout()
    stacked.right.room.bounds = Rectangle.from_bounds(2, 2, 8, 8)
    result = validate_layout(layout)
    assert 'LAYOUT-003' in result.codes()


def test_touching_rooms_do_not_overlap() -> None:
    layout, stacked = build_stacked_layout()
    stacked.left.room.bounds = Rectangle.from_bounds(1, 1, 10, 9)
    stacked.right.room.bounds = Rectangle.from_bounds(10, 1, 19, 8)
    assert 'LAYOUT-003' not in validate_layout(layout).codes()


def test_rectangle_outside_dungeon_fails() -> None:
    layout, _ = build_stacked_layout()
    layout.corridors[0].bounds = Rectangle.from_bounds(15, 3, 25, 5)
    result = validate_layout(layout)
    assert 'LAYOUT-004' in result.codes()


def test_corridor_width_mismatch_fails() -> None:
    layout, _ = build_stacked_layout(corridor_width=3)
    result = validate_layout(layout)
    assert result.codes().count('LAYOUT-005') == 2


def test_shifted_corridor_does_not_bridge() -> None:
    layout, _ = build_stacked_layout()
    layout.corridors[1].bounds = Rectangle.from_bounds(13, 9, 15, 12)
    result = validate_layout(layout)
    assert result.codes() == ['LAYOUT-006']


def test_missing_corridor_is_only_a_warning() -> None:
    layout, _ = build_stacked_layout(right_room=(11, 1, 13, 8))
    result = validate_layout(layout)
    assert result.passed
    assert result.codes() == ['LAYOUT-007']
    assert result.warnings[0].severity == Severity.WARN
    assert "1 of 2" in result.warnings[0].message


def test_corridor_bridges_both_axes() -> None:
    anchor = Rectangle.from_bounds(0, 0, 10, 10)
    above = Rectangle.from_bounds(0, 14, 10, 20)
    assert corridor_bridges(Rectangle.from_bounds(3, 10, 5, 14), anchor, above, is_vertical=True)
    assert not corridor_bridges(Rectangle.from_bounds(9, 10, 11, 14), anchor, above, is_vertical=True)

    right = Rectangle.from_bounds(12, 2, 20, 8)
    assert corridor_bridges(Rectangle.from_bounds(10, 3, 12, 5), anchor, right, is_vertical=False)
    assert not corridor_bridges(Rectangle.from_bounds(10, 3, 13, 5), anchor, right, is_vertical=False)


def test_inverted_corner_pair_is_reported() -> None:
    assert check_rectangle_orientation((0, 0), (5, 5)) == []
    (issue,) = check_rectangle_orientation((6, 0), (5, 5), location="room 0")
    assert issue.code == 'LAYOUT-001'
    assert issue.location == "room 0"


def test_exported_layout_orientation() -> None:
    good = {'x': 0, 'y': 0}
    data = {
        'rooms': [{'corners': {'bottom_left': good, 'top_right': {'x': 4, 'y': 4}}}],
        'corridors': [{'corners': {'bottom_left': {'x': 4, 'y': 9}, 'top_right': {'x': 6, 'y': 3}}}],
    }
    result = validate_exported_layout(data)
    assert result.stage == ValidationStage.EXPORT
    assert result.codes() == ['LAYOUT-001']
    assert result.issues[0].location == "corridor 0"


def test_rule_fills_templates() -> None:
    issue = LAYOUT_007.issue(missing=2, splits=5)
    assert issue.message == "2 of 5 split(s) have no corridor"
    assert issue.remediation is not None
    assert LAYOUT_003.format_remediation(first=0, second=1) is None


def test_result_report_and_dict() -> None:
    result = ValidationResult(stage=ValidationStage.CORRIDORS)
    assert result.report() == "Layout validation PASSED [corridors]: 0 failure(s), 0 warning(s), 0 note(s)"

    result.add_issue(ValidationIssue(Severity.INFO, 'LAYOUT-009', 'room to split'))
    result.add_issue(ValidationIssue(Severity.FAIL, 'LAYOUT-005', 'too wide', location='corridor 1'))
    lines = result.report().splitlines()
    assert lines == [
        "Layout validation FAILED [corridors]: 1 failure(s), 0 warning(s), 1 note(s)",
        "[FAIL] LAYOUT-005 @corridor 1: too wide",
        "[INFO] LAYOUT-009: room to split",
    ]

    data = result.to_dict()
    assert data['passed'] is False
    assert data['counts'] == {'info': 1, 'warn': 0, 'fail': 1}
    assert data['stage'] == 'corridors'
    assert data['issues'][0]['severity'] == 'INFO'


def test_merge_keeps_issue_order() -> None:
    first = ValidationResult([ValidationIssue(Severity.WARN, 'A', 'a')])
    second = ValidationResult([ValidationIssue(Severity.WARN, 'B', 'b')])
    assert first.merge(second).codes() == ['A', 'B']
    assert first.passed


def test_validation_gate_raises_on_failure() -> None:
    @validation_gate()
    def build_broken() -> DungeonLayout:
        layout, stacked = build_stacked_layout()
        stacked.right.room.bounds = Rectangle.from_bounds(2, 2, 8, 8)
        return layout

    with pytest.raises(ValidationError) as excinfo:
        build_broken()
    assert excinfo.value.result.failed
    assert "LAYOUT-003" in str(excinfo.value)


def test_validation_gate_passes_layout_through() -> None:
    @validation_gate(fail_fast=False)
    def build() -> DungeonLayout:
        layout, _ = build_stacked_layout(right_room=(11, 1, 13, 8))
        return layout

    layout = build()
    assert len(layout.corridors) == 1


def test_room_without_leaf_is_reported() -> None:
    layout, _ = build_stacked_layout()
    orphan = furnish(TreeNode(NodeKind.PARTITION, Rectangle.from_bounds(4, 2, 8, 8)), 4, 4, 6, 6)
    gc.collect()
    assert orphan.parent is None

    layout.rooms.append(orphan)
    result = validate_layout(layout)
    assert result.failed
    assert result.codes() == ['LAYOUT-008']
    assert result.errors[0].location == "room 3"


def test_oversized_leaves_are_notes() -> None:
    layout, _ = build_stacked_layout()
    layout.settings = dataclasses.replace(layout.settings, room_width_min=5, room_length_min=5)
    result = validate_layout(layout)
    assert result.passed
    assert result.codes() == ['LAYOUT-009'] * 3
    assert all(issue.severity == Severity.INFO for issue in result.infos)


def test_unsplit_dungeon_gets_one_note(settings: DungeonSettings) -> None:
    layout = generate(dataclasses.replace(settings, max_iterations=0))
    result = validate_layout(layout)
    assert result.passed
    assert result.codes() == ['LAYOUT-009']
    assert "(0, 0)->(40, 40)" in result.infos[0].message
