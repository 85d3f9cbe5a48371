"""
Validation rule definitions for generated layouts.

Each rule has:
- Code: Unique identifier (e.g., "LAYOUT-001")
- Severity: FAIL, WARN, or INFO
- Message template: Human-readable description
- Remediation: Suggested fix
"""

from dataclasses import dataclass
from typing import Optional

from .core import Severity, ValidationIssue


@dataclass(frozen=True)
class ValidationRule:
    """Definition of a validation rule.

    Attributes:
        code: Unique rule code (e.g., "LAYOUT-001")
        severity: Default severity for this rule
        message_template: Template for error message (use {placeholders})
        remediation_template: Template for suggested fix
        description: Full description of the rule
    """
    code: str
    severity: Severity
    message_template: str
    remediation_template: Optional[str] = None
    description: Optional[str] = None

    def format_message(self, **kwargs) -> str:
        return self.message_template.format(**kwargs)

    def format_remediation(self, **kwargs) -> Optional[str]:
        if self.remediation_template:
            return self.remediation_template.format(**kwargs)
        return None

    def issue(self, location: Optional[str] = None, **kwargs) -> ValidationIssue:
        """Create an issue for this rule, filling both templates from kwargs"""
        return ValidationIssue(
            severity=self.severity,
            code=self.code,
            message=self.format_message(**kwargs),
            remediation=self.format_remediation(**kwargs),
            location=location,
        )


LAYOUT_001 = ValidationRule(
    code="LAYOUT-001",
    severity=Severity.FAIL,
    message_template="Inverted rectangle: bottom-left {bottom_left} is above/right of top-right {top_right}",
    remediation_template="Check the coordinate arithmetic that produced this rectangle",
    description="Every rectangle must have bottom_left <= top_right on both axes",
)

LAYOUT_002 = ValidationRule(
    code="LAYOUT-002",
    severity=Severity.FAIL,
    message_template="Room {room} extends outside its partition {partition}",
    remediation_template="Reduce room_offset or the corner modifiers",
    description="A room must lie inside the leaf partition it was inscribed in",
)

LAYOUT_003 = ValidationRule(
    code="LAYOUT-003",
    severity=Severity.FAIL,
    message_template="Rooms {first} and {second} overlap",
    description="Rooms come from disjoint partitions and must never overlap",
)

LAYOUT_004 = ValidationRule(
    code="LAYOUT-004",
    severity=Severity.FAIL,
    message_template="{kind} {rect} lies outside the dungeon {width}x{length}",
    description="Every rectangle must stay inside the dungeon bounds",
)

LAYOUT_005 = ValidationRule(
    code="LAYOUT-005",
    severity=Severity.FAIL,
    message_template="Corridor {corridor} is {actual} wide, expected {expected}",
    remediation_template="Corridor thickness must equal corridor_width",
    description="Corridors have a fixed thickness across their free axis",
)

LAYOUT_006 = ValidationRule(
    code="LAYOUT-006",
    severity=Severity.FAIL,
    message_template="Corridor {corridor} does not bridge {anchor} and {target}",
    description="A corridor must start at its anchor edge, end at its target edge "
                "and lie within the overlap of both spans",
)

LAYOUT_007 = ValidationRule(
    code="LAYOUT-007",
    severity=Severity.WARN,
    message_template="{missing} of {splits} split(s) have no corridor",
    remediation_template="Increase room sizes or corner modifiers, or reduce corridor_width",
    description="Corridors that could not be placed leave parts of the dungeon disconnected",
)

LAYOUT_008 = ValidationRule(
    code="LAYOUT-008",
    severity=Severity.FAIL,
    message_template="Room {room} is not linked to a leaf partition",
    remediation_template="Validate the DungeonLayout itself; it keeps the partition tree alive",
    description="Containment can only be checked for rooms whose leaf partition is reachable",
)

LAYOUT_009 = ValidationRule(
    code="LAYOUT-009",
    severity=Severity.INFO,
    message_template="Partition {partition} could still be split; max_iterations ran out first",
    remediation_template="Raise max_iterations for smaller, more numerous rooms",
    description="Oversized leaves are accepted, the iteration budget bounds the work",
)
