"""
Core data structures for layout validation.

- Severity: how much an issue matters (INFO, WARN, FAIL)
- ValidationStage: generation step a result belongs to
- ValidationIssue: one finding, tied to a rule code
- ValidationResult: findings of one validation run
- ValidationError: raised when a run has FAIL findings and the caller asked to stop
"""

from dataclasses import asdict, dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional


class Severity(Enum):
    """Issue severity, ordered from least to most serious.

    - INFO: a note about the layout, e.g. a partition left oversized
    - WARN: the layout is usable but incomplete
    - FAIL: a geometric invariant is broken
    """
    INFO = auto()
    WARN = auto()
    FAIL = auto()

    def __str__(self) -> str:
        return self.name


class ValidationStage(Enum):
    """Generation steps a check can be attributed to."""
    PARTITION = "partition"
    ROOMS = "rooms"
    CORRIDORS = "corridors"
    EXPORT = "export"

    def __str__(self) -> str:
        return self.value


@dataclass
class ValidationIssue:
    """A single finding.

    Attributes:
        severity: Issue severity
        code: Rule code (e.g., "LAYOUT-003")
        message: Human-readable description
        remediation: Optional suggested fix
        location: Optional element reference ("room 2", "corridor 0", ...)
    """
    severity: Severity
    code: str
    message: str
    remediation: Optional[str] = None
    location: Optional[str] = None

    def format(self) -> str:
        """One-line form: ``[SEVERITY] CODE @location: message (fix: remediation)``"""
        where = f" @{self.location}" if self.location else ""
        fix = f" (fix: {self.remediation})" if self.remediation else ""
        return f"[{self.severity}] {self.code}{where}: {self.message}{fix}"

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['severity'] = str(self.severity)
        return data

    def __str__(self) -> str:
        return self.format()


@dataclass
class ValidationResult:
    """Findings of one validation run.

    The run passes as long as no FAIL issue was recorded.
    """
    issues: List[ValidationIssue] = field(default_factory=list)
    stage: Optional[ValidationStage] = None

    def by_severity(self, severity: Severity) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity is severity]

    @property
    def errors(self) -> List[ValidationIssue]:
        return self.by_severity(Severity.FAIL)

    @property
    def warnings(self) -> List[ValidationIssue]:
        return self.by_severity(Severity.WARN)

    @property
    def infos(self) -> List[ValidationIssue]:
        return self.by_severity(Severity.INFO)

    @property
    def passed(self) -> bool:
        return not self.errors

    @property
    def failed(self) -> bool:
        return not self.passed

    def add_issue(self, issue: ValidationIssue) -> None:
        self.issues.append(issue)

    def extend(self, issues: List[ValidationIssue]) -> 'ValidationResult':
        self.issues.extend(issues)
        return self

    def merge(self, other: 'ValidationResult') -> 'ValidationResult':
        """Append the issues of another run; returns self for chaining"""
        return self.extend(other.issues)

    def codes(self) -> List[str]:
        """Rule codes of all issues, in the order they were found"""
        return [issue.code for issue in self.issues]

    def summary(self) -> str:
        status = "PASSED" if self.passed else "FAILED"
        stage = f" [{self.stage}]" if self.stage else ""
        return (f"Layout validation {status}{stage}: {len(self.errors)} failure(s), "
                f"{len(self.warnings)} warning(s), {len(self.infos)} note(s)")

    def report(self) -> str:
        """
        Summary line followed by one line per issue, most serious first.

        Issues of equal severity keep the order they were found in.
        """
        ordered = sorted(self.issues, key=lambda issue: issue.severity.value, reverse=True)
        return '\n'.join([self.summary()] + [issue.format() for issue in ordered])

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable form, with per-severity counts"""
        return {
            'passed': self.passed,
            'stage': str(self.stage) if self.stage else None,
            'counts': {severity.name.lower(): len(self.by_severity(severity)) for severity in Severity},
            'issues': [issue.to_dict() for issue in self.issues],
        }


class ValidationError(Exception):
    """Raised when a validation run has FAIL issues.

    Attributes:
        result: The failing ValidationResult
    """

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.report())
