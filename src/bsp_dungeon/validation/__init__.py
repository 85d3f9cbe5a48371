"""
Validation package for generated dungeon layouts.

Public API:
    - ValidationResult, ValidationIssue, Severity: Core result types
    - ValidationStage: Generation stage enumeration
    - ValidationError: Exception raised on FAIL issues when fail_fast=True
    - validate_layout / validate_exported_layout: Run all layout checks
    - validation_gate: Decorator validating a returned layout
"""

from .core import (
    Severity,
    ValidationStage,
    ValidationIssue,
    ValidationResult,
    ValidationError,
)
from .checks import validate_layout, validate_exported_layout
from .gates import validation_gate

__all__ = [
    # Core types
    'Severity',
    'ValidationStage',
    'ValidationIssue',
    'ValidationResult',
    'ValidationError',
    # Checks
    'validate_layout',
    'validate_exported_layout',
    # Decorator
    'validation_gate',
]
