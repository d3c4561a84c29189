"""
Content validation engine.

Exports:
  - ActivityKind: closed enumeration of kinds with a payload schema
  - validate, ValidationResult: payload gate used before persistence
"""

from planner_mcp.core.validation.activity_kinds import ActivityKind
from planner_mcp.core.validation.validator import ValidationResult, validate

__all__ = ["ActivityKind", "ValidationResult", "validate"]
