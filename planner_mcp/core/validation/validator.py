"""
Activity payload validation engine.

Decides whether an activity's body_data is acceptable for its declared kind
before anything is written to the content store. Validation is pure: no I/O,
same input always gives the same result.

Dependencies: pydantic, planner_mcp.core.validation
System role: Gatekeeper between tool arguments and the content store gateway
"""

from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from planner_mcp.core.validation.activity_kinds import ActivityKind
from planner_mcp.core.validation.body_schemas import (
    BODY_SCHEMAS,
    MAX_OPTION_TEXT_LENGTH,
    MAX_OPTIONS,
    MIN_OPTIONS,
)

CORRECT_OPTION_MESSAGE = "correctOptionId must match the id of one of the provided options"


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating one payload.

    Attributes:
        accepted: True when the payload may be persisted
        reason: Aggregated rejection reason (None when accepted)
        issues: Individual violated rules, in report order
    """

    accepted: bool
    reason: str | None = None
    issues: tuple[str, ...] = ()

    @classmethod
    def accept(cls) -> "ValidationResult":
        return cls(accepted=True)

    @classmethod
    def reject(cls, kind: str, issues: list[str]) -> "ValidationResult":
        reason = f"Invalid body_data for {kind}: " + "; ".join(issues)
        return cls(accepted=False, reason=reason, issues=tuple(issues))


def validate(kind: str | ActivityKind, payload: Any) -> ValidationResult:
    """
    Validate an activity payload against its kind's schema.

    Unknown kinds pass through unchecked. For known kinds every violated
    rule is collected, not just the first one.

    Args:
        kind: Declared activity kind (enum member or raw string)
        payload: Untyped body_data as received from the caller

    Returns:
        ValidationResult: accepted, or rejected with an aggregated reason
    """
    activity_kind = ActivityKind.parse(kind)
    if activity_kind is None:
        return ValidationResult.accept()

    schema = BODY_SCHEMAS[activity_kind]
    try:
        schema.model_validate(payload)
    except ValidationError as e:
        issues = [_describe(error) for error in e.errors()]
        if activity_kind is ActivityKind.MULTIPLE_CHOICE_QUESTION:
            issues.extend(_correct_option_issues(payload))
        return ValidationResult.reject(activity_kind.value, list(dict.fromkeys(issues)))
    return ValidationResult.accept()


def _correct_option_issues(payload: Any) -> list[str]:
    """
    Evaluate correctOptionId membership on the raw payload.

    The typed model only runs this check once every field is valid, so it is
    repeated here to report it alongside structural errors.
    """
    if not isinstance(payload, dict):
        return []
    options = payload.get("options")
    correct_id = payload.get("correctOptionId")
    if not isinstance(options, list) or not isinstance(correct_id, str) or not correct_id.strip():
        return []
    option_ids = {
        option.get("id") for option in options if isinstance(option, dict)
    }
    if correct_id in option_ids:
        return []
    return [CORRECT_OPTION_MESSAGE]


def _describe(error: dict) -> str:
    """Turn one pydantic error into a human-readable rule violation."""
    loc = error.get("loc", ())
    path = _format_path(loc)
    error_type = error.get("type")

    if error_type in ("missing", "blank_string", "string_too_short"):
        return f"{path} is required"
    if error_type == "string_type":
        return f"{path} must be a string"
    if error_type == "too_short" and loc == ("options",):
        return f"At least {MIN_OPTIONS} options are required"
    if error_type == "too_long" and loc == ("options",):
        return f"At most {MAX_OPTIONS} options are allowed"
    if error_type == "string_too_long":
        return f"{path} must be {MAX_OPTION_TEXT_LENGTH} characters or fewer"
    if error_type == "list_type":
        return f"{path} must be a list"
    if error_type in ("model_type", "model_attributes_type", "dict_type"):
        return f"{path} must be an object"
    if error_type == "unknown_correct_option":
        return CORRECT_OPTION_MESSAGE
    return f"{path}: {error.get('msg')}"


def _format_path(loc: tuple) -> str:
    if not loc:
        return "body_data"
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path
