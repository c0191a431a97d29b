"""Payload validation against a registered action's parameter schema."""

from dataclasses import dataclass, field
from typing import Any, Optional

MISSING_REQUIRED_PARAMETER = "missing_required_parameter"
TYPE_MISMATCH = "type_mismatch"
INVALID_ENUM_VALUE = "invalid_enum_value"


@dataclass(frozen=True)
class Violation:
    """A single reason a payload was rejected."""

    kind: str
    parameter: str
    message: str
    context: dict[str, Any] = field(default_factory=dict)

    def to_body(self) -> dict[str, Any]:
        """Render as a 400 response body."""
        return {"error": self.message, "parameter": self.parameter, **self.context}


def _matches_type(expected: str, value: Any) -> bool:
    if expected == "string":
        return isinstance(value, str)
    if expected == "number":
        # bool is an int subclass but not a JSON number
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return True


def _is_missing(value: Any) -> bool:
    """Absent, null, false, empty string, zero or NaN. Empty lists and objects are present."""
    if value is None or value is False or value == "":
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or value != value
    return False


def validate(schema, payload: dict[str, Any]) -> Optional[Violation]:
    """
    Check a payload against a ParameterSchema.

    Runs two passes and stops at the first violation:
    every required name must be present and non-empty, then every payload key
    with a declared property must match its type and enum. Keys without a
    declared property are accepted as-is.

    Returns None when the payload is acceptable.
    """
    for name in schema.required:
        if _is_missing(payload.get(name)):
            return Violation(
                kind=MISSING_REQUIRED_PARAMETER,
                parameter=name,
                message=f"Missing required parameter: {name}",
                context={"required": list(schema.required)},
            )

    for key, value in payload.items():
        spec = schema.properties.get(key)
        if not isinstance(spec, dict):
            continue

        expected = spec.get("type")
        if expected in ("string", "number") and not _matches_type(expected, value):
            return Violation(
                kind=TYPE_MISMATCH,
                parameter=key,
                message=f"Invalid type for parameter {key}: expected {expected}",
                context={"expected": expected},
            )

        allowed = spec.get("enum")
        if allowed is not None and value not in allowed:
            return Violation(
                kind=INVALID_ENUM_VALUE,
                parameter=key,
                message=f"Invalid value for parameter {key}",
                context={"allowed": list(allowed)},
            )

    return None
