"""In-memory registry of custom actions and the dispatcher behind their routes."""

import copy
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from .validator import validate

logger = logging.getLogger(__name__)

DEFAULT_HEADER_NAME = "x-api-key"
DEFAULT_AUTH_TYPE = "apiKey"
DEFAULT_ERROR_STRATEGIES = (
    "Parameter validation",
    "Type checking",
    "Required fields validation",
    "Error logging",
    "Detailed error responses",
)


@dataclass(frozen=True)
class ParameterSchema:
    """Declared parameters of an action."""

    properties: dict[str, Any] = field(default_factory=dict)
    required: tuple[str, ...] = ()
    response_properties: dict[str, Any] = field(default_factory=dict)
    summary: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ParameterSchema":
        """Build from a request body `parameters` object (deep-copied)."""
        return cls(
            properties=copy.deepcopy(data.get("properties") or {}),
            required=tuple(data.get("required") or ()),
            response_properties=copy.deepcopy(data.get("responseProperties") or {}),
            summary=data.get("summary"),
        )


@dataclass(frozen=True)
class AuthSpec:
    type: str = DEFAULT_AUTH_TYPE
    header_name: str = DEFAULT_HEADER_NAME

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "AuthSpec":
        data = data or {}
        return cls(
            type=data.get("type") or DEFAULT_AUTH_TYPE,
            header_name=data.get("headerName") or DEFAULT_HEADER_NAME,
        )

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "headerName": self.header_name}


@dataclass(frozen=True)
class ActionDescriptor:
    """Everything stored for one registered action."""

    name: str
    schema: ParameterSchema
    authentication: AuthSpec = field(default_factory=AuthSpec)
    error_strategies: tuple[str, ...] = DEFAULT_ERROR_STRATEGIES

    @property
    def path(self) -> str:
        return f"/{self.name}"

    def summary(self) -> dict[str, Any]:
        """Restated endpoint description for API responses."""
        return {
            "name": self.name,
            "path": self.path,
            "method": "POST",
            "parameters": {
                "properties": copy.deepcopy(self.schema.properties),
                "required": list(self.schema.required),
            },
            "authentication": self.authentication.to_dict(),
            "errorHandling": list(self.error_strategies),
        }


@dataclass
class ActionResponse:
    """Status code and JSON body produced by the core."""

    status_code: int
    body: dict[str, Any]
    violation: Optional[str] = None


class ActionRegistry:
    """
    Maps action names to descriptors for the lifetime of one app.

    Registering a name that already exists replaces the previous descriptor
    (last write wins) so an action can be redesigned without a restart.
    Each registration is a single dict assignment, so readers see either the
    old or the new descriptor, never a mix.
    """

    def __init__(self, expose_error_messages: bool = True):
        self._actions: dict[str, ActionDescriptor] = {}
        self.expose_error_messages = expose_error_messages

    def register(self, name: str, descriptor: ActionDescriptor) -> None:
        replaced = name in self._actions
        self._actions[name] = descriptor
        if replaced:
            logger.info(f"Replaced custom action {name}")
        else:
            logger.info(f"Registered custom action {name}")

    def lookup(self, name: str) -> Optional[ActionDescriptor]:
        return self._actions.get(name)

    def all(self) -> list[ActionDescriptor]:
        """Get all registered descriptors (returns copy)."""
        return list(self._actions.values())

    def __contains__(self, name: str) -> bool:
        return name in self._actions

    def __len__(self) -> int:
        return len(self._actions)

    def dispatch(self, name: str, payload: Any) -> ActionResponse:
        """Validate an invocation payload and build the echo response."""
        descriptor = self.lookup(name)
        if descriptor is None:
            return ActionResponse(404, {"error": f"Unknown action: {name}"})

        if not isinstance(payload, dict):
            return ActionResponse(
                400,
                {"error": "Request body must be a JSON object", "endpoint": name},
            )

        try:
            violation = validate(descriptor.schema, payload)
            if violation is not None:
                logger.info(f"Rejected call to {name}: {violation.message}")
                return ActionResponse(400, violation.to_body(), violation=violation.kind)

            return ActionResponse(
                200,
                {
                    "success": True,
                    "data": {
                        **payload,
                        "processedAt": datetime.now(timezone.utc).isoformat(),
                    },
                    "metadata": {
                        "endpoint": name,
                        "requestId": str(uuid.uuid4()),
                    },
                },
            )
        except Exception as e:
            logger.exception(f"Error handling call to {name}")
            return ActionResponse(
                500,
                {
                    "error": "Internal server error",
                    "endpoint": name,
                    "message": self.error_message(e),
                },
            )

    def error_message(self, exc: Exception) -> str:
        if self.expose_error_messages:
            return str(exc)
        return "An unexpected error occurred"
