"""Handler for designCustomActions: validate, register, document."""

import logging
import re
from typing import Any, Iterable, Optional

from .registry import ActionDescriptor, ActionRegistry, ActionResponse, AuthSpec, ParameterSchema
from .spec import synthesize_descriptor

logger = logging.getLogger(__name__)

# One URL path segment; "." and ".." are normalised away by clients
ACTION_NAME_PATTERN = re.compile(r"^(?!\.{1,2}$)[A-Za-z0-9._~-]+$")
REQUIRED_FIELDS = ["actionName", "parameters"]


def schema_problem(parameters: Any) -> Optional[str]:
    """Describe why a `parameters` object cannot be enforced, or None if it can."""
    if not isinstance(parameters, dict):
        return "parameters must be an object"

    properties = parameters.get("properties") or {}
    if not isinstance(properties, dict):
        return "parameters.properties must be an object"

    required = parameters.get("required") or []
    if not isinstance(required, list) or not all(isinstance(n, str) for n in required):
        return "parameters.required must be a list of parameter names"

    for name, spec in properties.items():
        if not isinstance(spec, dict):
            return f"property {name} must be an object"
        if "type" in spec and not isinstance(spec["type"], str):
            return f"property {name}: type must be a string"
        if "enum" in spec and not isinstance(spec["enum"], list):
            return f"property {name}: enum must be a list"

    return None


class ActionRegistrar:
    """
    Turns a registration request into a live action.

    Usage:
        registrar = ActionRegistrar(registry, base_url="http://localhost:3000")
        result = registrar.handle_registration({
            "actionName": "sendEmail",
            "parameters": {"properties": {"to": {"type": "string"}}, "required": ["to"]},
        })
        result.status_code  # 200
    """

    def __init__(
        self,
        registry: ActionRegistry,
        base_url: str,
        reserved_names: Iterable[str] = (),
    ):
        self.registry = registry
        self.base_url = base_url.rstrip("/")
        self.reserved_names = frozenset(reserved_names)

    def handle_registration(self, request: Any) -> ActionResponse:
        if not isinstance(request, dict):
            request = {}

        action_name = request.get("actionName")
        parameters = request.get("parameters")

        if not action_name or not parameters:
            return ActionResponse(
                400,
                {
                    "error": "Missing required fields",
                    "missingFields": list(REQUIRED_FIELDS),
                },
            )

        try:
            problem = self._check_request(action_name, parameters)
            if problem is not None:
                return problem

            descriptor = self._build_descriptor(request)
            self.registry.register(action_name, descriptor)
            document = synthesize_descriptor(descriptor, self.base_url)

            return ActionResponse(
                200,
                {
                    "actionSpecification": {
                        "customAction": {"openAPISpec": document["openAPISpec"]},
                        "apiEndpoint": {
                            **descriptor.summary(),
                            "url": f"{self.base_url}{descriptor.path}",
                        },
                        "usage": document["usage"],
                    }
                },
            )
        except Exception as e:
            logger.exception(f"Failed to register custom action {action_name}")
            return ActionResponse(
                500,
                {
                    "error": "Failed to create custom action",
                    "actionName": action_name,
                    "message": self.registry.error_message(e),
                },
            )

    def _check_request(self, action_name: Any, parameters: Any) -> Optional[ActionResponse]:
        """Reject requests that could never become a reachable, enforceable endpoint."""
        if not isinstance(action_name, str) or not ACTION_NAME_PATTERN.match(action_name):
            return ActionResponse(
                400,
                {
                    "error": "Invalid action name",
                    "actionName": action_name,
                    "message": "actionName must be a single URL path segment",
                },
            )

        if action_name in self.reserved_names:
            return ActionResponse(
                400,
                {"error": "Action name is reserved", "actionName": action_name},
            )

        problem = schema_problem(parameters)
        if problem is not None:
            return ActionResponse(
                400,
                {
                    "error": "Invalid parameters schema",
                    "actionName": action_name,
                    "message": problem,
                },
            )

        properties = parameters.get("properties") or {}
        undeclared = [name for name in parameters.get("required") or [] if name not in properties]
        if undeclared:
            logger.warning(
                f"Action {action_name} requires undeclared parameters: {undeclared}"
            )
        return None

    def _build_descriptor(self, request: dict[str, Any]) -> ActionDescriptor:
        kwargs = {}
        error_handling = request.get("errorHandling") or {}
        if error_handling.get("strategies"):
            kwargs["error_strategies"] = tuple(error_handling["strategies"])

        return ActionDescriptor(
            name=request["actionName"],
            schema=ParameterSchema.from_dict(request["parameters"]),
            authentication=AuthSpec.from_dict(request.get("authentication")),
            **kwargs,
        )
