"""Custom action framework: validation, registry, documentation."""

from .validator import Violation, validate
from .registry import (
    ActionDescriptor,
    ActionRegistry,
    ActionResponse,
    AuthSpec,
    ParameterSchema,
)
from .spec import synthesize, synthesize_descriptor
from .registrar import ActionRegistrar
from .skill import generate_skill_markdown
from .audit import init_audit_db, log_request, get_recent_logs

__all__ = [
    "Violation",
    "validate",
    "ActionDescriptor",
    "ActionRegistry",
    "ActionResponse",
    "AuthSpec",
    "ParameterSchema",
    "synthesize",
    "synthesize_descriptor",
    "ActionRegistrar",
    "generate_skill_markdown",
    "init_audit_db",
    "log_request",
    "get_recent_logs",
]
