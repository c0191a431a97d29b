"""OpenAPI-style documentation for custom actions."""

import copy
import json
from typing import Any, Optional, Sequence

from .registry import (
    DEFAULT_ERROR_STRATEGIES,
    DEFAULT_HEADER_NAME,
    ActionDescriptor,
    AuthSpec,
    ParameterSchema,
)

OPENAPI_VERSION = "3.1.0"
SECURITY_SCHEME = "ApiKeyAuth"
EXAMPLE_PAYLOAD = {"example": "data"}

RESPONSE_DESCRIPTIONS = {
    "200": "Successful operation",
    "400": "Bad request - missing or invalid parameters",
    "401": "Unauthorized - invalid or missing API key",
    "500": "Internal server error",
}

__all__ = [
    "DEFAULT_ERROR_STRATEGIES",
    "DEFAULT_HEADER_NAME",
    "EXAMPLE_PAYLOAD",
    "synthesize",
    "synthesize_descriptor",
]


def _openapi_document(
    name: str,
    schema: ParameterSchema,
    header_name: str,
    base_url: str,
) -> dict[str, Any]:
    summary = schema.summary or f"Execute the {name} action"
    error_schema = {
        "type": "object",
        "properties": {"error": {"type": "string"}},
    }

    responses = {
        "200": {
            "description": RESPONSE_DESCRIPTIONS["200"],
            "content": {
                "application/json": {
                    "schema": {
                        "type": "object",
                        "properties": copy.deepcopy(schema.response_properties),
                    }
                }
            },
        }
    }
    for code in ("400", "401", "500"):
        responses[code] = {
            "description": RESPONSE_DESCRIPTIONS[code],
            "content": {"application/json": {"schema": error_schema}},
        }

    return {
        "openapi": OPENAPI_VERSION,
        "info": {
            "title": f"{name} API",
            "description": summary,
            "version": "1.0.0",
        },
        "servers": [{"url": base_url}],
        "paths": {
            f"/{name}": {
                "post": {
                    "operationId": name,
                    "summary": summary,
                    "requestBody": {
                        "required": True,
                        "content": {
                            "application/json": {
                                "schema": {
                                    "type": "object",
                                    "properties": copy.deepcopy(schema.properties),
                                    "required": list(schema.required),
                                }
                            }
                        },
                    },
                    "responses": responses,
                    "security": [{SECURITY_SCHEME: []}],
                }
            }
        },
        "components": {
            "securitySchemes": {
                SECURITY_SCHEME: {
                    "type": "apiKey",
                    "in": "header",
                    "name": header_name,
                }
            }
        },
    }


def _usage_examples(name: str, header_name: str, base_url: str) -> dict[str, Any]:
    url = f"{base_url}/{name}"
    body = json.dumps(EXAMPLE_PAYLOAD)
    curl = (
        f"curl -X POST {url} \\\n"
        f'  -H "Content-Type: application/json" \\\n'
        f'  -H "{header_name}: YOUR_API_KEY" \\\n'
        f"  -d '{body}'"
    )
    postman = {
        "method": "POST",
        "url": url,
        "headers": [
            {"key": "Content-Type", "value": "application/json"},
            {"key": header_name, "value": "YOUR_API_KEY"},
        ],
        "body": {
            "mode": "raw",
            "raw": json.dumps(EXAMPLE_PAYLOAD, indent=2),
        },
    }
    return {"curl": curl, "postman": postman}


def synthesize(
    name: str,
    schema: ParameterSchema,
    authentication: Optional[AuthSpec] = None,
    error_strategies: Optional[Sequence[str]] = None,
    base_url: str = "http://localhost:3000",
) -> dict[str, Any]:
    """
    Build the documentation bundle for one action.

    Args:
        name: Action name, used as the path segment and operationId
        schema: Declared parameters
        authentication: Header auth description (defaults to x-api-key)
        error_strategies: Labels describing error handling (defaults to
            DEFAULT_ERROR_STRATEGIES)
        base_url: Server URL for the document and the usage snippets

    Returns:
        Dict with `openAPISpec`, `errorHandling` and `usage` (curl + postman)
    """
    auth = authentication or AuthSpec()
    header_name = auth.header_name or DEFAULT_HEADER_NAME
    strategies = list(error_strategies or DEFAULT_ERROR_STRATEGIES)
    base_url = base_url.rstrip("/")

    return {
        "openAPISpec": _openapi_document(name, schema, header_name, base_url),
        "errorHandling": strategies,
        "usage": _usage_examples(name, header_name, base_url),
    }


def synthesize_descriptor(descriptor: ActionDescriptor, base_url: str) -> dict[str, Any]:
    return synthesize(
        descriptor.name,
        descriptor.schema,
        descriptor.authentication,
        descriptor.error_strategies,
        base_url=base_url,
    )
