"""Custom action routes: registration, introspection and the dynamic dispatcher."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from builder.config import get_public_base_url
from shared.actions import (
    ActionRegistrar,
    ActionRegistry,
    generate_skill_markdown,
    get_recent_logs,
    synthesize_descriptor,
)

router = APIRouter(tags=["actions"])

# Catch-all POST route; must be included after every fixed route.
dispatch_router = APIRouter(tags=["dispatch"])


def get_registry(request: Request) -> ActionRegistry:
    return request.app.state.registry


def get_registrar(request: Request) -> ActionRegistrar:
    return request.app.state.registrar


async def _read_json(request: Request) -> Any:
    """Parsed body, or None when it is empty or not valid JSON."""
    try:
        return await request.json()
    except ValueError:
        return None


@router.post("/designCustomActions")
async def design_custom_actions(
    request: Request,
    registrar: ActionRegistrar = Depends(get_registrar),
):
    """Register a new action and return its OpenAPI specification."""
    body = await _read_json(request)
    if isinstance(body, dict) and isinstance(body.get("actionName"), str):
        request.state.action = body["actionName"]
    result = registrar.handle_registration(body)
    return JSONResponse(status_code=result.status_code, content=result.body)


@router.get("/actions")
async def list_actions(registry: ActionRegistry = Depends(get_registry)):
    return {"actions": [action.summary() for action in registry.all()]}


@router.get("/actions/{name}")
async def get_action(name: str, registry: ActionRegistry = Depends(get_registry)):
    """Describe one registered action, including a fresh OpenAPI document."""
    descriptor = registry.lookup(name)
    if descriptor is None:
        return JSONResponse(status_code=404, content={"error": f"Unknown action: {name}"})

    document = synthesize_descriptor(descriptor, get_public_base_url())
    return {**descriptor.summary(), "openAPISpec": document["openAPISpec"]}


@router.get("/api/skill", response_class=PlainTextResponse)
async def get_skill(registry: ActionRegistry = Depends(get_registry)):
    """Return auto-generated OpenClaw skill for the registered actions."""
    return generate_skill_markdown(
        name="action-builder",
        description="Custom actions registered on the GPT action builder",
        actions=registry.all(),
    )


@router.get("/api/audit")
async def get_audit(limit: int = 100, action: Optional[str] = None):
    """Recent audit entries, newest first, optionally for one action."""
    return {"entries": await get_recent_logs(limit=limit, action=action)}


@dispatch_router.post("/{action_name}")
async def dispatch_action(
    action_name: str,
    request: Request,
    registry: ActionRegistry = Depends(get_registry),
):
    """Invoke a registered action."""
    payload = await _read_json(request)
    result = registry.dispatch(action_name, payload)
    request.state.action = action_name
    request.state.violation = result.violation
    return JSONResponse(status_code=result.status_code, content=result.body)
