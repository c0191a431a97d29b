"""OpenClaw skill generation from registered custom actions."""

import json

from .registry import ActionDescriptor
from .spec import EXAMPLE_PAYLOAD


def generate_skill_markdown(
    name: str,
    description: str,
    actions: list[ActionDescriptor],
    base_url_env: str = "ACTION_BUILDER_URL",
) -> str:
    """
    Generate OpenClaw skill markdown from registered actions.

    Args:
        name: Skill name (e.g., "action-builder")
        description: Skill description
        actions: Descriptors to document, in registration order
        base_url_env: Environment variable for base URL

    Returns:
        Markdown string for SKILL.md
    """
    lines = [
        "---",
        f"name: {name}",
        f"description: {description}",
        f'metadata: {{"openclaw": {{"requires": {{"env": ["{base_url_env}"]}}}}}}',
        "---",
        "",
        f"# {name.replace('-', ' ').title()}",
        "",
        f"Base URL: ${{{base_url_env}}}",
        "",
    ]

    if not actions:
        lines.append("No custom actions registered yet.")
        lines.append("")

    for action in actions:
        lines.append(f"## POST {action.path}")
        if action.schema.summary:
            lines.append(action.schema.summary)
        lines.append(f"Auth: header `{action.authentication.header_name}`")
        lines.append("")

        if action.schema.properties:
            lines.append("**Params:**")
            for param_name, spec in action.schema.properties.items():
                spec = spec if isinstance(spec, dict) else {}
                required = "required" if param_name in action.schema.required else "optional"
                ptype = spec.get("type", "any")
                desc_parts = [f"{param_name}: {ptype}, {required}"]

                if "enum" in spec:
                    desc_parts.append(f"one of {spec['enum']}")
                if spec.get("description"):
                    desc_parts.append(spec["description"])

                lines.append(f"- {', '.join(desc_parts)}")
            lines.append("")

        lines.append("**Example request:**")
        lines.append("```json")
        lines.append(json.dumps(EXAMPLE_PAYLOAD, indent=2))
        lines.append("```")
        lines.append("")

    return "\n".join(lines)
