"""Environment-backed settings, read at call time so tests can override them."""

import os
from typing import Optional


def get_api_key() -> Optional[str]:
    return os.getenv("API_KEY") or None


def get_port() -> int:
    return int(os.getenv("PORT", "3000"))


def get_host() -> str:
    return os.getenv("HOST", "0.0.0.0")


def get_public_base_url() -> str:
    """Server URL used in generated OpenAPI documents and usage snippets."""
    return os.getenv("PUBLIC_BASE_URL", f"http://localhost:{get_port()}").rstrip("/")


def expose_error_messages() -> bool:
    return os.getenv("EXPOSE_ERROR_MESSAGES", "true").lower() not in ("0", "false", "no")


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
