"""Builder middleware for API key checks and audit logging."""

import logging
import secrets

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from builder.config import get_api_key
from shared.actions.audit import log_request

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"
PUBLIC_ROUTES = {("GET", "/health")}


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """Rejects requests without a matching x-api-key header and audits the rest."""

    async def dispatch(self, request: Request, call_next):
        if (request.method, request.url.path) in PUBLIC_ROUTES:
            return await call_next(request)

        path = request.url.path
        method = request.method
        client_ip = request.client.host if request.client else "unknown"

        expected = get_api_key()
        provided = request.headers.get(API_KEY_HEADER)
        if (
            expected is None
            or provided is None
            or not secrets.compare_digest(provided.encode(), expected.encode())
        ):
            if expected is None:
                logger.warning("API_KEY is not configured, rejecting request")
            else:
                logger.info(f"Rejected {method} {path} from {client_ip}: invalid API key")
            await log_request(path, method, client_ip, 401, "Invalid API key")
            return JSONResponse(status_code=401, content={"error": "Invalid API key"})

        try:
            response = await call_next(request)
            await log_request(
                path,
                method,
                client_ip,
                response.status_code,
                action=getattr(request.state, "action", None),
                violation=getattr(request.state, "violation", None),
            )
            return response
        except Exception as exc:
            await log_request(
                path,
                method,
                client_ip,
                500,
                str(exc),
                action=getattr(request.state, "action", None),
            )
            raise
