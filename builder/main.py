"""GPT Action Builder API."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from builder import config
from builder.middleware import ApiKeyMiddleware
from builder.routes import actions, templates
from shared.actions import ActionRegistrar, ActionRegistry, init_audit_db

load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize the audit database on startup."""
    await init_audit_db()
    yield
    logger.info(f"Shutting down with {len(app.state.registry)} custom actions registered")


def _fixed_names(app: FastAPI) -> set[str]:
    """First path segments of every fixed route, whatever its method."""
    return {
        route.path.strip("/").split("/")[0]
        for route in app.routes
    }


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400 with an error field."""
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request body",
            "details": jsonable_encoder(exc.errors()),
        },
    )


def create_app() -> FastAPI:
    """Build an app with its own empty action registry."""
    app = FastAPI(
        title="GPT Action Builder",
        description="Configuration helpers and runtime custom actions for GPT integrations",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(ApiKeyMiddleware)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "ok"}

    app.include_router(templates.router)
    app.include_router(actions.router)

    registry = ActionRegistry(expose_error_messages=config.expose_error_messages())
    app.state.registry = registry
    app.state.registrar = ActionRegistrar(
        registry,
        base_url=config.get_public_base_url(),
        reserved_names=_fixed_names(app),
    )

    # Dispatcher last so fixed routes take precedence
    app.include_router(actions.dispatch_router)

    return app


def run() -> None:
    logging.basicConfig(
        level=config.get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(f"Server running on port {config.get_port()}")
    uvicorn.run(create_app(), host=config.get_host(), port=config.get_port())


app = create_app()
