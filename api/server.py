"""FastAPI application exposing every registered agent."""

import logging
from typing import Optional, Dict

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from agents.base import BaseAgent
from agents.registry import build_agents
from config.settings import Settings
from memory.factory import create_store
from schemas.contract import AgentResponse
from .routes import build_agent_router, build_index_router, envelope_response, method_not_allowed

logger = logging.getLogger(__name__)


def _agent_id_from_path(request: Request) -> str:
    return request.url.path.strip("/").split("/")[0]


def _describe_validation_error(exc: RequestValidationError) -> str:
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body") or "body"
        problems.append(f"{location}: {err.get('msg')}")
    return "Malformed request: " + "; ".join(problems)


def create_app(
    settings: Optional[Settings] = None,
    agents: Optional[Dict[str, BaseAgent]] = None
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Application settings (default: read from environment once)
        agents: Pre-built agents; built from the registry when omitted

    Returns:
        Configured application
    """
    if agents is None:
        settings = settings or Settings.from_env()
        agents = build_agents(settings, create_store(settings))

    app = FastAPI(
        title="Agent Hub",
        description="HTTP-triggered agents sharing one request/response contract",
        version="1.0.0",
    )

    @app.exception_handler(RequestValidationError)
    async def malformed_request(request: Request, exc: RequestValidationError):
        # Rejected before the handler runs: no execution record is created
        response = AgentResponse.failed(_agent_id_from_path(request), _describe_validation_error(exc))
        return envelope_response(response, 400)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            return method_not_allowed(_agent_id_from_path(request))
        return await http_exception_handler(request, exc)

    app.include_router(build_index_router(agents))
    for agent in agents.values():
        app.include_router(build_agent_router(agent))

    app.state.agents = agents
    return app
