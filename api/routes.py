"""Per-agent HTTP routes: one handler per verb."""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse, Response

from agents.base import BaseAgent
from schemas.contract import AgentRequest, AgentResponse, RequestMetadata

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

ALLOWED_METHODS = "GET, POST, OPTIONS"


def envelope_response(response: AgentResponse, status_code: int, **headers) -> JSONResponse:
    """Serialise an AgentResponse with CORS headers."""
    return JSONResponse(
        response.to_wire(),
        status_code=status_code,
        headers={**CORS_HEADERS, **headers}
    )


def method_not_allowed(agent_id: str) -> JSONResponse:
    """405 carrying a contract-shaped body; nothing is logged."""
    return envelope_response(
        AgentResponse.failed(agent_id, "Method not allowed"),
        405,
        Allow=ALLOWED_METHODS
    )


def build_agent_router(agent: BaseAgent) -> APIRouter:
    """
    Mount one agent at ``/<agent_id>/``.

    GET is the liveness probe, OPTIONS the CORS preflight, POST the agent
    invocation. Every other verb is answered with 405.
    """
    router = APIRouter(prefix=f"/{agent.agent_id}", tags=[agent.agent_id])

    @router.get("/")
    def probe():
        return JSONResponse(agent.probe(), headers=CORS_HEADERS)

    @router.options("/")
    def preflight():
        return Response(status_code=200, headers=CORS_HEADERS)

    @router.post("/")
    def invoke(request: AgentRequest):
        response = agent.handle(request)
        return envelope_response(response, 200 if response.success else 500)

    @router.api_route("/", methods=["PUT", "PATCH", "DELETE"], include_in_schema=False)
    def reject():
        return method_not_allowed(agent.agent_id)

    if "webhook" in agent.triggers:

        @router.post("/webhook")
        def webhook(payload: Dict[str, Any] = Body(...)):
            # Form services post their own document shape; wrap it in the
            # standard envelope before it reaches the handler.
            data = payload.get("data") if isinstance(payload.get("data"), dict) else payload
            request = AgentRequest(
                user_id=str(data.get("respondentId") or "webhook"),
                input=data,
                metadata=RequestMetadata(trigger="webhook", event_id=payload.get("eventId")),
            )
            response = agent.handle(request)
            return envelope_response(response, 200 if response.success else 500)

    return router


def build_index_router(agents: Dict[str, BaseAgent]) -> APIRouter:
    """Service-level routes: health and agent listing."""
    router = APIRouter(tags=["service"])

    @router.get("/health")
    def health():
        return {"status": "ok"}

    @router.get("/agents")
    def list_agents() -> List[Dict[str, Any]]:
        return [
            {
                "agentId": agent.agent_id,
                "name": agent.name,
                "description": agent.description,
                "triggers": list(agent.triggers),
                "path": f"/{agent.agent_id}/",
            }
            for agent in agents.values()
        ]

    return router
