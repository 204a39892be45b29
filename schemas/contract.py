"""Agent request/response envelope shared by every agent."""

from datetime import datetime, timezone
from typing import Optional, Any, Dict
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(by_alias=True, mode="json")


class RequestMetadata(CamelModel):
    """Context about how the invocation was triggered."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    trigger: str = "api"  # "api", "webhook", "mcp", "cli", ...
    timestamp: str = Field(default_factory=utc_now_iso)


class AgentRequest(CamelModel):
    """Input to any agent invocation."""
    conversation_id: Optional[str] = None
    user_id: str
    input: Dict[str, Any]
    metadata: RequestMetadata = Field(default_factory=RequestMetadata)


class ResponseMetadata(CamelModel):
    """Metadata attached to every agent response."""
    agent_id: str
    execution_id: Optional[str] = None
    timestamp: str = Field(default_factory=utc_now_iso)


class AgentResponse(CamelModel):
    """Output of any agent invocation.

    Exactly one of ``output`` / ``error`` is populated, decided by
    ``success``. Use the ``ok`` / ``failed`` constructors.
    """
    success: bool
    output: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    metadata: ResponseMetadata

    @classmethod
    def ok(
        cls,
        agent_id: str,
        output: Dict[str, Any],
        execution_id: Optional[str] = None
    ) -> "AgentResponse":
        return cls(
            success=True,
            output=output,
            error=None,
            metadata=ResponseMetadata(agent_id=agent_id, execution_id=execution_id),
        )

    @classmethod
    def failed(
        cls,
        agent_id: str,
        error: str,
        execution_id: Optional[str] = None
    ) -> "AgentResponse":
        return cls(
            success=False,
            output=None,
            error=error,
            metadata=ResponseMetadata(agent_id=agent_id, execution_id=execution_id),
        )
