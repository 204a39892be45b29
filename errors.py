"""Exception types shared by agents, collaborators and stores."""

from typing import Optional


class AgentError(Exception):
    """Base class for failures raised during agent domain work."""


class PayloadValidationError(AgentError):
    """Agent input payload is missing required fields or malformed."""


class CollaboratorError(AgentError):
    """An external collaborator (LLM, Notion, email) call failed."""

    def __init__(
        self,
        collaborator: str,
        message: str,
        status_code: Optional[int] = None
    ):
        self.collaborator = collaborator
        self.status_code = status_code
        if status_code is not None:
            text = f"{collaborator} API error ({status_code}): {message}"
        else:
            text = f"{collaborator} API error: {message}"
        super().__init__(text)


class StoreError(Exception):
    """Durable store (executions, conversations, messages) call failed."""
