"""Typed input/output payloads for each shipped agent, keyed by agent id."""

from enum import Enum
from typing import Optional, Any, Dict, List, Type
from pydantic import BaseModel, Field, ValidationError, field_validator

from errors import PayloadValidationError
from .contract import CamelModel


class Platform(str, Enum):
    """Publishing platforms with dedicated formatting rules."""
    LINKEDIN = "LinkedIn"
    SUBSTACK = "Substack"


class NovaInput(CamelModel):
    """Input for the Nova marketing writer."""
    topic: str = Field(..., min_length=1)
    platform: Optional[str] = None
    style: Optional[str] = None

    @field_validator("topic")
    @classmethod
    def topic_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("topic must not be blank")
        return value.strip()


class NovaOutput(CamelModel):
    """Generated draft plus how much context went into it."""
    draft: str
    voice_examples_used: int = 0
    context_docs_used: int = 0


class FieldOption(BaseModel):
    """Choice of a checkbox/multiple-choice form field."""
    id: str
    text: str


class FormField(BaseModel):
    """One field of a form-intake webhook submission."""
    key: str
    label: Optional[str] = None
    type: Optional[str] = None
    value: Any = None
    options: Optional[List[FieldOption]] = None


class FormType(str, Enum):
    """Which intake form was submitted."""
    REQUEST = "request"
    HELPER = "helper"


class AdaInput(CamelModel):
    """Input for the Ada form analyzer: the submitted form."""
    form_id: Optional[str] = None
    form_name: Optional[str] = None
    created_at: Optional[str] = None
    fields: List[FormField] = Field(..., min_length=1)


class AdaOutput(CamelModel):
    """Result of analysing a submission and notifying the coordinator."""
    form_type: FormType
    subject: str
    analysis: str
    email_sent: bool
    email_id: Optional[str] = None


# Closed set of payload variants, discriminated by agent id
PAYLOAD_MODELS: Dict[str, Type[CamelModel]] = {
    "nova": NovaInput,
    "ada": AdaInput,
}


def parse_payload(agent_id: str, raw: Dict[str, Any]) -> CamelModel:
    """
    Validate an untyped request input into the agent's payload model.

    Args:
        agent_id: Agent the payload is addressed to
        raw: The request's ``input`` document

    Returns:
        Typed payload instance

    Raises:
        PayloadValidationError: Unknown agent or invalid payload
    """
    model = PAYLOAD_MODELS.get(agent_id)
    if model is None:
        raise PayloadValidationError(f"No payload schema registered for agent '{agent_id}'")

    try:
        return model.model_validate(raw or {})
    except ValidationError as e:
        problems = []
        for err in e.errors():
            location = ".".join(str(part) for part in err["loc"]) or "input"
            problems.append(f"{location}: {err['msg']}")
        raise PayloadValidationError(
            f"Invalid input for {agent_id}: " + "; ".join(problems)
        ) from e
