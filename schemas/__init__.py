"""Pydantic schemas for the agent contract and per-agent payloads."""

from .contract import AgentRequest, AgentResponse, RequestMetadata, ResponseMetadata
from .payloads import (
    NovaInput,
    NovaOutput,
    AdaInput,
    AdaOutput,
    FormField,
    FormType,
    Platform,
    parse_payload,
)

__all__ = [
    "AgentRequest",
    "AgentResponse",
    "RequestMetadata",
    "ResponseMetadata",
    "NovaInput",
    "NovaOutput",
    "AdaInput",
    "AdaOutput",
    "FormField",
    "FormType",
    "Platform",
    "parse_payload",
]
