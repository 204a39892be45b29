"""Durable record models: executions, conversations, messages."""

from enum import Enum
from typing import Optional, Any, Dict
from pydantic import BaseModel


class ExecutionStatus(str, Enum):
    """Execution lifecycle: running -> success | error."""
    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"


class ConversationStatus(str, Enum):
    """Conversation status."""
    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"


class MessageRole(str, Enum):
    """Author role of a message."""
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ExecutionRecord(BaseModel):
    """One row per agent invocation attempt (table: agent_executions)."""
    id: str
    conversation_id: Optional[str] = None
    agent_id: str
    input: Optional[Dict[str, Any]] = None
    output: Optional[Dict[str, Any]] = None
    status: ExecutionStatus
    error_message: Optional[str] = None
    duration_ms: Optional[int] = None
    created_at: str


class Conversation(BaseModel):
    """Grouping of messages for multi-turn interactions (table: conversations)."""
    id: str
    user_id: str
    status: ConversationStatus
    created_at: str


class Message(BaseModel):
    """One immutable exchange unit in a conversation (table: messages)."""
    id: str
    conversation_id: str
    role: MessageRole
    content: str
    agent_id: Optional[str] = None
    created_at: str
