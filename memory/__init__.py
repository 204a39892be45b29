"""Execution log and conversation persistence."""

from .models import (
    ExecutionRecord,
    ExecutionStatus,
    Conversation,
    ConversationStatus,
    Message,
    MessageRole,
)
from .base_store import DurableStore
from .sqlite_store import SQLiteStore
from .supabase_store import SupabaseStore
from .factory import create_store, StoreBackend
from .execution_logger import ExecutionLogger, LogResult
from .conversations import ConversationAccessor

__all__ = [
    "ExecutionRecord",
    "ExecutionStatus",
    "Conversation",
    "ConversationStatus",
    "Message",
    "MessageRole",
    "DurableStore",
    "SQLiteStore",
    "SupabaseStore",
    "create_store",
    "StoreBackend",
    "ExecutionLogger",
    "LogResult",
    "ConversationAccessor",
]
