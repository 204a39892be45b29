"""Best-effort execution log: running -> success | error."""

import logging
from typing import Optional, Any, Dict
from pydantic import BaseModel

from .base_store import DurableStore, EXECUTIONS_TABLE
from .models import ExecutionStatus

logger = logging.getLogger(__name__)


class LogResult(BaseModel):
    """Outcome of one execution-log write."""
    success: bool
    execution_id: Optional[str] = None
    error: Optional[str] = None


class ExecutionLogger:
    """
    Records the lifecycle of one agent invocation in the durable store.

    At most two writes per invocation: an insert in ``running`` state, then a
    single update to ``success`` or ``error``. No method ever raises; every
    failure comes back as a ``LogResult`` with ``success=False`` and is also
    reported through ``logging``. Logging must never abort the agent's
    primary work.
    """

    def __init__(self, store: Optional[DurableStore]):
        """
        Initialize execution logger.

        Args:
            store: Durable store, or None when no store is configured
        """
        self.store = store

    def start(
        self,
        agent_id: str,
        input: Optional[Dict[str, Any]],
        conversation_id: Optional[str] = None
    ) -> LogResult:
        """
        Create an execution record in ``running`` state.

        Returns:
            LogResult carrying the new execution id on success
        """
        if not agent_id:
            return LogResult(success=False, error="agent_id must not be empty")
        if self.store is None:
            return LogResult(success=False, error="No execution store configured")

        try:
            row = self.store.insert(EXECUTIONS_TABLE, {
                "conversation_id": conversation_id or None,
                "agent_id": agent_id,
                "input": input,
                "status": ExecutionStatus.RUNNING.value,
            })
        except Exception as e:
            logger.error(f"Failed to log execution start for {agent_id}: {e}")
            return LogResult(success=False, error=str(e))

        execution_id = row.get("id") if row else None
        if not execution_id:
            logger.error(f"Execution store returned no id for {agent_id}")
            return LogResult(success=False, error="Store returned no execution id")

        return LogResult(success=True, execution_id=str(execution_id))

    def complete(
        self,
        execution_id: Optional[str],
        output: Optional[Dict[str, Any]],
        duration_ms: int
    ) -> LogResult:
        """Transition an execution to ``success``."""
        return self._finish(execution_id, {
            "output": output,
            "status": ExecutionStatus.SUCCESS.value,
            "duration_ms": duration_ms,
        })

    def error(
        self,
        execution_id: Optional[str],
        error_message: str,
        duration_ms: int
    ) -> LogResult:
        """Transition an execution to ``error``."""
        return self._finish(execution_id, {
            "status": ExecutionStatus.ERROR.value,
            "error_message": error_message,
            "duration_ms": duration_ms,
        })

    def _finish(self, execution_id: Optional[str], fields: Dict[str, Any]) -> LogResult:
        # No id means start() failed; there is nothing to transition
        if not execution_id:
            return LogResult(success=False, error="No execution id")
        if self.store is None:
            return LogResult(success=False, execution_id=execution_id, error="No execution store configured")

        try:
            updated = self.store.update(EXECUTIONS_TABLE, execution_id, fields)
        except Exception as e:
            logger.error(f"Failed to log execution {fields['status']} for {execution_id}: {e}")
            return LogResult(success=False, execution_id=execution_id, error=str(e))

        if updated is None:
            logger.warning(f"Execution {execution_id} not found in store")
            return LogResult(success=False, execution_id=execution_id, error="Execution not found")

        return LogResult(success=True, execution_id=execution_id)
