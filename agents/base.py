"""Agent handler skeleton shared by every agent."""

import time
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Tuple

from config.settings import Settings
from memory.execution_logger import ExecutionLogger, LogResult
from schemas.contract import AgentRequest, AgentResponse, CamelModel
from schemas.payloads import parse_payload

logger = logging.getLogger(__name__)


class BaseAgent(ABC):
    """
    Canonical control flow for one agent capability.

    ``handle`` logs the start of the invocation, validates the input into the
    agent's typed payload, runs the domain work in ``run`` and converts the
    outcome into an AgentResponse. It is the only layer that catches domain
    failures; subclasses let exceptions propagate out of ``run``.
    """

    agent_id: str = ""
    name: str = ""
    description: str = ""
    triggers: Tuple[str, ...] = ("api",)

    def __init__(self, settings: Settings, execution_logger: ExecutionLogger):
        """
        Initialize agent.

        Args:
            settings: Application settings
            execution_logger: Best-effort execution log
        """
        self.settings = settings
        self.execution_logger = execution_logger

    @abstractmethod
    def run(self, payload: Any, request: AgentRequest) -> CamelModel:
        """
        Perform the agent's domain work.

        Args:
            payload: Typed input payload for this agent
            request: Full request envelope

        Returns:
            Typed output payload
        """
        pass

    @abstractmethod
    def required_env_vars(self) -> List[str]:
        """Environment variable names this agent needs configured."""
        pass

    def handle(self, request: AgentRequest) -> AgentResponse:
        """
        Run one invocation through the execution-log lifecycle.

        Args:
            request: Well-formed request envelope

        Returns:
            Success or failure envelope; never raises for domain failures
        """
        started_at = time.monotonic()

        started = self.execution_logger.start(
            agent_id=self.agent_id,
            input=request.input,
            conversation_id=request.conversation_id
        )
        self._discard_log_result(started)
        execution_id = started.execution_id

        try:
            payload = parse_payload(self.agent_id, request.input)
            output = self.run(payload, request).to_wire()
        except Exception as e:
            message = str(e) or type(e).__name__
            logger.error(f"{self.agent_id} failed: {message}")
            self._discard_log_result(
                self.execution_logger.error(execution_id, message, self._elapsed_ms(started_at))
            )
            return AgentResponse.failed(self.agent_id, message, execution_id=execution_id)

        self._discard_log_result(
            self.execution_logger.complete(execution_id, output, self._elapsed_ms(started_at))
        )
        logger.info(f"{self.agent_id} completed (execution {execution_id})")
        return AgentResponse.ok(self.agent_id, output, execution_id=execution_id)

    def probe(self) -> Dict[str, Any]:
        """Liveness probe: identity and credential presence, no domain work."""
        return {
            "agentId": self.agent_id,
            "status": "running",
            "requiredEnvVarsPresent": all(
                self.settings.has(var) for var in self.required_env_vars()
            ),
        }

    def _store_env_vars(self) -> List[str]:
        """Credentials the execution store needs, if it is the hosted one."""
        if self.settings.store_backend == "supabase":
            return ["SUPABASE_URL", "SUPABASE_KEY"]
        return []

    @staticmethod
    def _elapsed_ms(started_at: float) -> int:
        return max(0, int((time.monotonic() - started_at) * 1000))

    @staticmethod
    def _discard_log_result(result: LogResult) -> None:
        # Logging is best-effort: this is the single point where a failed
        # write is dropped. The logger already reported it.
        if not result.success:
            logger.debug(f"Execution log write skipped: {result.error}")
