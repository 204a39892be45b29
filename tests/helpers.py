"""Shared test doubles."""

from typing import Optional, Any, Dict, List

from agents.base import BaseAgent
from errors import StoreError
from memory.base_store import DurableStore
from schemas.contract import CamelModel


class FailingStore(DurableStore):
    """Store that is always unreachable."""

    def __init__(self):
        self.calls = 0

    def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        self.calls += 1
        raise StoreError("store unreachable")

    def update(self, table: str, row_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self.calls += 1
        raise StoreError("store unreachable")

    def select(self, table: str, filters=None, order_by=None, descending=False, limit=None) -> List[Dict[str, Any]]:
        self.calls += 1
        raise StoreError("store unreachable")


class DraftOutput(CamelModel):
    draft: str


class StubNovaAgent(BaseAgent):
    """Nova with its domain work replaced by a fixed result or failure."""

    agent_id = "nova"

    def __init__(self, settings, execution_logger, result=None, failure=None):
        super().__init__(settings, execution_logger)
        self.result = result
        self.failure = failure
        self.calls = 0

    def required_env_vars(self):
        return ["ANTHROPIC_API_KEY", "NOTION_TOKEN"]

    def run(self, payload, request):
        self.calls += 1
        if self.failure:
            raise self.failure
        return DraftOutput(draft=self.result)
