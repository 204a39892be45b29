"""Abstract durable store interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any, Dict, List

EXECUTIONS_TABLE = "agent_executions"
CONVERSATIONS_TABLE = "conversations"
MESSAGES_TABLE = "messages"


class DurableStore(ABC):
    """
    Row store backing the execution log and conversation history.

    Access is additive (insert one row) or a single-row update by primary
    key. There are no transactions and no locks. Every failure is raised as
    ``errors.StoreError``.
    """

    @abstractmethod
    def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert one row.

        Args:
            table: Table name
            row: Column values (an ``id`` is generated when absent)

        Returns:
            The created row as stored
        """
        pass

    @abstractmethod
    def update(
        self,
        table: str,
        row_id: str,
        fields: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Partially update one row by id.

        Returns:
            The updated row, or None if no row has that id
        """
        pass

    @abstractmethod
    def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Select rows matching equality filters.

        Args:
            table: Table name
            filters: Column -> required value
            order_by: Optional column to sort by
            descending: Sort direction
            limit: Optional maximum number of rows

        Returns:
            Matching rows
        """
        pass
