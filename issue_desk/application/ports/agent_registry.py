"""Port interface for agent records and their availability."""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from issue_desk.domain.entities.agent import Agent, WorkLogEntry
from issue_desk.domain.value_objects.enums import IssueType


class AgentRegistry(ABC):
    @abstractmethod
    def add_agent(self, name: str, email: str, expertise: Iterable[IssueType]) -> Agent:
        """Register a FREE agent with empty history.

        Raises:
            ValidationError: email already registered or expertise empty.
        """
        ...

    @abstractmethod
    def get_agent(self, agent_id: int) -> Agent:
        """Raises NotFoundError if the id is unknown."""
        ...

    @abstractmethod
    def list_agents(self) -> list[Agent]:
        """All agents in registration order."""
        ...

    @abstractmethod
    def find_candidates(self, issue_type: IssueType) -> list[Agent]:
        """Agents whose expertise includes *issue_type*, busy or free."""
        ...

    @abstractmethod
    def mark_busy(self, agent_id: int, issue_id: int) -> None:
        """Raises InvariantError if the agent is already busy."""
        ...

    @abstractmethod
    def mark_free(self, agent_id: int) -> None:
        """Raises InvariantError if the agent was not busy."""
        ...

    @abstractmethod
    def append_history(self, agent_id: int, entry: WorkLogEntry) -> None:
        ...
