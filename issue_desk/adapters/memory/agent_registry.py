"""In-memory AgentRegistry guarded by a lock."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from issue_desk.application.ports.agent_registry import AgentRegistry
from issue_desk.domain.entities.agent import Agent, WorkLogEntry
from issue_desk.domain.errors import InvariantError, NotFoundError, ValidationError
from issue_desk.domain.value_objects.enums import IssueType

logger = logging.getLogger(__name__)


class InMemoryAgentRegistry(AgentRegistry):
    """Agents keyed by sequential id; dict insertion order is registration order."""

    def __init__(self) -> None:
        self._agents: dict[int, Agent] = {}
        self._emails: set[str] = set()
        self._next_id = 1
        self._lock = threading.Lock()

    def add_agent(self, name: str, email: str, expertise: Iterable[IssueType]) -> Agent:
        name = (name or "").strip()
        email = (email or "").strip()
        skills = frozenset(expertise or ())

        if not name:
            raise ValidationError("Agent name must not be blank")
        if "@" not in email:
            raise ValidationError(f"Invalid agent email: {email!r}")
        if not skills:
            raise ValidationError(f"Agent {email} must support at least one issue type")
        unknown = [s for s in skills if not isinstance(s, IssueType)]
        if unknown:
            raise ValidationError(f"Unknown issue types in expertise: {unknown}")

        with self._lock:
            key = email.lower()
            if key in self._emails:
                raise ValidationError(f"Agent with email {email} already registered")
            agent = Agent(id=self._next_id, name=name, email=email, expertise=skills)
            self._agents[agent.id] = agent
            self._emails.add(key)
            self._next_id += 1

        logger.info(
            "Agent %d registered: %s <%s> expertise=%s",
            agent.id, agent.name, agent.email, sorted(s.name for s in skills),
        )
        return agent

    def get_agent(self, agent_id: int) -> Agent:
        with self._lock:
            return self._get(agent_id)

    def list_agents(self) -> list[Agent]:
        with self._lock:
            return list(self._agents.values())

    def find_candidates(self, issue_type: IssueType) -> list[Agent]:
        with self._lock:
            return [a for a in self._agents.values() if a.supports(issue_type)]

    def mark_busy(self, agent_id: int, issue_id: int) -> None:
        with self._lock:
            agent = self._get(agent_id)
            if not agent.is_free():
                raise InvariantError(
                    f"Agent {agent_id} is already busy with issue {agent.current_issue_id}"
                )
            agent.current_issue_id = issue_id

    def mark_free(self, agent_id: int) -> None:
        with self._lock:
            agent = self._get(agent_id)
            if agent.is_free():
                raise InvariantError(f"Agent {agent_id} is not busy")
            agent.current_issue_id = None

    def append_history(self, agent_id: int, entry: WorkLogEntry) -> None:
        with self._lock:
            self._get(agent_id).history.append(entry)

    def _get(self, agent_id: int) -> Agent:
        agent = self._agents.get(agent_id)
        if agent is None:
            raise NotFoundError(f"Agent {agent_id} not found")
        return agent
