"""ResolutionCoordinator — assignment state machine for issues and agents."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from issue_desk.application.ports.agent_registry import AgentRegistry
from issue_desk.application.ports.issue_registry import IssueRegistry
from issue_desk.application.ports.waitlist import Waitlist
from issue_desk.domain.entities.agent import Agent, WorkLogEntry
from issue_desk.domain.entities.assignment import (
    AgentWorkload,
    AssignmentResult,
    ResolutionResult,
)
from issue_desk.domain.entities.issue import Issue
from issue_desk.domain.errors import (
    InvalidTransitionError,
    InvariantError,
    ValidationError,
)
from issue_desk.domain.policies.assignment_policy import AssignmentPolicy
from issue_desk.domain.value_objects.criteria import IssueCriteria
from issue_desk.domain.value_objects.enums import (
    AssignmentOutcome,
    IssueStatus,
    IssueType,
)

logger = logging.getLogger(__name__)


class ResolutionCoordinator:
    """Orchestrates assignment, resolution and waitlist drain.

    Every public method runs under one coordinator-wide lock, so a single
    assign or resolve call is atomic to all other callers: nobody can see
    an agent BUSY without a current issue, or an issue ASSIGNED without
    an agent. Results handed back are snapshots.
    """

    def __init__(
        self,
        agents: AgentRegistry,
        issues: IssueRegistry,
        waitlist: Waitlist,
        policy: AssignmentPolicy,
    ):
        self._agents = agents
        self._issues = issues
        self._waitlist = waitlist
        self._policy = policy
        self._lock = threading.RLock()

    @property
    def policy(self) -> AssignmentPolicy:
        return self._policy

    # ── Registration ────────────────────────────────────────────────

    def add_agent(self, name: str, email: str, expertise: Iterable[IssueType]) -> Agent:
        with self._lock:
            return self._agents.add_agent(name, email, set(expertise or ())).snapshot()

    def create_issue(
        self,
        transaction_id: str,
        issue_type: IssueType,
        subject: str,
        description: str,
        email: str,
    ) -> Issue:
        with self._lock:
            issue = self._issues.create_issue(
                transaction_id, issue_type, subject, description, email
            )
            return issue.snapshot()

    # ── State transitions ───────────────────────────────────────────

    def assign_issue(self, issue_id: int) -> AssignmentResult:
        """Bind an OPEN issue to a free matching agent, or waitlist it.

        An issue that is already waitlisted is retried: it leaves its queue
        when a free agent exists, otherwise it keeps its position.

        Raises:
            NotFoundError: unknown issue.
            InvalidTransitionError: issue is not OPEN.
        """
        with self._lock:
            issue = self._issues.get_issue(issue_id)
            if not issue.is_open():
                raise InvalidTransitionError(
                    f"Issue {issue_id} is {issue.status.name}, expected OPEN"
                )
            waiting = self._waitlist.contains(issue_id)

            candidates = [
                a for a in self._agents.find_candidates(issue.issue_type) if a.is_free()
            ]
            if not candidates:
                if not waiting:
                    depth = self._waitlist.push(issue.issue_type, issue_id)
                    logger.info(
                        "Issue %d waitlisted: no free %s agent (queue depth %d)",
                        issue_id, issue.issue_type.name, depth,
                    )
                return AssignmentResult(
                    issue_id=issue_id,
                    issue_type=issue.issue_type,
                    outcome=AssignmentOutcome.WAITLISTED,
                )

            agent = self._policy.select_agent(issue.issue_type, candidates)
            if waiting:
                self._waitlist.remove(issue_id)
            return self._bind(issue, agent)

    def resolve_issue(self, issue_id: int, resolution: str) -> ResolutionResult:
        """Resolve an ASSIGNED issue, free its agent and drain the type's waitlist.

        The freed agent only picks up work from the queue of the type it just
        resolved; queues of its other supported types are left alone.

        Raises:
            NotFoundError: unknown issue.
            InvalidTransitionError: issue is not ASSIGNED, or resolution is blank.
        """
        with self._lock:
            issue = self._issues.get_issue(issue_id)
            if not issue.is_assigned():
                raise InvalidTransitionError(
                    f"Issue {issue_id} is {issue.status.name}, expected ASSIGNED"
                )
            agent = self._close(issue, resolution)
            drained = self._drain(agent, issue.issue_type)
            return ResolutionResult(issue=issue.snapshot(), drained=drained)

    def update_issue(
        self,
        issue_id: int,
        status: IssueStatus | str,
        resolution: str | None = None,
    ) -> Issue:
        """Administrative status setter; never drains the waitlist.

        Resolving through this path still records history and frees the
        agent. Any move the lifecycle does not allow, including ASSIGNED
        without an agent, raises InvalidTransitionError; an unknown status
        value raises ValidationError.
        """
        try:
            status = IssueStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown issue status: {status!r}") from None
        with self._lock:
            issue = self._issues.get_issue(issue_id)
            if status == IssueStatus.RESOLVED and issue.is_assigned():
                self._close(issue, resolution)
            else:
                issue = self._issues.set_status(issue_id, status, resolution=resolution)
            logger.info("Issue %d updated to %s", issue_id, issue.status.name)
            return issue.snapshot()

    # ── Queries ─────────────────────────────────────────────────────

    def get_issue(self, issue_id: int) -> Issue:
        with self._lock:
            return self._issues.get_issue(issue_id).snapshot()

    def filter_issues(
        self,
        criteria: IssueCriteria | None = None,
        **fields,
    ) -> list[Issue]:
        """Issues matching *criteria* (or keyword fields of IssueCriteria)."""
        if criteria is None:
            criteria = IssueCriteria(**fields)
        elif fields:
            raise TypeError("Pass either an IssueCriteria or keyword fields, not both")
        with self._lock:
            return [i.snapshot() for i in self._issues.filter(criteria)]

    def get_agent(self, agent_id: int) -> Agent:
        with self._lock:
            return self._agents.get_agent(agent_id).snapshot()

    def list_agents(self) -> list[Agent]:
        with self._lock:
            return [a.snapshot() for a in self._agents.list_agents()]

    def get_work_history(self, agent_id: int) -> tuple[WorkLogEntry, ...]:
        with self._lock:
            return tuple(self._agents.get_agent(agent_id).history)

    def workload_report(self) -> list[AgentWorkload]:
        with self._lock:
            return [
                AgentWorkload(
                    agent_id=a.id,
                    name=a.name,
                    availability=a.availability,
                    current_issue_id=a.current_issue_id,
                    resolved_count=a.workload,
                )
                for a in self._agents.list_agents()
            ]

    def waitlist_snapshot(self) -> dict[IssueType, tuple[int, ...]]:
        with self._lock:
            return self._waitlist.snapshot()

    # ── Internals (caller holds the lock) ───────────────────────────

    def _bind(self, issue: Issue, agent: Agent) -> AssignmentResult:
        if not agent.supports(issue.issue_type):
            raise InvariantError(
                f"Agent {agent.id} does not support {issue.issue_type.name}"
            )
        self._agents.mark_busy(agent.id, issue.id)
        self._issues.set_status(issue.id, IssueStatus.ASSIGNED, agent_id=agent.id)
        logger.info(
            "Issue %d assigned to agent %d (%s) via %s",
            issue.id, agent.id, agent.email, self._policy.name.value,
        )
        return AssignmentResult(
            issue_id=issue.id,
            issue_type=issue.issue_type,
            outcome=AssignmentOutcome.ASSIGNED,
            agent_id=agent.id,
        )

    def _close(self, issue: Issue, resolution: str | None) -> Agent:
        """Resolve *issue*, log it in the agent's history and free the agent."""
        agent = self._agents.get_agent(issue.assigned_agent_id)
        if agent.current_issue_id != issue.id:
            raise InvariantError(
                f"Issue {issue.id} points at agent {agent.id}, "
                f"who holds issue {agent.current_issue_id}"
            )

        self._issues.set_status(issue.id, IssueStatus.RESOLVED, resolution=resolution)
        self._agents.append_history(
            agent.id,
            WorkLogEntry(
                issue_id=issue.id,
                issue_type=issue.issue_type,
                subject=issue.subject,
                resolution=issue.resolution,
                resolved_at=issue.resolved_at,
            ),
        )
        self._agents.mark_free(agent.id)
        logger.info("Issue %d resolved by agent %d", issue.id, agent.id)
        return agent

    def _drain(self, agent: Agent, issue_type: IssueType) -> AssignmentResult | None:
        next_id = self._waitlist.pop(issue_type)
        if next_id is None:
            return None

        waiting = self._issues.get_issue(next_id)
        if not waiting.is_open():
            raise InvariantError(
                f"Waitlisted issue {next_id} is {waiting.status.name}, expected OPEN"
            )
        logger.info("Draining %s waitlist: issue %d", issue_type.name, next_id)
        return self._bind(waiting, agent)
