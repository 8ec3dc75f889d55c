"""Assignment outcomes returned by the resolution coordinator."""

from __future__ import annotations

from dataclasses import dataclass

from issue_desk.domain.entities.issue import Issue
from issue_desk.domain.value_objects.enums import (
    Availability,
    AssignmentOutcome,
    IssueType,
)


@dataclass(frozen=True)
class AssignmentResult:
    """Result of one assignment attempt.

    Waitlisting is a normal outcome, not a failure: ``agent_id`` is None
    and ``outcome`` is WAITLISTED.
    """

    issue_id: int
    issue_type: IssueType
    outcome: AssignmentOutcome
    agent_id: int | None = None

    @property
    def is_assigned(self) -> bool:
        return self.outcome == AssignmentOutcome.ASSIGNED

    @property
    def is_waitlisted(self) -> bool:
        return self.outcome == AssignmentOutcome.WAITLISTED


@dataclass(frozen=True)
class ResolutionResult:
    """Resolved issue plus the waitlisted issue the freed agent picked up, if any."""

    issue: Issue
    drained: AssignmentResult | None = None


@dataclass(frozen=True)
class AgentWorkload:
    """One row of the workload report."""

    agent_id: int
    name: str
    availability: Availability
    current_issue_id: int | None
    resolved_count: int
