"""Issue entity — a customer-reported problem tied to a transaction."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from issue_desk.domain.value_objects.enums import IssueStatus, IssueType

# Forward-only lifecycle: OPEN -> ASSIGNED -> RESOLVED (terminal)
ALLOWED_TRANSITIONS: dict[IssueStatus, frozenset[IssueStatus]] = {
    IssueStatus.OPEN: frozenset({IssueStatus.ASSIGNED}),
    IssueStatus.ASSIGNED: frozenset({IssueStatus.RESOLVED}),
    IssueStatus.RESOLVED: frozenset(),
}


@dataclass
class Issue:
    id: int | None
    transaction_id: str
    issue_type: IssueType
    subject: str
    description: str
    email: str
    created_at: datetime
    status: IssueStatus = IssueStatus.OPEN
    assigned_agent_id: int | None = None
    resolution: str | None = None
    resolved_at: datetime | None = None

    def can_transition_to(self, status: IssueStatus) -> bool:
        return status in ALLOWED_TRANSITIONS[self.status]

    def is_open(self) -> bool:
        return self.status == IssueStatus.OPEN

    def is_assigned(self) -> bool:
        return self.status == IssueStatus.ASSIGNED

    def is_resolved(self) -> bool:
        return self.status == IssueStatus.RESOLVED

    def snapshot(self) -> Issue:
        """Detached copy handed to callers outside the registry lock."""
        return replace(self)
