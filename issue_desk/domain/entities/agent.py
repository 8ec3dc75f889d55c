"""Agent entity — a support employee who resolves issues."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime

from issue_desk.domain.value_objects.enums import Availability, IssueType


@dataclass(frozen=True)
class WorkLogEntry:
    """One resolved issue in an agent's work history."""

    issue_id: int
    issue_type: IssueType
    subject: str
    resolution: str
    resolved_at: datetime


@dataclass
class Agent:
    id: int | None
    name: str
    email: str
    expertise: frozenset[IssueType]
    current_issue_id: int | None = None
    history: list[WorkLogEntry] = field(default_factory=list)

    @property
    def availability(self) -> Availability:
        # Busy is derived from the current issue, so the two can never disagree
        return Availability.FREE if self.current_issue_id is None else Availability.BUSY

    def is_free(self) -> bool:
        return self.current_issue_id is None

    def supports(self, issue_type: IssueType) -> bool:
        return issue_type in self.expertise

    @property
    def workload(self) -> int:
        """Number of issues resolved so far; the least-workload signal."""
        return len(self.history)

    def snapshot(self) -> Agent:
        return replace(self, history=list(self.history))
