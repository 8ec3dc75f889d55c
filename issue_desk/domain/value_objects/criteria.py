"""IssueCriteria — conjunctive filter over issue attributes."""

from __future__ import annotations

from dataclasses import dataclass

from issue_desk.domain.entities.issue import Issue
from issue_desk.domain.value_objects.enums import IssueStatus, IssueType


@dataclass(frozen=True)
class IssueCriteria:
    """Every field left as None matches anything."""

    email: str | None = None
    issue_id: int | None = None
    issue_type: IssueType | None = None
    status: IssueStatus | None = None
    agent_id: int | None = None

    def matches(self, issue: Issue) -> bool:
        if self.email is not None and issue.email != self.email:
            return False
        if self.issue_id is not None and issue.id != self.issue_id:
            return False
        if self.issue_type is not None and issue.issue_type != self.issue_type:
            return False
        if self.status is not None and issue.status != self.status:
            return False
        if self.agent_id is not None and issue.assigned_agent_id != self.agent_id:
            return False
        return True

