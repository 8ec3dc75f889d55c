"""In-memory IssueRegistry guarded by a lock."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime, timezone

from issue_desk.application.ports.issue_registry import IssueRegistry
from issue_desk.domain.entities.issue import Issue
from issue_desk.domain.errors import (
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from issue_desk.domain.value_objects.criteria import IssueCriteria
from issue_desk.domain.value_objects.enums import IssueStatus, IssueType

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryIssueRegistry(IssueRegistry):
    def __init__(self, clock: Callable[[], datetime] = utcnow) -> None:
        self._issues: dict[int, Issue] = {}
        self._next_id = 1
        self._clock = clock
        self._lock = threading.Lock()

    def create_issue(
        self,
        transaction_id: str,
        issue_type: IssueType,
        subject: str,
        description: str,
        email: str,
    ) -> Issue:
        transaction_id = (transaction_id or "").strip()
        subject = (subject or "").strip()
        email = (email or "").strip()

        if not transaction_id:
            raise ValidationError("Transaction id must not be blank")
        if not isinstance(issue_type, IssueType):
            raise ValidationError(f"Unknown issue type: {issue_type!r}")
        if not subject:
            raise ValidationError("Issue subject must not be blank")
        if "@" not in email:
            raise ValidationError(f"Invalid reporter email: {email!r}")

        with self._lock:
            issue = Issue(
                id=self._next_id,
                transaction_id=transaction_id,
                issue_type=issue_type,
                subject=subject,
                description=(description or "").strip(),
                email=email,
                created_at=self._clock(),
            )
            self._issues[issue.id] = issue
            self._next_id += 1

        logger.info(
            "Issue %d created: txn=%s type=%s reporter=%s",
            issue.id, issue.transaction_id, issue.issue_type.name, issue.email,
        )
        return issue

    def get_issue(self, issue_id: int) -> Issue:
        with self._lock:
            return self._get(issue_id)

    def set_status(
        self,
        issue_id: int,
        status: IssueStatus,
        resolution: str | None = None,
        agent_id: int | None = None,
        at: datetime | None = None,
    ) -> Issue:
        with self._lock:
            issue = self._get(issue_id)
            if not issue.can_transition_to(status):
                raise InvalidTransitionError(
                    f"Issue {issue_id}: cannot move from {issue.status.name} to {status.name}"
                )

            if status == IssueStatus.ASSIGNED:
                if agent_id is None:
                    raise InvalidTransitionError(
                        f"Issue {issue_id}: ASSIGNED requires an agent"
                    )
                issue.assigned_agent_id = agent_id
            elif status == IssueStatus.RESOLVED:
                text = (resolution or "").strip()
                if not text:
                    raise InvalidTransitionError(
                        f"Issue {issue_id}: RESOLVED requires a resolution"
                    )
                issue.resolution = text
                issue.resolved_at = at or self._clock()

            issue.status = status
            return issue

    def filter(self, criteria: IssueCriteria) -> list[Issue]:
        with self._lock:
            return [i for i in self._issues.values() if criteria.matches(i)]

    def _get(self, issue_id: int) -> Issue:
        issue = self._issues.get(issue_id)
        if issue is None:
            raise NotFoundError(f"Issue {issue_id} not found")
        return issue
