"""Port interface for issue records and their lifecycle status."""

from abc import ABC, abstractmethod
from datetime import datetime

from issue_desk.domain.entities.issue import Issue
from issue_desk.domain.value_objects.criteria import IssueCriteria
from issue_desk.domain.value_objects.enums import IssueStatus, IssueType


class IssueRegistry(ABC):
    @abstractmethod
    def create_issue(
        self,
        transaction_id: str,
        issue_type: IssueType,
        subject: str,
        description: str,
        email: str,
    ) -> Issue:
        """Store a new OPEN issue and return it with its id set."""
        ...

    @abstractmethod
    def get_issue(self, issue_id: int) -> Issue:
        """Raises NotFoundError if the id is unknown."""
        ...

    @abstractmethod
    def set_status(
        self,
        issue_id: int,
        status: IssueStatus,
        resolution: str | None = None,
        agent_id: int | None = None,
        at: datetime | None = None,
    ) -> Issue:
        """Apply one lifecycle transition.

        Raises:
            InvalidTransitionError: the move is not OPEN -> ASSIGNED (with an
                agent) or ASSIGNED -> RESOLVED (with a resolution).
        """
        ...

    @abstractmethod
    def filter(self, criteria: IssueCriteria) -> list[Issue]:
        """Linear scan in insertion order."""
        ...
