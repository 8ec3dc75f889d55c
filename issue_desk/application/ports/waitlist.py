"""Port interface for per-type FIFO queues of unassigned issues."""

from abc import ABC, abstractmethod

from issue_desk.domain.value_objects.enums import IssueType


class Waitlist(ABC):
    @abstractmethod
    def push(self, issue_type: IssueType, issue_id: int) -> int:
        """Append to the tail of the type's queue and return the new queue length.

        Raises:
            InvariantError: the issue is already waitlisted.
        """
        ...

    @abstractmethod
    def pop(self, issue_type: IssueType) -> int | None:
        """Remove and return the head of the type's queue, or None if empty."""
        ...

    @abstractmethod
    def remove(self, issue_id: int) -> bool:
        """Drop an issue from whichever queue holds it. Returns True if found."""
        ...

    @abstractmethod
    def contains(self, issue_id: int) -> bool:
        ...

    @abstractmethod
    def snapshot(self) -> dict[IssueType, tuple[int, ...]]:
        """Every queue, head first, including empty ones."""
        ...
