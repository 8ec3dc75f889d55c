"""In-memory per-type FIFO waitlist."""

from __future__ import annotations

import threading
from collections import deque

from issue_desk.application.ports.waitlist import Waitlist
from issue_desk.domain.errors import InvariantError
from issue_desk.domain.value_objects.enums import IssueType


class InMemoryWaitlist(Waitlist):
    def __init__(self) -> None:
        self._queues: dict[IssueType, deque[int]] = {t: deque() for t in IssueType}
        # issue id -> queue it sits in, for O(1) membership
        self._index: dict[int, IssueType] = {}
        self._lock = threading.Lock()

    def push(self, issue_type: IssueType, issue_id: int) -> int:
        with self._lock:
            if issue_id in self._index:
                raise InvariantError(
                    f"Issue {issue_id} already waitlisted under {self._index[issue_id].name}"
                )
            queue = self._queues[issue_type]
            queue.append(issue_id)
            self._index[issue_id] = issue_type
            return len(queue)

    def pop(self, issue_type: IssueType) -> int | None:
        with self._lock:
            queue = self._queues[issue_type]
            if not queue:
                return None
            issue_id = queue.popleft()
            del self._index[issue_id]
            return issue_id

    def remove(self, issue_id: int) -> bool:
        with self._lock:
            issue_type = self._index.pop(issue_id, None)
            if issue_type is None:
                return False
            self._queues[issue_type].remove(issue_id)
            return True

    def contains(self, issue_id: int) -> bool:
        with self._lock:
            return issue_id in self._index

    def snapshot(self) -> dict[IssueType, tuple[int, ...]]:
        with self._lock:
            return {t: tuple(q) for t, q in self._queues.items()}
