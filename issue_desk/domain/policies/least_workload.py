"""LeastWorkloadPolicy — the candidate with the shortest work history wins."""

from __future__ import annotations

from collections.abc import Sequence

from issue_desk.domain.entities.agent import Agent
from issue_desk.domain.policies.assignment_policy import AssignmentPolicy
from issue_desk.domain.value_objects.enums import IssueType, PolicyName


def pick_least_loaded(candidates: Sequence[Agent]) -> Agent:
    """Deterministic pick by (history length ASC, registration id ASC).

    Raises:
        ValueError: if candidates list is empty.
    """
    if not candidates:
        raise ValueError("Cannot pick from an empty candidate list")
    return min(candidates, key=lambda a: (a.workload, a.id))


class LeastWorkloadPolicy(AssignmentPolicy):
    name = PolicyName.LEAST_WORKLOAD

    def select_agent(self, issue_type: IssueType, candidates: Sequence[Agent]) -> Agent:
        return pick_least_loaded(candidates)
