"""AssignmentPolicy — strategy interface for picking one free agent."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from issue_desk.domain.entities.agent import Agent
from issue_desk.domain.value_objects.enums import IssueType, PolicyName


class AssignmentPolicy(ABC):
    name: PolicyName

    @abstractmethod
    def select_agent(self, issue_type: IssueType, candidates: Sequence[Agent]) -> Agent:
        """Pick one agent from a non-empty sequence of FREE candidates.

        The caller filters out busy agents before calling. Implementations
        must be deterministic for the same input and internal state.

        Raises:
            ValueError: if candidates is empty.
        """
        ...


def build_policy(name: PolicyName | str) -> AssignmentPolicy:
    """Construct a fresh policy instance for the given name."""
    # Concrete policies import this module, so bind them late
    from issue_desk.domain.policies.least_workload import LeastWorkloadPolicy
    from issue_desk.domain.policies.round_robin import RoundRobinPolicy

    policy_name = PolicyName(name)
    if policy_name == PolicyName.ROUND_ROBIN:
        return RoundRobinPolicy()
    return LeastWorkloadPolicy()
