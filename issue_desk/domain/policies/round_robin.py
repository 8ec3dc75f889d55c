"""RoundRobinPolicy — rotate through the agents supporting each issue type."""

from __future__ import annotations

from collections.abc import Sequence

from issue_desk.domain.entities.agent import Agent
from issue_desk.domain.policies.assignment_policy import AssignmentPolicy
from issue_desk.domain.value_objects.enums import IssueType, PolicyName


def pick_next(candidates: Sequence[Agent], cursor: int | None) -> Agent:
    """Cyclic pick from free candidates, continuing after *cursor*.

    1. Sort candidates by registration id, which is their position among
       all agents supporting the type.
    2. Choose the first candidate whose id is greater than *cursor*
       (the id of the previously chosen agent).
    3. If none is left, wrap around to the lowest id.

    Busy agents are absent from *candidates*, so they are skipped
    without losing their place in the rotation.

    Raises:
        ValueError: if candidates list is empty.
    """
    if not candidates:
        raise ValueError("Cannot pick from an empty candidate list")

    ordered = sorted(candidates, key=lambda a: a.id)
    if cursor is None:
        return ordered[0]
    for agent in ordered:
        if agent.id > cursor:
            return agent
    return ordered[0]


class RoundRobinPolicy(AssignmentPolicy):
    """Keeps one cursor per issue type for the lifetime of the instance."""

    name = PolicyName.ROUND_ROBIN

    def __init__(self) -> None:
        self._cursors: dict[IssueType, int] = {}

    def select_agent(self, issue_type: IssueType, candidates: Sequence[Agent]) -> Agent:
        chosen = pick_next(candidates, self._cursors.get(issue_type))
        self._cursors[issue_type] = chosen.id
        return chosen

    def cursor(self, issue_type: IssueType) -> int | None:
        """Id of the agent chosen last for *issue_type*, if any."""
        return self._cursors.get(issue_type)
