"""Tests for LeastWorkloadPolicy and the policy factory."""

from datetime import datetime, timezone

import pytest

from issue_desk.domain.entities.agent import Agent, WorkLogEntry
from issue_desk.domain.policies.assignment_policy import build_policy
from issue_desk.domain.policies.least_workload import (
    LeastWorkloadPolicy,
    pick_least_loaded,
)
from issue_desk.domain.policies.round_robin import RoundRobinPolicy
from issue_desk.domain.value_objects.enums import IssueType, PolicyName


def _agent(aid: int, resolved: int = 0) -> Agent:
    history = [
        WorkLogEntry(
            issue_id=100 + i, issue_type=IssueType.PAYMENT, subject="s",
            resolution="r", resolved_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        for i in range(resolved)
    ]
    return Agent(
        id=aid, name=f"A{aid}", email=f"a{aid}@desk.com",
        expertise=frozenset({IssueType.PAYMENT}), history=history,
    )


def test_picks_shortest_history():
    """A has 2 resolved issues, B has none: B wins."""
    a, b = _agent(1, resolved=2), _agent(2, resolved=0)
    assert pick_least_loaded([a, b]).id == 2


def test_tie_broken_by_registration_order():
    assert pick_least_loaded([_agent(3), _agent(1), _agent(2)]).id == 1


def test_pick_empty_raises():
    with pytest.raises(ValueError, match="empty candidate list"):
        pick_least_loaded([])


def test_policy_is_stateless_between_calls():
    policy = LeastWorkloadPolicy()
    candidates = [_agent(1), _agent(2)]
    assert policy.select_agent(IssueType.PAYMENT, candidates).id == 1
    assert policy.select_agent(IssueType.PAYMENT, candidates).id == 1


def test_build_policy_by_name():
    assert isinstance(build_policy(PolicyName.LEAST_WORKLOAD), LeastWorkloadPolicy)
    assert isinstance(build_policy("round_robin"), RoundRobinPolicy)


def test_build_policy_unknown_name():
    with pytest.raises(ValueError):
        build_policy("random")
