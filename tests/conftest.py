"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone

import pytest

from issue_desk.adapters.memory.agent_registry import InMemoryAgentRegistry
from issue_desk.adapters.memory.issue_registry import InMemoryIssueRegistry
from issue_desk.adapters.memory.waitlist import InMemoryWaitlist
from issue_desk.application.use_cases.resolution_coordinator import (
    ResolutionCoordinator,
)
from issue_desk.domain.policies.least_workload import LeastWorkloadPolicy
from issue_desk.domain.policies.round_robin import RoundRobinPolicy
from issue_desk.domain.value_objects.enums import IssueType

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def make_coordinator():
    """Factory: make_coordinator(policy=None) -> fresh ResolutionCoordinator."""

    def _make(policy=None) -> ResolutionCoordinator:
        return ResolutionCoordinator(
            agents=InMemoryAgentRegistry(),
            issues=InMemoryIssueRegistry(clock=_fixed_clock),
            waitlist=InMemoryWaitlist(),
            policy=policy or LeastWorkloadPolicy(),
        )

    return _make


@pytest.fixture
def coordinator(make_coordinator):
    return make_coordinator()


@pytest.fixture
def rr_coordinator(make_coordinator):
    return make_coordinator(RoundRobinPolicy())


@pytest.fixture
def open_issue():
    """Factory: open_issue(coordinator, issue_type, txn, email) -> new OPEN issue."""

    def _open(coordinator, issue_type=IssueType.PAYMENT, txn="T1", email="user@test.com"):
        return coordinator.create_issue(
            txn, issue_type, f"{issue_type.name} problem", "details", email
        )

    return _open
