"""Wiring — builds adapters and hands them to the coordinator."""

from __future__ import annotations

import logging

from issue_desk.adapters.memory.agent_registry import InMemoryAgentRegistry
from issue_desk.adapters.memory.issue_registry import InMemoryIssueRegistry
from issue_desk.adapters.memory.waitlist import InMemoryWaitlist
from issue_desk.application.use_cases.resolution_coordinator import (
    ResolutionCoordinator,
)
from issue_desk.config import Settings, settings
from issue_desk.domain.policies.assignment_policy import build_policy
from issue_desk.domain.value_objects.enums import PolicyName

logger = logging.getLogger(__name__)


def build_coordinator(
    config: Settings | None = None,
    policy: PolicyName | str | None = None,
) -> ResolutionCoordinator:
    """Fresh coordinator with empty registries.

    *policy* overrides the configured ASSIGNMENT_POLICY. Each call gets its
    own policy instance, so round-robin cursors are never shared.
    """
    config = config or settings
    policy_name = PolicyName(policy or config.assignment_policy)
    logger.info("Building coordinator with %s policy", policy_name.value)
    return ResolutionCoordinator(
        agents=InMemoryAgentRegistry(),
        issues=InMemoryIssueRegistry(),
        waitlist=InMemoryWaitlist(),
        policy=build_policy(policy_name),
    )
