"""Load agents and issues from CSV, run assignment, print a report.

Usage:
    python -m issue_desk.tools.run_desk
    python -m issue_desk.tools.run_desk --data-dir data --policy round_robin
    python -m issue_desk.tools.run_desk --resolve-all  # resolve until queues drain
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from issue_desk.adapters.csv_loader.loader import load_agents, load_issues
from issue_desk.application.use_cases.resolution_coordinator import (
    ResolutionCoordinator,
)
from issue_desk.config import settings
from issue_desk.domain.errors import DeskError
from issue_desk.domain.value_objects.enums import IssueStatus, PolicyName
from issue_desk.infrastructure.container import build_coordinator

logger = logging.getLogger(__name__)

AUTO_RESOLUTION = "Resolved by run_desk"


def _find_csv(data_dir: Path, keywords: list[str]) -> Path | None:
    """Find the first CSV in *data_dir* whose stem contains one of *keywords*."""
    for csv_file in sorted(data_dir.glob("*.csv")):
        stem = csv_file.stem.lower()
        if any(kw in stem for kw in keywords):
            return csv_file
    return None


def seed(coordinator: ResolutionCoordinator, data_dir: Path) -> dict[str, int]:
    """Register agents, create issues and assign each one. Returns counts."""
    counts = {"agents": 0, "issues": 0, "assigned": 0, "waitlisted": 0, "rejected": 0}

    agent_csv = _find_csv(data_dir, ["agents", "agent"])
    issue_csv = _find_csv(data_dir, ["issues", "issue", "tickets"])
    if not agent_csv:
        raise FileNotFoundError(
            f"No agents CSV found in {data_dir}. Expected something like agents.csv"
        )

    for row in load_agents(agent_csv):
        if row["error"]:
            logger.warning("Skipping agent %s: %s", row["email"] or "<no email>", row["error"])
            counts["rejected"] += 1
            continue
        try:
            coordinator.add_agent(row["name"], row["email"], row["expertise"])
            counts["agents"] += 1
        except DeskError as e:
            logger.warning("Skipping agent %s: %s", row["email"] or "<no email>", e)
            counts["rejected"] += 1

    if not issue_csv:
        logger.warning("No issues CSV found in %s, nothing to assign", data_dir)
        return counts

    for row in load_issues(issue_csv):
        if row["error"]:
            logger.warning("Skipping issue %s: %s", row["transaction_id"] or "<no txn>", row["error"])
            counts["rejected"] += 1
            continue
        try:
            issue = coordinator.create_issue(
                row["transaction_id"], row["issue_type"], row["subject"],
                row["description"], row["email"],
            )
        except DeskError as e:
            logger.warning("Skipping issue %s: %s", row["transaction_id"] or "<no txn>", e)
            counts["rejected"] += 1
            continue
        counts["issues"] += 1
        result = coordinator.assign_issue(issue.id)
        counts["assigned" if result.is_assigned else "waitlisted"] += 1

    return counts


def resolve_all(coordinator: ResolutionCoordinator) -> int:
    """Resolve ASSIGNED issues oldest first until none remain; drains follow each resolve."""
    resolved = 0
    while True:
        assigned = coordinator.filter_issues(status=IssueStatus.ASSIGNED)
        if not assigned:
            return resolved
        result = coordinator.resolve_issue(assigned[0].id, AUTO_RESOLUTION)
        resolved += 1
        if result.drained is not None:
            logger.info(
                "Agent %d picked up waitlisted issue %d",
                result.drained.agent_id, result.drained.issue_id,
            )


def format_report(coordinator: ResolutionCoordinator) -> str:
    lines = ["Agents:"]
    for row in coordinator.workload_report():
        current = f"issue {row.current_issue_id}" if row.current_issue_id else "-"
        lines.append(
            f"  #{row.agent_id} {row.name:<20} {row.availability.value:<5} "
            f"current={current:<10} resolved={row.resolved_count}"
        )
    lines.append("Waitlists:")
    for issue_type, queue in coordinator.waitlist_snapshot().items():
        lines.append(f"  {issue_type.value:<20} {list(queue)}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Assign CSV-seeded issues to agents")
    parser.add_argument("--data-dir", type=Path, default=Path(settings.csv_data_path))
    parser.add_argument(
        "--policy",
        choices=[p.value for p in PolicyName],
        default=settings.assignment_policy.value,
    )
    parser.add_argument("--resolve-all", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level,
        format="%(levelname)s | %(message)s",
    )

    if not args.data_dir.exists():
        logger.error("Data directory not found: %s", args.data_dir)
        return 1

    coordinator = build_coordinator(policy=args.policy)
    try:
        counts = seed(coordinator, args.data_dir)
    except (FileNotFoundError, DeskError) as e:
        logger.error("Seeding failed: %s", e)
        return 1
    logger.info("Seed complete: %s", counts)

    if args.resolve_all:
        logger.info("Resolved %d issues", resolve_all(coordinator))

    print(format_report(coordinator))
    return 0


if __name__ == "__main__":
    sys.exit(main())
