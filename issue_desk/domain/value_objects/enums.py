"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class IssueType(str, Enum):
    PAYMENT = "Payment Related"
    MUTUAL_FUND = "Mutual Fund Related"
    GOLD = "Gold Related"
    INSURANCE = "Insurance Related"


class IssueStatus(str, Enum):
    OPEN = "Open"
    ASSIGNED = "Assigned"
    RESOLVED = "Resolved"


class Availability(str, Enum):
    FREE = "free"
    BUSY = "busy"


class AssignmentOutcome(str, Enum):
    ASSIGNED = "assigned"
    WAITLISTED = "waitlisted"


class PolicyName(str, Enum):
    LEAST_WORKLOAD = "least_workload"
    ROUND_ROBIN = "round_robin"
