"""Error taxonomy shared by registries, policies and the coordinator."""


class DeskError(Exception):
    """Base class for every error raised by the issue desk."""


class ValidationError(DeskError):
    """Malformed or duplicate input at creation time."""


class NotFoundError(DeskError):
    """Unknown issue or agent id."""


class InvalidTransitionError(DeskError):
    """Operation attempted against an entity not in the required state."""


class InvariantError(DeskError):
    """Internal consistency violation; unreachable when the coordinator is correct."""
