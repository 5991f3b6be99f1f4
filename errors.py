from __future__ import annotations


class NetworkFeasibilityError(Exception):
    """Base class for every error raised by the feasibility core."""


class InvalidGraph(NetworkFeasibilityError, ValueError):
    """Malformed edge list, out-of-range node or invalid weight."""


class InfeasibleTarget(NetworkFeasibilityError, RuntimeError):
    """The requested shortest-path cost cannot be reached."""


class IndexOutOfRange(NetworkFeasibilityError, IndexError):
    """A union-find node id outside ``[0, n)``."""


class InstanceError(NetworkFeasibilityError, ValueError):
    """A problem-instance document is missing data or badly shaped."""
