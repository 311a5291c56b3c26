"""Error taxonomy and error handling policy helpers.

Every failure raised by the routing pipeline derives from :class:`RoutingError`, so callers can
catch one type at the boundary. All of them are deterministic: the same inputs fail the same way.
"""

from loguru import logger


class RoutingError(Exception):
    """Base class for errors raised while computing a route."""


class InvalidArgumentError(RoutingError, ValueError):
    """Raised for malformed geometry, resolution, units or configuration values."""


class NoFreeNodeError(RoutingError):
    """Raised when every rasterized grid node lies inside an obstacle."""

    def __init__(self, rows: int, cols: int, message: str | None = None):
        """Capture the grid shape of the failed scan.

        Args:
            rows: Number of grid rows scanned.
            cols: Number of grid columns scanned.
            message: Optional override of the default message.
        """
        self.rows = rows
        self.cols = cols
        super().__init__(message or f"All {rows}x{cols} grid nodes are blocked by obstacles")


class NoRouteFoundError(RoutingError):
    """Raised when the path finder cannot connect the endpoint nodes and fallback is disabled."""

    def __init__(self, start, end, reason: str):
        """Capture routing context for easier debugging.

        Args:
            start: Start point of the failed query.
            end: End point of the failed query.
            reason: Human-readable failure description.
        """
        self.start = start
        self.end = end
        self.reason = reason
        super().__init__(
            f"No route found: {reason}\n"
            f"  Start: ({start[0]:.6f}, {start[1]:.6f})\n"
            f"  End: ({end[0]:.6f}, {end[1]:.6f})"
        )


def raise_fatal_with_remedy(error: RoutingError, remedy: str) -> None:
    """Raise ``error`` with an actionable remediation message appended.

    Parameters
    ----------
    error : RoutingError
        Error instance describing the failure
    remedy : str
        Concrete steps to fix the issue

    Raises
    ------
    RoutingError
        Always; the given error with the remedy attached to its message.
    """
    error.args = (f"{error.args[0]}\n\nRemediation: {remedy}", *error.args[1:])
    raise error


def warn_soft_degrade(component: str, issue: str, fallback: str) -> None:
    """Log a warning for a pipeline stage that degrades instead of failing.

    Parameters
    ----------
    component : str
        Name of the degraded stage
    issue : str
        Description of what failed
    fallback : str
        What behavior will occur instead
    """
    logger.warning(
        "Routing stage '{}' issue: {}. Fallback: {}",
        component,
        issue,
        fallback,
    )
