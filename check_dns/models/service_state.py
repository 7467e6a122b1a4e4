"""Monitoring plugin service states.

The numeric values double as process exit codes.
"""

from enum import IntEnum


class ServiceState(IntEnum):
    """Plugin result state per the monitoring plugin exit-code convention."""

    OK = 0  # Address resolved
    WARNING = 1  # Server answered but could not fulfil the request
    CRITICAL = 2  # Server not responding, refused, or domain not found
    UNKNOWN = 3  # Usage errors, spawn failures, plugin timeout


# Severity ranking used when combining states; differs from the exit codes
# because UNKNOWN is less severe than CRITICAL.
_SEVERITY_RANK = {
    ServiceState.OK: 0,
    ServiceState.WARNING: 1,
    ServiceState.UNKNOWN: 2,
    ServiceState.CRITICAL: 3,
}


def max_state(a: ServiceState, b: ServiceState) -> ServiceState:
    """Return the more severe of two states.

    Args:
        a: First state.
        b: Second state.

    Returns:
        ServiceState: The state ranked higher in OK < WARNING < UNKNOWN < CRITICAL.

    Examples:
        >>> max_state(ServiceState.OK, ServiceState.WARNING)
        <ServiceState.WARNING: 1>
        >>> max_state(ServiceState.UNKNOWN, ServiceState.CRITICAL)
        <ServiceState.CRITICAL: 2>
    """
    return a if _SEVERITY_RANK[a] >= _SEVERITY_RANK[b] else b
