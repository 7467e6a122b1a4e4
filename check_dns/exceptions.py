"""Exceptions raised by the DNS check.

Known resolver failure patterns are reported as outcomes, not exceptions.
These cover conditions that end a check without a parsed result.
"""

from check_dns.models.service_state import ServiceState


class CheckError(Exception):
    """Base class for check failures that map directly to a service state."""

    state: ServiceState = ServiceState.UNKNOWN

    def __init__(self, message: str, state: ServiceState | None = None):
        super().__init__(message)
        if state is not None:
            self.state = state


class ParseError(CheckError):
    """Resolver output could not be turned into an address."""

    state = ServiceState.CRITICAL


class SpawnError(CheckError):
    """Resolver process could not be started."""

    state = ServiceState.UNKNOWN


class UsageError(CheckError):
    """Command-line arguments are missing or invalid."""

    state = ServiceState.UNKNOWN
