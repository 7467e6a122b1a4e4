"""Resolver output scan models.

ClassifiedLine is produced per line, ScanState accumulates across one scan,
and Outcome is the single immutable result handed to the reporter.
"""

from dataclasses import dataclass

from check_dns.models.service_state import ServiceState, max_state


@dataclass(frozen=True)
class ClassifiedLine:
    """Verdict for a single line of resolver output.

    Attributes:
        severity: OK, WARNING or CRITICAL.
        diagnostic: Human-readable explanation (None for OK lines).
    """

    severity: ServiceState
    diagnostic: str | None = None

    def is_ok(self) -> bool:
        """Check if the line carries no failure signal.

        Returns:
            bool: True if severity is OK, False otherwise.
        """
        return self.severity == ServiceState.OK


@dataclass
class ScanState:
    """Mutable accumulator owned by a single scan.

    Invariants:
        - worst_severity never decreases.
        - Once resolved_address is non-empty, stdout scanning stops.
    """

    resolved_address: str | None = None
    worst_severity: ServiceState = ServiceState.OK
    diagnostic_message: str | None = None
    saw_name_marker: bool = False

    def escalate(self, severity: ServiceState, message: str | None) -> None:
        """Raise worst_severity to at least ``severity`` and replace the message.

        Args:
            severity: Severity of the newly observed failure.
            message: Diagnostic text for that failure.
        """
        self.worst_severity = max_state(self.worst_severity, severity)
        self.diagnostic_message = message

    def has_address(self) -> bool:
        return bool(self.resolved_address)


@dataclass(frozen=True)
class Outcome:
    """Final result of one resolution check.

    Attributes:
        severity: Overall service state.
        address: Resolved address, if one was captured.
        message: Diagnostic text (empty when there is nothing to add).
        terminal: True when the resolver's own output settled the result,
            so its exit status and any later timeout no longer matter.
    """

    severity: ServiceState
    address: str | None = None
    message: str = ""
    terminal: bool = False

    @classmethod
    def from_state(cls, state: ScanState) -> "Outcome":
        """Freeze a finished ScanState into an Outcome."""
        return cls(
            severity=state.worst_severity,
            address=state.resolved_address,
            message=state.diagnostic_message or "",
        )

    @classmethod
    def failure(
        cls, severity: ServiceState, message: str, terminal: bool = False
    ) -> "Outcome":
        """Build an Outcome for a failure with no address."""
        return cls(severity=severity, address=None, message=message, terminal=terminal)

    def is_ok(self) -> bool:
        return self.severity == ServiceState.OK
