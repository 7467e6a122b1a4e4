"""Outcome reporting for the plugin's single status line."""

from typing import Tuple

from check_dns.models.scan_result import Outcome
from check_dns.models.service_state import ServiceState


DEFAULT_PROBLEM_TEXT = " Probably a non-existent host/domain"


class OutcomeReporter:
    """Formats a final Outcome as the plugin status line and exit code.

    The text format is consumed by monitoring systems and must stay stable.
    """

    @staticmethod
    def report(outcome: Outcome, elapsed_seconds: int) -> Tuple[int, str]:
        """Format an Outcome.

        Args:
            outcome: Final check result.
            elapsed_seconds: Whole seconds spent on the resolution.

        Returns:
            Tuple[int, str]: (exit code, status line without trailing newline).

        Example:
            >>> OutcomeReporter.report(
            ...     Outcome(severity=ServiceState.OK, address="93.184.216.34"), 0
            ... )
            (0, 'DNS ok - 0 seconds response time, Address(es) is/are 93.184.216.34')
        """
        severity = outcome.severity
        detail = outcome.message or DEFAULT_PROBLEM_TEXT

        if severity == ServiceState.OK:
            text = (
                f"DNS ok - {elapsed_seconds} seconds response time, "
                f"Address(es) is/are {outcome.address}"
            )
        elif severity == ServiceState.WARNING:
            text = f"DNS WARNING - {detail}"
        elif severity == ServiceState.CRITICAL:
            text = f"DNS CRITICAL - {detail}"
        else:
            text = f"DNS problem - {detail}"

        return int(severity), text
