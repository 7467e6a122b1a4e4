"""Classification of single lines of resolver output.

Rules are evaluated in order and the first match wins. Several substrings
overlap (a REFUSED answer also contains "server can't find"), so the order of
RULES is significant.
"""

from dataclasses import dataclass
from typing import Callable, Tuple

from check_dns.models.query import Query
from check_dns.models.scan_result import ClassifiedLine
from check_dns.models.service_state import ServiceState


@dataclass(frozen=True)
class ClassificationRule:
    """One recognised resolver message.

    Attributes:
        name: Short identifier used in debug logs.
        matches: Predicate over the raw line.
        severity: State assigned to matching lines.
        diagnostic: Message template; ``{server}`` and ``{query}`` are filled
            from the Query. None for lines that are explicitly ignored.
    """

    name: str
    matches: Callable[[str], bool]
    severity: ServiceState
    diagnostic: str | None = None

    def apply(self, query: Query) -> ClassifiedLine:
        if self.diagnostic is None:
            return ClassifiedLine(severity=self.severity)
        return ClassifiedLine(
            severity=self.severity,
            diagnostic=self.diagnostic.format(
                server=query.server_label, query=query.host_name
            ),
        )


def _contains_any(*needles: str) -> Callable[[str], bool]:
    return lambda line: any(needle in line for needle in needles)


def _is_refused(line: str) -> bool:
    return (
        "Connection refused" in line
        or ("** server can't find" in line and ": REFUSED" in line)
        or "Refused" in line
    )


RULES: Tuple[ClassificationRule, ...] = (
    # nslookup advertising its own deprecation
    ClassificationRule(
        name="deprecation_notice",
        matches=_contains_any(
            "nslookup is deprecated and may be removed from future releases.",
            "Consider using the `dig' or `host' programs instead.",
            "the `-sil[ent]' option to prevent this message from appearing.",
        ),
        severity=ServiceState.OK,
    ),
    ClassificationRule(
        name="timed_out",
        matches=_contains_any("Timed out"),
        severity=ServiceState.WARNING,
        diagnostic="Request timed out at server",
    ),
    ClassificationRule(
        name="no_response",
        matches=_contains_any("No response from server"),
        severity=ServiceState.CRITICAL,
        diagnostic="No response from name server {server}",
    ),
    ClassificationRule(
        name="no_records",
        matches=_contains_any("No records"),
        severity=ServiceState.CRITICAL,
        diagnostic="Name server {server} has no records",
    ),
    ClassificationRule(
        name="refused",
        matches=_is_refused,
        severity=ServiceState.CRITICAL,
        diagnostic="Connection to name server {server} was refused",
    ),
    ClassificationRule(
        name="nxdomain",
        matches=_contains_any("Non-existent", "** server can't find", ": NXDOMAIN"),
        severity=ServiceState.CRITICAL,
        diagnostic="Domain {query} was not found by the server",
    ),
    ClassificationRule(
        name="network_unreachable",
        matches=_contains_any("Network is unreachable"),
        severity=ServiceState.CRITICAL,
        diagnostic="Network is unreachable",
    ),
    ClassificationRule(
        name="server_failure",
        matches=_contains_any("Server failure"),
        severity=ServiceState.CRITICAL,
        diagnostic="Server failure for {server}",
    ),
    ClassificationRule(
        name="format_error",
        matches=_contains_any("Format error"),
        severity=ServiceState.WARNING,
        diagnostic="Format error",
    ),
)

_UNMATCHED = ClassifiedLine(severity=ServiceState.OK)


def match_rule(line: str) -> ClassificationRule | None:
    """Return the first rule matching ``line``, or None."""
    for rule in RULES:
        if rule.matches(line):
            return rule
    return None


def classify(line: str, query: Query) -> ClassifiedLine:
    """Classify one line of resolver output.

    Pure function: no I/O and no state kept between calls, so the same line
    always yields the same result.

    Args:
        line: Raw output line (stdout or stderr, trailing newline allowed).
        query: Query whose server and host name fill the diagnostic.

    Returns:
        ClassifiedLine: Severity and diagnostic of the first matching rule,
        or OK with no diagnostic when nothing matches.

    Examples:
        >>> q = Query(host_name="nosuch.example", dns_server="192.0.2.53")
        >>> classify("*** Timed out waiting for 192.0.2.53", q).diagnostic
        'Request timed out at server'
        >>> classify("Server:\\t\\t192.0.2.53", q).is_ok()
        True
    """
    rule = match_rule(line)
    if rule is None:
        return _UNMATCHED
    return rule.apply(query)
